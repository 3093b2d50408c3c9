from __future__ import annotations

from farmland_linkage.core.context import RunContext
from farmland_linkage.core.exceptions import PipelineError
from farmland_linkage.core.session import LinkageSession, SessionSnapshot
from farmland_linkage.exporter import export_linkage_json
from farmland_linkage.loader import load_features, load_ledger_csv, load_polygons


class LinkagePipeline:
    """
    Orchestrates load -> link -> (join) -> export.
    No business logic lives here.
    """

    def __init__(self, context: RunContext):
        self.ctx = context
        self.log = context.logger

    def run(self) -> SessionSnapshot:
        self.log.info("Pipeline starting")

        try:
            session = LinkageSession()
            features = load_features(self.ctx.features_path)
            rows = load_ledger_csv(self.ctx.ledger_path) if self.ctx.ledger_path else []
            polygons = load_polygons(self.ctx.polygons_path) if self.ctx.polygons_path else None

            snapshot = session.load(features=features, rows=rows, polygons=polygons)
            if polygons:
                snapshot = session.join()

            stats = snapshot.statistics()
            self.ctx.stats.update(
                {
                    "features": stats.total,
                    "linked": stats.linked.count,
                    "ledger_rows": stats.ledger_rows,
                    "match_rate": stats.match_rate,
                }
            )
            if snapshot.spatial is not None:
                self.ctx.stats["polygons_attached"] = snapshot.spatial.attached_count
                self.ctx.errors.extend(snapshot.spatial.skipped_polygons)

            if self.ctx.output_path:
                export_linkage_json(snapshot, self.ctx.output_path)

            self.log.info("Pipeline completed successfully")

            return snapshot

        except Exception as exc:
            self.log.exception("Pipeline execution failed")
            raise PipelineError(str(exc)) from exc
