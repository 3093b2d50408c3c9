"""
Main entry for the farmland linkage project.

This module is intentionally thin:
- argument parsing
- configuration setup
- pipeline orchestration

No matching or business logic lives here.
"""

from __future__ import annotations

import argparse

from farmland_linkage.config import get_config
from farmland_linkage.logging import get_logger, set_debug

from farmland_linkage.core.context import RunContext
from farmland_linkage.core.pipeline import LinkagePipeline
from farmland_linkage.utils import outputs_path

log = get_logger("farmland_linkage.main")


# ---------------------------------------------------------
# CLI Argument Parsing
# ---------------------------------------------------------
def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Farmland registry / ledger linkage"
    )
    parser.add_argument(
        "-f",
        "--features",
        required=True,
        help="Path to registry point GeoJSON",
    )
    parser.add_argument(
        "-l",
        "--ledger",
        help="Path to ledger CSV",
    )
    parser.add_argument(
        "-p",
        "--polygons",
        help="Path to boundary polygon GeoJSON",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=str(outputs_path("linkage.json")),
        help="Final output JSON path",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output",
    )
    return parser


# ---------------------------------------------------------
# Pipeline Runner
# ---------------------------------------------------------
def run(
    features_path: str,
    ledger_path: str | None,
    polygons_path: str | None,
    output_path: str,
    debug_flag: bool,
) -> RunContext:
    """
    Prepare context and execute the linkage pipeline.
    """

    cfg = get_config()
    cfg.debug = bool(debug_flag) or bool(cfg.debug)
    if cfg.debug:
        set_debug(True)

    log.info("Loading registry features: %s", features_path)

    ctx = RunContext(
        config=cfg,
        logger=log,
        features_path=features_path,
        ledger_path=ledger_path,
        polygons_path=polygons_path,
        output_path=output_path,
        debug=cfg.debug,
    )

    pipeline = LinkagePipeline(ctx)
    pipeline.run()

    log.info("Main pipeline complete. Output: %s stats=%s", output_path, ctx.stats)
    return ctx


# ---------------------------------------------------------
# Program Entry Point
# ---------------------------------------------------------
def main() -> None:
    ap = build_arg_parser()
    args = ap.parse_args()

    try:
        run(
            features_path=args.features,
            ledger_path=args.ledger,
            polygons_path=args.polygons,
            output_path=args.output,
            debug_flag=args.debug,
        )
    except Exception as exc:
        log.exception("Unhandled exception in main: %s", exc)
        raise


if __name__ == "__main__":
    main()
