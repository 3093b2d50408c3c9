from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from farmland_linkage.config import get_config
from farmland_linkage.loader import load_features, load_ledger_csv
from farmland_linkage.logging import set_debug
from farmland_linkage.matching.flexible import FlexibleLinkageEngine, analyze_results

console = Console()


def triage_command(
    features: Path = typer.Argument(..., exists=True, readable=True, help="Registry point GeoJSON"),
    ledger: Path = typer.Argument(..., exists=True, readable=True, help="Ledger CSV"),
    threshold: Optional[float] = typer.Option(
        None,
        "--threshold",
        "-t",
        help="Sub-district similarity threshold (0-1); defaults to config",
    ),
    allow_missing_oaza: bool = typer.Option(
        False,
        "--allow-missing-oaza",
        help="Give partial credit when the district is not in the address",
    ),
    limit: int = typer.Option(
        20,
        "--limit",
        "-n",
        help="Rows to list in the result table (0 for none)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
):
    """
    Run the scored best-match pass over the ledger and summarize it.
    """
    if verbose:
        set_debug(True)

    cfg = get_config()
    options = cfg.matching_options()
    overrides = {}
    if threshold is not None:
        overrides["similarity_threshold"] = threshold
    if allow_missing_oaza:
        overrides["allow_missing_oaza"] = True
    if overrides:
        options = replace(options, **overrides)

    engine = FlexibleLinkageEngine(cfg.scoring_policy())
    batch = engine.batch_match(load_features(features), load_ledger_csv(ledger), options)
    analysis = analyze_results(batch.results)

    console.print(
        f"Flexible match: {batch.matched_count}/{batch.total_rows} ledger rows "
        f"({batch.match_rate:.1f}%)"
    )

    dist = Table(title="Score distribution")
    dist.add_column("Bucket", style="bold")
    dist.add_column("Rows", justify="right")
    for bucket, count in analysis.score_distribution.items():
        dist.add_row(bucket, str(count))
    console.print(dist)

    if analysis.reason_counts:
        reasons = Table(title="Reasons")
        reasons.add_column("Reason", style="bold")
        reasons.add_column("Count", justify="right")
        for reason, count in sorted(analysis.reason_counts.items(), key=lambda kv: -kv[1]):
            reasons.add_row(reason, str(count))
        console.print(reasons)

    if limit <= 0:
        return

    rows = Table(title="Results")
    rows.add_column("Ledger address")
    rows.add_column("DaichoId")
    rows.add_column("Score", justify="right")
    rows.add_column("Reasons")
    for entry in batch.results[:limit]:
        rows.add_row(
            entry.row.full_address,
            entry.feature.daicho_id if entry.feature else "-",
            f"{entry.score:.1f}",
            ", ".join(entry.reasons),
        )
    console.print(rows)

