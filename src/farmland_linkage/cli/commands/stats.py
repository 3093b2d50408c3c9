from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from farmland_linkage.cli.utils import load_session
from farmland_linkage.stats import format_area

console = Console()


def stats_command(
    features: Path = typer.Argument(..., exists=True, readable=True, help="Registry point GeoJSON"),
    ledger: Path = typer.Argument(..., exists=True, readable=True, help="Ledger CSV"),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
):
    """
    Show linkage statistics and the per-organization breakdown.
    """
    snapshot = load_session(features, ledger, verbose=verbose)
    stats = snapshot.statistics()

    table = Table(title="Linkage Statistics")
    table.add_column("Group", style="bold")
    table.add_column("Parcels", justify="right")
    table.add_column("Area", justify="right")
    table.add_column("Share", justify="right")

    table.add_row("Linked", str(stats.linked.count), format_area(stats.linked.area), f"{stats.linked.percentage:.1f}%")
    table.add_row("Unlinked", str(stats.unlinked.count), format_area(stats.unlinked.area), f"{stats.unlinked.percentage:.1f}%")
    table.add_row("Total", str(stats.total), "", "")

    console.print(table)
    console.print(f"Ledger rows: {stats.ledger_rows}  match rate: {stats.match_rate:.1f}%")

    orgs = snapshot.organization_statistics()
    if not orgs:
        return

    org_table = Table(title="Organizations")
    org_table.add_column("Organization", style="bold")
    org_table.add_column("Parcels", justify="right")
    org_table.add_column("Area", justify="right")

    for org in orgs:
        org_table.add_row(Text(org.organization_name, style=org.color), str(org.count), format_area(org.area))

    console.print(org_table)
