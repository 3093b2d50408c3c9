from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from farmland_linkage.cli.utils import load_session

console = Console()


def join_command(
    features: Path = typer.Argument(..., exists=True, readable=True, help="Registry point GeoJSON"),
    polygons: Path = typer.Argument(..., exists=True, readable=True, help="Boundary polygon GeoJSON"),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
):
    """
    Attach boundary polygons to registry points and summarize the join.
    """
    snapshot = load_session(features, polygons=polygons, join=True, verbose=verbose)
    spatial = snapshot.spatial

    attached = spatial.attached_count if spatial else 0
    console.print(f"Spatial join: {attached}/{len(snapshot.features)} features matched with polygons")

    if spatial and spatial.skipped_polygons:
        table = Table(title="Skipped polygons")
        table.add_column("polygon_uuid", style="bold")
        table.add_column("Reason")
        for uuid, reason in spatial.skipped_polygons:
            table.add_row(uuid, reason)
        console.print(table)
