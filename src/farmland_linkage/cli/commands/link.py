from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from farmland_linkage.cli.utils import load_session, write_json

console = Console()


def link_command(
    features: Path = typer.Argument(..., exists=True, readable=True, help="Registry point GeoJSON"),
    ledger: Path = typer.Argument(..., exists=True, readable=True, help="Ledger CSV"),
    polygons: Optional[Path] = typer.Option(
        None,
        "--polygons",
        "-p",
        exists=True,
        readable=True,
        help="Boundary polygon GeoJSON; runs the spatial join as well",
    ),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write output to file instead of stdout",
    ),
    pretty: bool = typer.Option(
        False,
        "--pretty",
        help="Pretty-print JSON",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
):
    """
    Link registry features to ledger rows and export the tables as JSON.
    """
    snapshot = load_session(
        features,
        ledger,
        polygons,
        join=polygons is not None,
        verbose=verbose,
    )

    if verbose:
        console.log("Exporting JSON")

    write_json(snapshot, out=out, pretty=pretty)

    if verbose:
        console.log("Export complete")
