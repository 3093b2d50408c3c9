from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from farmland_linkage.normalization import analyze_address, normalize_text

console = Console()


def address_command(
    address: str = typer.Argument(..., help="Free-text registry address"),
):
    """
    Decompose an address into prefecture / city / town / sub-district / lot.
    """
    components = analyze_address(address)

    table = Table(title=normalize_text(address))
    table.add_column("Component", style="bold")
    table.add_column("Value")

    for name, value in components.to_dict().items():
        table.add_row(name, value if value is not None else "-")

    console.print(table)
