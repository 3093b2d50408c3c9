
from __future__ import annotations

import typer
from rich.console import Console

from farmland_linkage.cli.commands.address import address_command
from farmland_linkage.cli.commands.join import join_command
from farmland_linkage.cli.commands.link import link_command
from farmland_linkage.cli.commands.stats import stats_command
from farmland_linkage.cli.commands.triage import triage_command

app = typer.Typer(
    name="farmland-linkage",
    help="Farmland registry / ledger linkage and spatial join",
    add_completion=False,
)

console = Console()

app.command("link")(link_command)
app.command("stats")(stats_command)
app.command("join")(join_command)
app.command("triage")(triage_command)
app.command("address")(address_command)


def main():
    app()


if __name__ == "__main__":
    main()
