"""
CLI command modules for farmland_linkage.

Each command module defines a single Typer-compatible command function.
"""

from farmland_linkage.cli.commands.address import address_command
from farmland_linkage.cli.commands.join import join_command
from farmland_linkage.cli.commands.link import link_command
from farmland_linkage.cli.commands.stats import stats_command
from farmland_linkage.cli.commands.triage import triage_command

__all__ = [
    "address_command",
    "join_command",
    "link_command",
    "stats_command",
    "triage_command",
]
