"""
CLI package for farmland_linkage.

Provides the Typer application entrypoint and shared CLI utilities.
"""

from farmland_linkage.cli.app import app, main

__all__ = [
    "app",
    "main",
]
