from __future__ import annotations

import time
from pathlib import Path
from typing import Optional

from rich.console import Console

from farmland_linkage.core.session import LinkageSession, SessionSnapshot
from farmland_linkage.exporter import serialize_linkage_to_json_string
from farmland_linkage.loader import load_features, load_ledger_csv, load_polygons
from farmland_linkage.logging import set_debug

console = Console()


def load_session(
    features: Path,
    ledger: Optional[Path] = None,
    polygons: Optional[Path] = None,
    *,
    join: bool = False,
    verbose: bool = False,
) -> SessionSnapshot:
    """
    Load inputs into a fresh session, link, and optionally run the spatial join.
    """
    if verbose:
        set_debug(True)

    t0 = time.perf_counter()

    session = LinkageSession()
    snapshot = session.load(
        features=load_features(features),
        rows=load_ledger_csv(ledger) if ledger else None,
        polygons=load_polygons(polygons) if polygons else None,
    )
    if join:
        snapshot = session.join()

    elapsed = time.perf_counter() - t0

    if verbose:
        console.log(f"Loaded and linked inputs in {elapsed:.2f}s")

    return snapshot


def write_json(
    snapshot: SessionSnapshot,
    *,
    out: Path | None,
    pretty: bool,
):
    """
    Write the linkage export to stdout or file.
    """
    payload = serialize_linkage_to_json_string(snapshot, indent=2 if pretty else None)

    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(payload, encoding="utf-8")
    else:
        print(payload)
