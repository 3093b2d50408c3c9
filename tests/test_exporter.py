# tests/test_exporter.py

from __future__ import annotations

import json

import pytest

from farmland_linkage.core.session import LinkageSession
from farmland_linkage.exporter import (
    build_linkage_dict,
    export_linkage_json,
    serialize_linkage_to_json_string,
    to_json_compatible,
)
from farmland_linkage.loader import load_features, load_ledger_csv, load_polygons


@pytest.fixture
def snapshot(registry_path, ledger_path, polygons_path):
    session = LinkageSession()
    session.load(
        features=load_features(registry_path),
        rows=load_ledger_csv(ledger_path),
        polygons=load_polygons(polygons_path),
    )
    return session.join()


def test_linkage_table(snapshot) -> None:
    data = build_linkage_dict(snapshot)

    assert list(data["linkage"]) == ["F1", "F2"]
    assert [row["sakki"] for row in data["linkage"]["F1"]] == ["1", "2"]
    assert data["linkage"]["F2"][0]["organization_name"] == "芳原ファーム"
    assert data["unmatched_features"] == ["F3"]
    assert [row["oaza"] for row in data["unmatched_rows"]] == ["弘岡"]


def test_counts_and_statistics(snapshot) -> None:
    data = build_linkage_dict(snapshot)

    assert data["counts"] == {"features": 3, "ledger_rows": 4, "polygons": 3}
    assert data["statistics"]["linked"]["count"] == 2
    assert data["statistics"]["match_rate"] == pytest.approx(75.0)
    assert data["summary"]["unique_row_matches"] == 3
    assert [o["organization_name"] for o in data["organizations"]] == ["春野営農組合", "芳原ファーム"]


def test_spatial_join_table(snapshot) -> None:
    data = build_linkage_dict(snapshot)

    assert data["spatial_join"] == {"F1": "P1", "F2": "P2", "F3": None}
    assert [s["polygon_uuid"] for s in data["skipped_polygons"]] == ["P-bowtie"]


def test_snapshot_without_ledger(registry_path) -> None:
    snap = LinkageSession().load(features=load_features(registry_path))

    data = build_linkage_dict(snap)

    assert data["linkage"] == {}
    assert data["unmatched_features"] == ["F1", "F2", "F3"]
    assert "spatial_join" not in data


def test_json_string_keeps_japanese_text(snapshot) -> None:
    text = serialize_linkage_to_json_string(snapshot)

    assert "春野営農組合" in text
    assert json.loads(text)["counts"]["features"] == 3


def test_export_writes_file(snapshot, tmp_path) -> None:
    out = tmp_path / "nested" / "linkage.json"

    export_linkage_json(snapshot, out)

    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["unmatched_features"] == ["F3"]


def test_to_json_compatible_conversions() -> None:
    assert to_json_compatible((1, "a", None)) == [1, "a", None]
    assert to_json_compatible({1: frozenset()}) == {"1": []}
