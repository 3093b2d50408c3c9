# tests/test_ledger_loader.py

from __future__ import annotations

import pytest

from farmland_linkage.core.exceptions import LoadError
from farmland_linkage.loader import load_ledger_csv, parse_ledger_csv, row_from_fields

HEADER = "組織名,住所,大字,小字,地番,枝番,分割1,分割2,作期,作物,品種\n"


def test_load_fixture_ledger(ledger_path) -> None:
    rows = load_ledger_csv(ledger_path)

    assert len(rows) == 4
    first = rows[0]
    assert first.organization_name == "春野営農組合"
    assert first.oaza == "芳原"
    assert first.koaza == "東"
    assert first.chiban == "1234"
    assert first.edaban is None
    assert first.sakki == "1"
    assert first.crop == "水稲"
    assert first.variety == "コシヒカリ"

    assert rows[2].lot == "1234-1"
    assert rows[3].variety is None


def test_header_line_is_always_skipped() -> None:
    text = "org,addr,oaza,koaza,1\n"
    assert parse_ledger_csv(text) == []


def test_short_lines_are_dropped() -> None:
    text = HEADER + "a,b,c\n組合,住所,芳原,東,10\n"

    rows = parse_ledger_csv(text)

    assert len(rows) == 1
    assert rows[0].chiban == "10"


def test_blank_lines_are_ignored() -> None:
    text = HEADER + "\n組合,住所,芳原,東,10\n\n"
    assert len(parse_ledger_csv(text)) == 1


def test_byte_order_mark_is_stripped(tmp_path) -> None:
    path = tmp_path / "ledger.csv"
    path.write_text("\ufeff" + HEADER + "組合,住所,芳原,東,10,2\n", encoding="utf-8")

    rows = load_ledger_csv(path)

    assert rows[0].organization_name == "組合"
    assert rows[0].lot == "10-2"


def test_quoted_field_with_comma() -> None:
    text = HEADER + '"組合,第二",住所,芳原,東,10\n'
    assert parse_ledger_csv(text)[0].organization_name == "組合,第二"


def test_fields_are_stripped_and_empties_become_none() -> None:
    row = row_from_fields([" 組合 ", "住所", " 芳原", "東 ", " 10 ", " ", "", "", "1"])

    assert row.organization_name == "組合"
    assert row.oaza == "芳原"
    assert row.chiban == "10"
    assert row.edaban is None
    assert row.bunkatsu1 is None
    assert row.sakki == "1"
    assert row.crop is None


def test_row_from_too_few_fields() -> None:
    assert row_from_fields(["a", "b", "c", "d"]) is None


def test_missing_file_raises_load_error(tmp_path) -> None:
    with pytest.raises(LoadError):
        load_ledger_csv(tmp_path / "nope.csv")
