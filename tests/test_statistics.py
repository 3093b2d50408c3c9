# tests/test_statistics.py

from __future__ import annotations

import pytest

from conftest import make_feature, make_row

from farmland_linkage.matching import link_records
from farmland_linkage.stats import (
    ORGANIZATION_COLORS,
    compute_statistics,
    farmland_details,
    format_area,
    organization_colors,
    organization_statistics,
    parse_area,
)


@pytest.fixture
def features():
    return [
        make_feature("D1", "10", "芳原字東10", area="850"),
        make_feature("D2", "11", "芳原字東11", area="2500㎡"),
        make_feature("D3", "12", "芳原字東12", area="不明"),
    ]


@pytest.fixture
def rows():
    return [
        make_row("芳原", "東", "10", sakki="1", org="春野営農組合"),
        make_row("芳原", "東", "10", sakki="2", org="春野営農組合"),
        make_row("芳原", "東", "11", sakki="1", org="芳原ファーム"),
        make_row("弘岡", "北", "99", org="弘岡生産組合"),
    ]


def test_parse_area() -> None:
    assert parse_area("850") == 850
    assert parse_area(" 2500㎡") == 2500
    assert parse_area("不明") == 0
    assert parse_area("") == 0
    assert parse_area(None) == 0
    assert parse_area(1200) == 1200


def test_compute_statistics(features, rows) -> None:
    result = link_records(features, rows)

    stats = compute_statistics(features, result)

    assert stats.total == 3
    assert stats.linked.count == 2
    assert stats.linked.area == 850 + 2500
    assert stats.unlinked.count == 1
    assert stats.unlinked.area == 0
    assert stats.linked.percentage == pytest.approx(200 / 3)
    assert stats.linked.percentage + stats.unlinked.percentage == pytest.approx(100)
    assert stats.ledger_rows == 4
    assert stats.match_rate == pytest.approx(75.0)


def test_statistics_with_nothing_loaded() -> None:
    result = link_records([], [])

    stats = compute_statistics([], result)

    assert stats.total == 0
    assert stats.linked.percentage == 0.0
    assert stats.unlinked.percentage == 0.0
    assert stats.match_rate == 0.0


def test_statistics_with_empty_ledger(features) -> None:
    stats = compute_statistics(features, link_records(features, []))

    assert stats.unlinked.count == 3
    assert stats.match_rate == 0.0


def test_organization_statistics_credit_first_row(features, rows) -> None:
    result = link_records(features, rows)

    orgs = organization_statistics(features, result)

    assert [(o.organization_name, o.count, o.area) for o in orgs] == [
        ("春野営農組合", 1, 850),
        ("芳原ファーム", 1, 2500),
    ]
    assert orgs[0].color == ORGANIZATION_COLORS[0]
    assert orgs[1].color == ORGANIZATION_COLORS[1]


def test_organization_colors_cycle() -> None:
    features = [make_feature(f"D{i}", str(i), f"芳原字東{i}") for i in range(10)]
    rows = [make_row("芳原", "東", str(i), org=f"org{i}") for i in range(10)]

    colors = organization_colors(link_records(features, rows))

    assert len(colors) == 10
    assert colors["org8"] == ORGANIZATION_COLORS[0]
    assert colors["org9"] == ORGANIZATION_COLORS[1]


def test_farmland_details_by_season(features, rows) -> None:
    result = link_records(features, rows)

    default = farmland_details(features, result, "D1")
    second = farmland_details(features, result, "D1", sakki="2")
    unlinked = farmland_details(features, result, "D3")

    assert default.is_linked
    assert default.ownership == rows[0]
    assert default.ownership_list == (rows[0], rows[1])
    assert second.ownership == rows[1]
    assert not unlinked.is_linked
    assert unlinked.ownership is None
    assert farmland_details(features, result, "missing") is None


def test_format_area() -> None:
    assert format_area("850") == "850㎡ (257.1坪)"
    assert format_area("2500") == "2500㎡ (2.52反)"
    assert format_area("12340") == "1.234ha"
    assert format_area("不明") == "不明"
    assert format_area(None) == "不明"
