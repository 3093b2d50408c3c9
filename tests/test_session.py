# tests/test_session.py

from __future__ import annotations

from conftest import make_feature, make_row, make_square

from farmland_linkage.core.session import LinkageSession, SessionSnapshot


def _features():
    return [
        make_feature("D1", "10", "芳原字東10", lng=133.5, lat=33.5, area="850"),
        make_feature("D2", "11", "芳原字東11", lng=10.0, lat=10.0, area="300"),
    ]


def _rows():
    return [make_row("芳原", "東", "10", sakki="1"), make_row("芳原", "東", "10", sakki="2")]


def test_new_session_is_empty() -> None:
    session = LinkageSession()

    assert session.snapshot.is_empty
    assert session.snapshot.linkage is None


def test_load_returns_new_snapshot_and_links() -> None:
    session = LinkageSession()
    before = session.snapshot

    after = session.load(features=_features(), rows=_rows())

    assert after is not before
    assert before.is_empty
    assert after.linkage is not None
    assert after.is_linked("D1")
    assert [f.daicho_id for f in after.linked_features()] == ["D1"]
    assert [f.daicho_id for f in after.unlinked_features()] == ["D2"]


def test_features_without_ledger_are_all_unlinked() -> None:
    snap = LinkageSession().load(features=_features())

    assert snap.linkage is None
    stats = snap.statistics()
    assert stats.unlinked.count == 2
    assert stats.match_rate == 0.0
    assert snap.organization_statistics() == []


def test_loading_rows_later_relinks() -> None:
    session = LinkageSession()
    session.load(features=_features())

    snap = session.load(rows=_rows())

    assert len(snap.features) == 2
    assert snap.linkage.rows_for("D1") == tuple(_rows())


def test_join_is_deferred_until_requested() -> None:
    session = LinkageSession()
    square = make_square("P1", 133.5, 33.5)

    loaded = session.load(features=_features(), polygons=[square])
    joined = session.join()

    assert loaded.spatial is None
    assert joined.polygon_for("D1") == square
    assert joined.polygon_for("D2") is None
    assert session.join() is joined


def test_reloading_features_clears_spatial_join() -> None:
    session = LinkageSession()
    session.load(features=_features(), polygons=[make_square("P1", 133.5, 33.5)])
    session.join()

    snap = session.load(features=_features())

    assert snap.spatial is None
    assert len(snap.polygons) == 1


def test_join_without_polygons_is_a_no_op() -> None:
    session = LinkageSession()
    loaded = session.load(features=_features())

    assert session.join() is loaded
    assert loaded.spatial is None


def test_details_and_statistics_from_snapshot() -> None:
    snap = LinkageSession().load(features=_features(), rows=_rows())

    details = snap.details("D1", sakki="2")
    stats = snap.statistics()

    assert details.ownership.sakki == "2"
    assert stats.linked.area == 850
    assert stats.ledger_rows == 2
    assert stats.match_rate == 100.0


def test_reset_starts_over() -> None:
    session = LinkageSession()
    loaded = session.load(features=_features(), rows=_rows())

    reset = session.reset()

    assert reset == SessionSnapshot()
    assert reset.is_empty
    assert loaded.linkage is not None
