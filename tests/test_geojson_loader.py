# tests/test_geojson_loader.py

from __future__ import annotations

import json

import pytest

from farmland_linkage.core.exceptions import LoadError
from farmland_linkage.loader import (
    feature_from_geojson,
    features_from_geojson,
    load_features,
    load_polygons,
    polygons_from_geojson,
)


def _point(props, coords=(133.5, 33.5)):
    return {"type": "Feature", "geometry": {"type": "Point", "coordinates": list(coords)}, "properties": props}


def _polygon(geometry, props=None, **extra):
    item = {"type": "Feature", "geometry": geometry, "properties": props or {}}
    item.update(extra)
    return item


SQUARE = [[[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]]


def test_load_fixture_features(registry_path) -> None:
    features = load_features(registry_path)

    assert [f.daicho_id for f in features] == ["F1", "F2", "F3"]
    first = features[0]
    assert first.point == (133.5, 33.5)
    assert first.tiban == "1234"
    assert first.area_on_registry == "850"
    assert first.land_class == "田"
    assert first.farmer_hash == "h-001"
    assert first.properties == {"PinKey": "k1"}
    assert features[1].farmer_hash == ""


def test_feature_without_id_or_point_is_skipped() -> None:
    assert feature_from_geojson(_point({"Address": "x"})) is None
    assert feature_from_geojson(_polygon({"type": "Polygon", "coordinates": SQUARE}, {"DaichoId": "X"})) is None
    assert feature_from_geojson(_point({"DaichoId": "X"}, coords=())) is None


def test_numeric_properties_become_text() -> None:
    feature = feature_from_geojson(_point({"DaichoId": 42, "AreaOnRegistry": 850, "Tiban": None}))

    assert feature.daicho_id == "42"
    assert feature.area_on_registry == "850"
    assert feature.tiban == ""


def test_single_feature_document() -> None:
    features = features_from_geojson(_point({"DaichoId": "A"}))
    assert [f.daicho_id for f in features] == ["A"]


def test_bad_documents_raise_load_error() -> None:
    with pytest.raises(LoadError):
        features_from_geojson([])
    with pytest.raises(LoadError):
        features_from_geojson({"type": "FeatureCollection"})


def test_invalid_json_raises_load_error(tmp_path) -> None:
    path = tmp_path / "broken.geojson"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(LoadError):
        load_features(path)


def test_bom_prefixed_geojson(tmp_path) -> None:
    path = tmp_path / "bom.geojson"
    doc = {"type": "FeatureCollection", "features": [_point({"DaichoId": "A"})]}
    path.write_text("\ufeff" + json.dumps(doc), encoding="utf-8")

    assert load_features(path)[0].daicho_id == "A"


def test_load_fixture_polygons(polygons_path) -> None:
    polygons = load_polygons(polygons_path)

    assert [p.polygon_uuid for p in polygons] == ["P-bowtie", "P1", "P2"]
    assert polygons[1].ring[0] == (133.49, 33.49)
    assert len(polygons[2].ring) == 5


def test_polygon_identifier_fallbacks() -> None:
    polygons = polygons_from_geojson(
        {
            "type": "FeatureCollection",
            "features": [
                _polygon({"type": "Polygon", "coordinates": SQUARE}, id="feature-id"),
                _polygon({"type": "Polygon", "coordinates": SQUARE}),
            ],
        }
    )

    assert [p.polygon_uuid for p in polygons] == ["feature-id", "polygon-1"]


def test_unusable_polygon_geometries_are_skipped() -> None:
    polygons = polygons_from_geojson(
        {
            "type": "FeatureCollection",
            "features": [
                _polygon({"type": "LineString", "coordinates": [[0, 0], [1, 1]]}, {"polygon_uuid": "line"}),
                _polygon({"type": "MultiPolygon", "coordinates": [SQUARE, SQUARE]}, {"polygon_uuid": "multi"}),
                _polygon({"type": "Polygon", "coordinates": []}, {"polygon_uuid": "empty"}),
                _polygon({"type": "Polygon", "coordinates": SQUARE}, {"polygon_uuid": "ok"}),
            ],
        }
    )

    assert [p.polygon_uuid for p in polygons] == ["ok"]
