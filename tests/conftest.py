import sys
from pathlib import Path

import pytest

# Ensure the project src directory is on sys.path for test imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if SRC_PATH not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from farmland_linkage.models import BoundaryPolygon, LedgerRow, RegistryFeature  # noqa: E402
from farmland_linkage.utils import tests_data_path  # noqa: E402


def make_feature(daicho_id, tiban, address, lng=133.5, lat=33.5, area="100"):
    return RegistryFeature(
        daicho_id=daicho_id,
        longitude=lng,
        latitude=lat,
        address=address,
        tiban=tiban,
        area_on_registry=area,
    )


def make_row(oaza, koaza, chiban, edaban=None, sakki=None, org="組合A"):
    return LedgerRow(
        organization_name=org,
        full_address=f"{oaza}{chiban}",
        oaza=oaza,
        koaza=koaza,
        chiban=chiban,
        edaban=edaban,
        sakki=sakki,
    )


def make_square(uuid, lng, lat, half=0.01):
    return BoundaryPolygon(
        polygon_uuid=uuid,
        ring=(
            (lng - half, lat - half),
            (lng + half, lat - half),
            (lng + half, lat + half),
            (lng - half, lat + half),
            (lng - half, lat - half),
        ),
    )


@pytest.fixture
def registry_path() -> Path:
    return tests_data_path("registry.geojson")


@pytest.fixture
def ledger_path() -> Path:
    return tests_data_path("ledger.csv")


@pytest.fixture
def polygons_path() -> Path:
    return tests_data_path("polygons.geojson")
