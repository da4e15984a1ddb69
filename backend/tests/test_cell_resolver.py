import pytest

from speedtest_backend.models import Antenna
from speedtest_backend.services.cell_resolver import (
    SECTORS,
    cell_id_for_bearing,
    resolve_cell_id,
    sector_for_bearing,
)
from speedtest_backend.services.geo import bearing


@pytest.fixture
def antenna():
    return Antenna(
        nom="BTS_ALG_01",
        latitude=36.75,
        longitude=3.04,
        cell_id_A="A1",
        cell_id_B="B1",
        cell_id_C="C1",
    )


# (lat, lon, expected bearing from the antenna, expected cell)
SAMPLES = [
    (36.76, 3.04, 0.0, "A1"),
    (36.74, 3.0472, 150.0, "B1"),
    (36.755, 3.02919, 300.0, "C1"),
]


@pytest.mark.parametrize("lat,lon,expected_bearing,expected_cell", SAMPLES)
def test_sample_resolves_to_sector_cell(antenna, lat, lon, expected_bearing, expected_cell):
    assert bearing(antenna.latitude, antenna.longitude, lat, lon) == pytest.approx(
        expected_bearing, abs=0.5
    )
    assert resolve_cell_id(antenna, lat, lon) == expected_cell


def test_unconfigured_sector_yields_none(antenna):
    antenna.cell_id_C = None
    assert resolve_cell_id(antenna, 36.755, 3.02919) is None
    # other sectors unaffected
    assert resolve_cell_id(antenna, 36.76, 3.04) == "A1"


def test_sample_on_the_antenna_falls_in_sector_a(antenna):
    assert resolve_cell_id(antenna, 36.75, 3.04) == "A1"


@pytest.mark.parametrize(
    "brng,name",
    [
        (0.0, "A"),
        (119.999, "A"),
        (120.0, "B"),
        (239.999, "B"),
        (240.0, "C"),
        (359.999, "C"),
    ],
)
def test_sector_boundaries_are_half_open(brng, name):
    assert sector_for_bearing(brng).name == name


def test_sector_table_partitions_the_circle():
    assert SECTORS[0].start_deg == 0.0
    assert SECTORS[-1].end_deg == 360.0
    for prev, nxt in zip(SECTORS, SECTORS[1:]):
        assert prev.end_deg == nxt.start_deg
    assert [s.field for s in SECTORS] == ["cell_id_A", "cell_id_B", "cell_id_C"]


def test_cell_id_for_bearing_reads_sector_field(antenna):
    assert cell_id_for_bearing(antenna, 130.0) == "B1"
    assert cell_id_for_bearing(antenna, 250.0) == "C1"
