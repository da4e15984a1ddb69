from typing import NamedTuple, Optional

from .geo import bearing


class Sector(NamedTuple):
    name: str
    start_deg: float  # inclusive
    end_deg: float  # exclusive
    field: str  # Antenna attribute holding the sector's cell id


# Business rule: three fixed 120 degree sectors measured clockwise from north.
# Not derived from real antenna azimuths.
SECTORS = (
    Sector("A", 0.0, 120.0, "cell_id_A"),
    Sector("B", 120.0, 240.0, "cell_id_B"),
    Sector("C", 240.0, 360.0, "cell_id_C"),
)


def sector_for_bearing(brng: float) -> Sector:
    for sector in SECTORS:
        if sector.start_deg <= brng < sector.end_deg:
            return sector
    # NaN bearings (degenerate input) fall through to the last sector
    return SECTORS[-1]


def cell_id_for_bearing(antenna, brng: float) -> Optional[str]:
    return getattr(antenna, sector_for_bearing(brng).field, None)


def resolve_cell_id(antenna, sample_lat: float, sample_lon: float) -> Optional[str]:
    """
    Cell id of the antenna sector facing the sample, or None when that
    sector has no cell configured.
    """
    brng = bearing(antenna.latitude, antenna.longitude, sample_lat, sample_lon)
    return cell_id_for_bearing(antenna, brng)
