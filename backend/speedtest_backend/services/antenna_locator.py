import math
import numbers
from typing import NamedTuple, Optional, Sequence, Tuple

import numpy as np

from ..config import BTS_FALLBACK_LIMIT, BTS_SEARCH_RANGE_DEG
from ..errors import InvalidCoordinates
from .cell_resolver import cell_id_for_bearing
from .geo import bearing, distance_meters


class NearestAntenna(NamedTuple):
    antenna: object
    distance_m: float


class CellMatch(NamedTuple):
    antenna: object
    distance_m: float
    bearing: float
    cell_id: Optional[str]


def validate_coordinates(lat, lon) -> Tuple[float, float]:
    """
    Return (lat, lon) as floats, or raise InvalidCoordinates if either
    value is not a finite number. Numeric strings are rejected too; parse
    them before calling.
    """
    for name, value in (("latitude", lat), ("longitude", lon)):
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise InvalidCoordinates(f"{name} must be a number, got {value!r}")
        if not math.isfinite(value):
            raise InvalidCoordinates(f"{name} must be finite, got {value!r}")
    return float(lat), float(lon)


def nearest_antenna(lat: float, lon: float, antennas: Sequence) -> Optional[NearestAntenna]:
    """
    Brute-force nearest antenna by haversine distance.

    Ties go to whichever antenna comes first in `antennas` (np.argmin
    returns the first minimum). Antennas with non-finite coordinates are
    never picked. Returns None if nothing usable is left.
    """
    if not antennas:
        return None

    lats = np.array([a.latitude for a in antennas], dtype=float)
    lons = np.array([a.longitude for a in antennas], dtype=float)

    with np.errstate(invalid="ignore"):
        dists = distance_meters(lat, lon, lats, lons)
    dists = np.where(np.isfinite(dists), dists, np.inf)

    idx = int(np.argmin(dists))
    if not np.isfinite(dists[idx]):
        return None

    return NearestAntenna(antennas[idx], float(dists[idx]))


class AntennaLocator:
    """
    Nearest-BTS lookup over an antenna catalog.

    `catalog` is anything exposing query_antennas_in_box() and
    query_antennas_up_to() (see speedtest_backend.store.SqlStore). Lookups first
    look inside a +/- box_degrees rectangle in degree space; when that box
    is empty they fall back to the first `fallback_limit` catalog rows.

    The box is not a true radius: a degree of longitude shrinks with
    cos(latitude), so the box narrows toward the poles.
    """

    def __init__(
        self,
        catalog,
        box_degrees: float = BTS_SEARCH_RANGE_DEG,
        fallback_limit: int = BTS_FALLBACK_LIMIT,
    ):
        self.catalog = catalog
        self.box_degrees = box_degrees
        self.fallback_limit = fallback_limit

    def locate(self, lat, lon) -> Optional[NearestAntenna]:
        lat, lon = validate_coordinates(lat, lon)

        r = self.box_degrees
        candidates = self.catalog.query_antennas_in_box(lat - r, lat + r, lon - r, lon + r)

        if not candidates:
            candidates = self.catalog.query_antennas_up_to(self.fallback_limit)
            if not candidates:
                return None

        return nearest_antenna(lat, lon, candidates)

    def resolve(self, lat, lon) -> Optional[CellMatch]:
        """
        Nearest antenna plus the cell id of the sector the point falls in.
        None when no antenna is found.
        """
        found = self.locate(lat, lon)
        if found is None:
            return None

        antenna = found.antenna
        brng = bearing(antenna.latitude, antenna.longitude, float(lat), float(lon))
        return CellMatch(
            antenna=antenna,
            distance_m=found.distance_m,
            bearing=brng,
            cell_id=cell_id_for_bearing(antenna, brng),
        )
