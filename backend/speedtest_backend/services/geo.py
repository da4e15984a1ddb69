# speedtest_backend/services/geo.py

import math

import numpy as np

EARTH_RADIUS_M = 6371000.0


def bearing(from_lat: float, from_lon: float, to_lat: float, to_lon: float) -> float:
    """
    Initial great-circle bearing from the first point to the second,
    in degrees within [0, 360), 0 = north, 90 = east.

    Coordinates are not range-checked: out-of-range degrees still produce
    a number, just not a meaningful one. Coincident points give 0.
    """
    phi1 = math.radians(from_lat)
    phi2 = math.radians(to_lat)
    dlambda = math.radians(to_lon - from_lon)

    y = math.sin(dlambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(dlambda)

    return (math.degrees(math.atan2(y, x)) + 360) % 360


def distance_meters(lat1, lon1, lat2, lon2):
    """
    Haversine surface distance in meters.

    Works on plain floats or numpy arrays (broadcast against each other),
    so a whole candidate list can be measured from one point in a single call.
    """
    phi1 = np.radians(lat1)
    phi2 = np.radians(lat2)
    dphi = phi2 - phi1
    dlambda = np.radians(np.subtract(lon2, lon1))

    a = np.sin(dphi / 2) ** 2 + np.cos(phi1) * np.cos(phi2) * np.sin(dlambda / 2) ** 2
    # rounding can push a a hair above 1 for antipodal points
    return 2 * EARTH_RADIUS_M * np.arcsin(np.sqrt(np.clip(a, 0.0, 1.0)))
