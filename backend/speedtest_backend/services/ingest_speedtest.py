# speedtest_backend/services/ingest_speedtest.py

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..errors import InputError, InvalidCoordinates
from ..models.speed_tests import SpeedTest
from .antenna_locator import AntennaLocator

DEFAULT_OPERATOR = "Unknown"

MEASUREMENT_FIELDS = (
    "download_mbps",
    "upload_mbps",
    "latency_ms",
    "jitter_ms",
    "network_type",
    "signal_strength_dbm",
    "device_type",
)


def _clean_text(value: Any) -> Optional[str]:
    """Blank strings count as missing."""
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return str(value)


def _parse_coordinate(name: str, value: Any) -> Optional[float]:
    """
    None/blank -> None. Anything else must parse as a float; garbage is
    rejected instead of being dropped.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidCoordinates(f"{name} must be a number, got {value!r}")


def _parse_ts(value: Any) -> datetime:
    """
    Timestamps are stored as naive UTC. Missing -> now.
    Accepts datetimes or ISO strings like '2025-01-12T10:15:00Z'.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return datetime.now(timezone.utc).replace(tzinfo=None)

    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip().rstrip("Z"))
        except ValueError:
            raise InputError(f"timestamp is not an ISO datetime: {value!r}")

    if not isinstance(value, datetime):
        raise InputError(f"timestamp must be a datetime, got {value!r}")

    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def build_speed_test(payload: Dict[str, Any], locator: AntennaLocator) -> SpeedTest:
    """
    Turn a raw speed test payload into an enriched SpeedTest row (not saved).

    When both coordinates are present the nearest BTS decides cell_id, and
    fills wilaya/commune only where the app did not send them. Any cell_id
    from the app is ignored. No antenna found -> cell_id stays None.
    """
    wilaya = _clean_text(payload.get("wilaya"))
    commune = _clean_text(payload.get("commune"))
    cell_id = None
    operator = _clean_text(payload.get("operator")) or DEFAULT_OPERATOR

    latitude = _parse_coordinate("latitude", payload.get("latitude"))
    longitude = _parse_coordinate("longitude", payload.get("longitude"))
    ts = _parse_ts(payload.get("timestamp"))

    if latitude is not None and longitude is not None:
        match = locator.resolve(latitude, longitude)

        if match is not None:
            bts = match.antenna
            if wilaya is None:
                wilaya = bts.wilaya
            if commune is None:
                commune = bts.commune
            cell_id = match.cell_id

            print(
                f"[ingest_speedtest] Nearest BTS {bts.nom} ({match.distance_m:.0f}m), "
                f"bearing {match.bearing:.1f}, cell {match.cell_id}"
            )
        else:
            print("[ingest_speedtest] No nearby BTS found.")

    return SpeedTest(
        test_id=_clean_text(payload.get("test_id")),
        cell_id=cell_id,
        operator=operator,
        wilaya=wilaya,
        commune=commune,
        latitude=latitude,
        longitude=longitude,
        timestamp=ts,
        **{field: payload.get(field) for field in MEASUREMENT_FIELDS},
    )


def ingest_speed_test(store, locator: AntennaLocator, payload: Dict[str, Any]) -> SpeedTest:
    """
    Enrich one speed test and persist it as a single new row.

    Raises InputError for unusable coordinates/timestamps (nothing is
    written) and StorageError if the insert fails (nothing is kept).
    """
    print(
        f"[ingest_speedtest] Received test {payload.get('test_id')} "
        f"at ({payload.get('latitude')}, {payload.get('longitude')})"
    )
    row = build_speed_test(payload, locator)
    return store.insert_sample(row)
