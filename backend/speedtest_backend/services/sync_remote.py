# speedtest_backend/services/sync_remote.py

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..models.speed_tests import SpeedTest
from ..store import SqlStore
from .antenna_locator import AntennaLocator

# Every speed_tests column except the surrogate key is copied across stores
COPIED_COLUMNS = [c.name for c in SpeedTest.__table__.columns if c.name != "id"]


@dataclass
class SyncResult:
    watermark: datetime
    fetched: int = 0
    inserted: int = 0
    derived: int = 0


def _usable_coordinate(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


class ReconciliationJob:
    """
    Replay speed tests from a source store (the cloud DB the app writes to)
    into a destination store (the local dashboard DB).

    One run:
      1. watermark = newest timestamp already in the destination
         (1970-01-01 if empty);
      2. pull source rows with timestamp > watermark, oldest first;
      3. rows without a cell_id get one from the nearest BTS in the
         destination's antenna catalog;
      4. each row is inserted and committed on its own, timestamp untouched.

    Not transactional across the batch: a failed insert raises StorageError
    and leaves earlier rows in place, so the next run resumes after them.
    Source rows sharing a timestamp with the last inserted row can be skipped
    by the next run. Run at most one instance at a time.
    """

    def __init__(self, source, destination, locator: Optional[AntennaLocator] = None):
        self.source = source
        self.destination = destination
        self.locator = locator or AntennaLocator(destination)

    def _fill_cell_id(self, record: SpeedTest) -> Optional[str]:
        if record.cell_id:
            return record.cell_id

        lat, lon = record.latitude, record.longitude
        if not (_usable_coordinate(lat) and _usable_coordinate(lon)):
            return None

        match = self.locator.resolve(lat, lon)
        if match is None:
            print(f"[sync_remote]   No BTS available for test {record.test_id}")
            return None

        print(
            f"[sync_remote]   Test {record.test_id}: nearest BTS {match.antenna.nom} "
            f"({match.distance_m:.0f}m) -> cell {match.cell_id}"
        )
        return match.cell_id

    def run(self) -> SyncResult:
        watermark = self.destination.max_timestamp()
        print(f"[sync_remote] Last {self.destination.name} record: {watermark}")

        records = self.source.query_newer_than(watermark)
        result = SyncResult(watermark=watermark, fetched=len(records))
        print(f"[sync_remote] Found {len(records)} new records in {self.source.name} store.")

        for record in records:
            values = {col: getattr(record, col) for col in COPIED_COLUMNS}

            cell_id = self._fill_cell_id(record)
            if cell_id and not record.cell_id:
                result.derived += 1
            if cell_id is not None:
                values["cell_id"] = cell_id

            self.destination.insert_sample(SpeedTest(**values))
            result.inserted += 1

        print(
            f"[sync_remote] Inserted {result.inserted} records "
            f"({result.derived} with a derived cell_id)."
        )
        return result


def sync_once(remote_db, local_db) -> SyncResult:
    """
    Convenience wrapper: one reconciliation pass from the remote session into
    the local session, deriving cells against the local antenna catalog.
    """
    source = SqlStore(remote_db, name="remote")
    destination = SqlStore(local_db, name="local")
    return ReconciliationJob(source, destination).run()
