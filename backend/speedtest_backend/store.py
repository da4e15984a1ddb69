from datetime import datetime
from typing import List

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import StorageError
from .models.antennas import Antenna
from .models.speed_tests import SpeedTest

# Watermark used when a store holds no speed tests yet
EPOCH = datetime(1970, 1, 1)


class SqlStore:
    """
    Antenna catalog + speed_tests store backed by one SQLAlchemy session.

    Every SQLAlchemy failure is rolled back and re-raised as StorageError.
    The session is owned by the caller.
    """

    def __init__(self, db: Session, name: str = "local"):
        self.db = db
        self.name = name

    # --- Antenna catalog --- #

    def query_antennas_in_box(
        self,
        lat_min: float,
        lat_max: float,
        lon_min: float,
        lon_max: float,
    ) -> List[Antenna]:
        try:
            return (
                self.db.query(Antenna)
                .filter(
                    Antenna.latitude.between(lat_min, lat_max),
                    Antenna.longitude.between(lon_min, lon_max),
                )
                .order_by(Antenna.id)
                .all()
            )
        except SQLAlchemyError as e:
            self._fail("query_antennas_in_box", e)

    def query_antennas_up_to(self, limit: int) -> List[Antenna]:
        try:
            return self.db.query(Antenna).order_by(Antenna.id).limit(limit).all()
        except SQLAlchemyError as e:
            self._fail("query_antennas_up_to", e)

    # --- Speed tests --- #

    def insert_sample(self, sample: SpeedTest) -> SpeedTest:
        """Add and commit one row; nothing is kept if the commit fails."""
        try:
            self.db.add(sample)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("insert_sample", e)
        self.db.refresh(sample)
        return sample

    def max_timestamp(self) -> datetime:
        try:
            latest = self.db.query(func.max(SpeedTest.timestamp)).scalar()
        except SQLAlchemyError as e:
            self._fail("max_timestamp", e)
        return latest or EPOCH

    def query_newer_than(self, ts: datetime) -> List[SpeedTest]:
        try:
            return (
                self.db.query(SpeedTest)
                .filter(SpeedTest.timestamp > ts)
                .order_by(SpeedTest.timestamp.asc(), SpeedTest.id.asc())
                .all()
            )
        except SQLAlchemyError as e:
            self._fail("query_newer_than", e)

    def _fail(self, op: str, exc: SQLAlchemyError):
        self.db.rollback()
        print(f"[store:{self.name}] {op} failed: {exc}")
        raise StorageError(f"{op} failed on {self.name} store") from exc
