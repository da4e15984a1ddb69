from sqlalchemy import Column, BigInteger, Integer, Text, DateTime, Float
from ..db import Base


class SpeedTest(Base):
    __tablename__ = "speed_tests"

    # SQLite only autoincrements INTEGER primary keys
    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True)

    # Assigned by the mobile app; not unique (sync may replay a test)
    test_id = Column(Text, index=True)

    # Sector cell of the nearest BTS, or whatever the app reported
    cell_id = Column(Text)

    download_mbps = Column(Float)
    upload_mbps = Column(Float)
    latency_ms = Column(Float)
    jitter_ms = Column(Float)

    network_type = Column(Text)
    signal_strength_dbm = Column(Float)
    operator = Column(Text)
    device_type = Column(Text)

    wilaya = Column(Text)
    commune = Column(Text)
    latitude = Column(Float)
    longitude = Column(Float)

    # Measurement time; the sync watermark
    timestamp = Column(DateTime, index=True, nullable=False)
