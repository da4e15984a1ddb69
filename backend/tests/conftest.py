"""Pytest configuration and shared fixtures for the backend tests.

Every test gets fresh in-memory SQLite databases; nothing touches the
DATABASE_URL / REMOTE_DATABASE_URL stores from the environment.
"""
import os

# Must happen before speedtest_backend.config is imported (load_dotenv never overrides)
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("REMOTE_DATABASE_URL", None)

from datetime import datetime  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from speedtest_backend.db import Base, get_db, get_remote_db  # noqa: E402
from speedtest_backend.main import app  # noqa: E402
from speedtest_backend.models import Antenna, SpeedTest  # noqa: E402


def make_session(create_tables=True):
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    if create_tables:
        Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)()


@pytest.fixture
def db():
    session = make_session()
    yield session
    session.close()


@pytest.fixture
def remote_db():
    session = make_session()
    yield session
    session.close()


@pytest.fixture
def broken_db():
    """Session on a database without any tables; every query fails."""
    session = make_session(create_tables=False)
    yield session
    session.close()


@pytest.fixture
def add_antenna(db):
    def _add(session=None, **fields):
        session = session if session is not None else db
        values = {
            "nom": "BTS_ALG_01",
            "latitude": 36.75,
            "longitude": 3.04,
            "wilaya": "Alger",
            "commune": "Bab Ezzouar",
            "cell_id_A": "A1",
            "cell_id_B": "B1",
            "cell_id_C": "C1",
        }
        values.update(fields)
        antenna = Antenna(**values)
        session.add(antenna)
        session.commit()
        return antenna

    return _add


@pytest.fixture
def add_speed_test(db):
    def _add(session=None, **fields):
        session = session if session is not None else db
        values = {
            "test_id": "t-1",
            "download_mbps": 42.0,
            "upload_mbps": 12.0,
            "latency_ms": 20.0,
            "jitter_ms": 3.0,
            "network_type": "4G",
            "signal_strength_dbm": -90.0,
            "operator": "Mobilis",
            "device_type": "Android",
            "timestamp": datetime(2025, 1, 1, 12, 0, 0),
        }
        values.update(fields)
        row = SpeedTest(**values)
        session.add(row)
        session.commit()
        return row

    return _add


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def use_remote(remote_db):
    """Point the /api/sync endpoint at the remote_db fixture."""
    def override_get_remote_db():
        yield remote_db

    app.dependency_overrides[get_remote_db] = override_get_remote_db
    yield remote_db
    app.dependency_overrides.pop(get_remote_db, None)
