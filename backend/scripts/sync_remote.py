import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv
load_dotenv(Path(__file__).resolve().parents[1] / ".env")

from sqlalchemy.orm import sessionmaker

BASE_DIR = Path(__file__).resolve().parents[1]
sys.path.append(str(BASE_DIR))

from speedtest_backend.db import Base, SessionLocal, engine, get_remote_session, make_engine  # noqa: E402
from speedtest_backend.errors import StorageError  # noqa: E402
from speedtest_backend.models import Antenna, SpeedTest  # noqa: E402,F401
from speedtest_backend.services.sync_remote import sync_once  # noqa: E402


def open_local_session(url):
    if not url:
        Base.metadata.create_all(bind=engine)
        return SessionLocal()
    local_engine = make_engine(url)
    Base.metadata.create_all(bind=local_engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=local_engine)()


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Copy new speed tests from the remote store into the local one."
    )
    parser.add_argument("--remote-url", help="Overrides REMOTE_DATABASE_URL.")
    parser.add_argument("--local-url", help="Overrides DATABASE_URL.")
    args = parser.parse_args()

    remote_db = get_remote_session(args.remote_url)
    if remote_db is None:
        print("No remote store configured (set REMOTE_DATABASE_URL or pass --remote-url).")
        return 2

    local_db = open_local_session(args.local_url)
    try:
        result = sync_once(remote_db, local_db)
    except StorageError as e:
        print(f"Error during sync: {e}")
        return 1
    finally:
        local_db.close()
        remote_db.close()

    print(f"Synchronization complete: {result.inserted}/{result.fetched} records copied.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
