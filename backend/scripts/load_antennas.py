import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv
load_dotenv(Path(__file__).resolve().parents[1] / ".env")

BASE_DIR = Path(__file__).resolve().parents[1]
sys.path.append(str(BASE_DIR))

from speedtest_backend.db import Base, SessionLocal, engine  # noqa: E402
from speedtest_backend.errors import SpeedTestError  # noqa: E402
from speedtest_backend.models import Antenna, SpeedTest  # noqa: E402,F401
from speedtest_backend.services.load_antennas import load_antennas_csv  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description="Load a BTS antenna CSV into bts_antennas.")
    parser.add_argument("csv_path", type=Path, help="Operator antenna export.")
    parser.add_argument(
        "--replace",
        action="store_true",
        help="Delete the current catalog before loading.",
    )
    args = parser.parse_args()

    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        load_antennas_csv(db, args.csv_path, replace=args.replace)
    except SpeedTestError as e:
        print(f"Could not load {args.csv_path}: {e}")
        return 1
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
