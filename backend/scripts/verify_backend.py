import argparse
import os
import sys
from pathlib import Path

import httpx

BASE_DIR = Path(__file__).resolve().parents[1]
sys.path.append(str(BASE_DIR))

from speedtest_backend.services.smoke_check import run_smoke_check  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description="Smoke-test a running speed test backend.")
    parser.add_argument(
        "--url",
        default=os.getenv("API_URL", "http://localhost:3000"),
        help="Base URL of the backend.",
    )
    args = parser.parse_args()

    with httpx.Client(base_url=args.url, timeout=60.0) as client:
        ok = run_smoke_check(client)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
