import sys
from pathlib import Path

import uvicorn

BASE_DIR = Path(__file__).resolve().parents[1]
sys.path.append(str(BASE_DIR))

from speedtest_backend.config import PORT  # noqa: E402

if __name__ == "__main__":
    print(f"Server running on port {PORT}")
    # Idle connections between requests stay open for 5 minutes
    uvicorn.run(
        "speedtest_backend.main:app",
        host="0.0.0.0",
        port=PORT,
        timeout_keep_alive=300,
    )
