import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./speedtest_backend.db")
# Cloud store the mobile app writes to; only needed by the sync job
REMOTE_DATABASE_URL = os.getenv("REMOTE_DATABASE_URL")

PORT = int(os.getenv("PORT", "3000"))

BTS_SEARCH_RANGE_DEG = float(os.getenv("BTS_SEARCH_RANGE_DEG", "0.5"))
BTS_FALLBACK_LIMIT = int(os.getenv("BTS_FALLBACK_LIMIT", "1000"))

MAX_DOWNLOAD_MB = float(os.getenv("MAX_DOWNLOAD_MB", "50"))
MAX_UPLOAD_MB = float(os.getenv("MAX_UPLOAD_MB", "50"))
