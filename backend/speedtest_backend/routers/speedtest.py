# speedtest_backend/routers/speedtest.py

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..config import MAX_DOWNLOAD_MB, MAX_UPLOAD_MB
from ..db import get_db
from ..errors import InputError, StorageError
from ..services.antenna_locator import AntennaLocator
from ..services.ingest_speedtest import ingest_speed_test
from ..store import SqlStore

router = APIRouter()


class SpeedTestIn(BaseModel):
    test_id: Optional[str] = None

    download_mbps: Optional[float] = None
    upload_mbps: Optional[float] = None
    latency_ms: Optional[float] = None
    jitter_ms: Optional[float] = None
    network_type: Optional[str] = None
    signal_strength_dbm: Optional[float] = None
    device_type: Optional[str] = None
    operator: Optional[str] = None

    latitude: Optional[float] = None
    longitude: Optional[float] = None

    # Reverse-geocoded by the app when it can; these win over the BTS labels
    wilaya: Optional[str] = None
    commune: Optional[str] = None

    timestamp: Optional[datetime] = None


class SpeedTestDetails(BaseModel):
    wilaya: Optional[str] = None
    commune: Optional[str] = None
    cell_id: Optional[str] = None
    operator: Optional[str] = None


class SpeedTestSaved(BaseModel):
    message: str
    details: SpeedTestDetails


@router.post("/speedtest", response_model=SpeedTestSaved, status_code=201)
def submit_speed_test(req: SpeedTestIn, db: Session = Depends(get_db)):
    """
    Store one speed test from the mobile app, attributing it to the
    sector cell of the nearest BTS when it carries a GPS fix.
    """
    store = SqlStore(db)

    try:
        row = ingest_speed_test(store, AntennaLocator(store), req.model_dump())
    except InputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError as e:
        print(f"[speedtest] Error saving speed test: {e}")
        raise HTTPException(status_code=500, detail="Failed to save data")

    return {
        "message": "Speed test saved successfully",
        "details": {
            "wilaya": row.wilaya,
            "commune": row.commune,
            "cell_id": row.cell_id,
            "operator": row.operator,
        },
    }


@router.get("/download")
def download(size: float = Query(1, allow_inf_nan=False)):
    """
    Return `size` MB of zero bytes for download throughput measurement,
    capped at MAX_DOWNLOAD_MB.
    """
    size_mb = min(max(size, 0.0), MAX_DOWNLOAD_MB)
    payload = bytes(int(size_mb * 1024 * 1024))
    return Response(content=payload, media_type="application/octet-stream")


@router.post("/upload")
async def upload(request: Request):
    """
    Count and discard the request body; the client times the upload.
    Bodies over MAX_UPLOAD_MB are refused with 413.
    """
    limit = int(MAX_UPLOAD_MB * 1024 * 1024)
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > limit:
            raise HTTPException(status_code=413, detail="Upload too large")
    return {"status": "ok", "received_bytes": received}
