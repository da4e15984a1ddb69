from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..db import get_db, get_remote_db
from ..errors import StorageError
from ..services.sync_remote import sync_once

router = APIRouter()


@router.post("/sync")
def sync_from_remote(
    db: Session = Depends(get_db),
    remote_db: Session = Depends(get_remote_db),
):
    """
    Replay new speed tests from the remote store into the local one,
    filling missing cell ids from the local antenna catalog.

    This is a dev/manual endpoint. In a real deployment, scripts/sync_remote.py
    runs from a scheduler, one instance at a time.
    """
    if remote_db is None:
        raise HTTPException(status_code=503, detail="REMOTE_DATABASE_URL is not configured")

    try:
        result = sync_once(remote_db, db)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {"status": "ok", **asdict(result)}
