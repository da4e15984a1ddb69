from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from .config import DATABASE_URL, REMOTE_DATABASE_URL


def make_engine(url: str):
    connect_args = {}
    if url.startswith("sqlite"):
        # FastAPI runs sync endpoints in a threadpool
        connect_args["check_same_thread"] = False
    return create_engine(
        url,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


engine = make_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

# One sessionmaker (and engine) per remote URL
_remote_sessionmakers = {}


# Dependency
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_remote_session(url: Optional[str] = None) -> Optional[Session]:
    """
    Open a session on the remote (cloud) speed_tests store.

    Returns None when no remote URL is configured. The caller owns the
    session and must close it.
    """
    url = url or REMOTE_DATABASE_URL
    if not url:
        return None

    if url not in _remote_sessionmakers:
        _remote_sessionmakers[url] = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=make_engine(url),
        )
    return _remote_sessionmakers[url]()


# Dependency; yields None when no remote store is configured
def get_remote_db():
    db = get_remote_session()
    try:
        yield db
    finally:
        if db is not None:
            db.close()
