from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from .db import Base, engine
from .models import antennas, speed_tests  # noqa: F401  (register tables)
from .routers import speedtest as speedtest_router
from .routers import sync as sync_router

Base.metadata.create_all(bind=engine)

app = FastAPI(title="Speed Test Backend")

# The mobile app and the dashboard both call the API directly
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(speedtest_router.router, prefix="/api", tags=["speedtest"])
app.include_router(sync_router.router, prefix="/api", tags=["sync"])


@app.get("/", response_class=PlainTextResponse)
def status():
    return "Speed Test API is running"
