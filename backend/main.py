"""EV charging platform: FastAPI backend."""
import logging
import os
import subprocess
import sys

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

# Command relay, ingest and simulator activity at INFO level
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logging.getLogger("charging_core").setLevel(logging.INFO)
from fastapi.middleware.cors import CORSMiddleware

from db import SessionLocal
from api.charging_status import router as charging_status_router
from api.commands import router as commands_router
from api.history import router as history_router
from api.payments import router as payments_router
from api.routes import router
from api.stations import router as stations_router
from api.telemetry import router as telemetry_router
from charging_core.catalog import seed_stations_if_empty
from charging_core.command_cache import CommandCache
from charging_core.payments import RazorpayClient
from charging_core.simulator_registry import SimulatorRegistry
from schemas.health import HealthResponse
from utils.config import (
    COMMAND_CACHE_MAX_ENTRIES,
    COMMAND_CACHE_TTL_S,
    CORS_ORIGINS,
    KWH_RATE,
    PORT,
    RAZORPAY_API_URL,
    RAZORPAY_KEY_ID,
    RAZORPAY_KEY_SECRET,
    SIMULATOR_TICK_S,
    TESTING,
)

LOG = logging.getLogger(__name__)

app = FastAPI(
    title="EV Charging Platform",
    description="Station catalog, command relay, telemetry ingest and charging session simulator",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Application-scoped services, injected into handlers via api.dependencies
app.state.command_cache = CommandCache(ttl_s=COMMAND_CACHE_TTL_S, max_entries=COMMAND_CACHE_MAX_ENTRIES)
app.state.simple_command_cache = CommandCache(ttl_s=COMMAND_CACHE_TTL_S, max_entries=1)
app.state.simulators = SimulatorRegistry(tick_interval_s=SIMULATOR_TICK_S, rate_per_kwh=KWH_RATE)
app.state.payment_client = RazorpayClient(RAZORPAY_KEY_ID, RAZORPAY_KEY_SECRET, base_url=RAZORPAY_API_URL)

app.include_router(router, prefix="/api")
app.include_router(commands_router, prefix="/api")
app.include_router(telemetry_router, prefix="/api")
app.include_router(history_router, prefix="/api")
app.include_router(stations_router, prefix="/api")
app.include_router(payments_router, prefix="/api")
app.include_router(charging_status_router, prefix="/api")


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and query parameters are client errors (400)."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler: log and answer 500 with a generic message."""
    LOG.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


@app.on_event("startup")
def startup() -> None:
    """Run DB migrations and seed the station catalog. Skipped under TESTING (tests build their own schema)."""
    if TESTING:
        return
    backend_dir = os.path.dirname(os.path.abspath(__file__))
    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        cwd=backend_dir,
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        raise RuntimeError(f"Alembic upgrade failed: {result.stderr or result.stdout}")
    _seed_stations()


@app.on_event("shutdown")
async def shutdown() -> None:
    """Cancel every simulator tick task."""
    await app.state.simulators.shutdown()


def _seed_stations() -> None:
    """Seed the default stations and chargers when the catalog is empty."""
    db = SessionLocal()
    try:
        seed_stations_if_empty(db)
    finally:
        db.close()


@app.get("/")
def root() -> dict:
    """Root redirect/info."""
    return {"service": "ev-charging-platform", "docs": "/docs", "health": "/api/health"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=PORT)
