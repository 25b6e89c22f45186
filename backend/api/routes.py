"""API route handlers: health and the simulated stop endpoint."""
import asyncio
import logging

from fastapi import APIRouter

from schemas.health import HealthResponse
from utils.config import STOP_CHARGING_DELAY_S

LOG = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse()


@router.get("/stop-charging")
async def stop_charging() -> dict:
    """Simulated stop: waits a fixed delay and reports success. Nothing is changed."""
    LOG.info("Stop charging request received")
    await asyncio.sleep(STOP_CHARGING_DELAY_S)
    return {"message": "Charging stopped successfully via API"}
