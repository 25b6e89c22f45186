"""Telemetry ingest API route: POST /esp32-response."""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from api.dependencies import get_command_cache, get_gateway, get_simulators
from charging_core.command_cache import CommandCache
from charging_core.errors import MissingFieldsError
from charging_core.gateway import PersistenceGateway
from charging_core.simulator_registry import SimulatorRegistry
from charging_core.telemetry_ingest import SOURCE, process_status_report
from schemas.telemetry import StatusReport, StatusReportResponse

LOG = logging.getLogger(__name__)

router = APIRouter(tags=["telemetry"])


@router.post("/esp32-response", response_model=StatusReportResponse)
async def esp32_response(
    body: StatusReport,
    gateway: PersistenceGateway = Depends(get_gateway),
    cache: CommandCache = Depends(get_command_cache),
    simulators: SimulatorRegistry = Depends(get_simulators),
) -> StatusReportResponse:
    """Record a charger status report: event, session completion and command execution."""
    try:
        received = process_status_report(
            gateway,
            body.model_dump(by_alias=True),
            cache=cache,
            simulators=simulators,
        )
    except MissingFieldsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except SQLAlchemyError as e:
        LOG.exception("ESP32 response processing failed")
        gateway.log_activity("error", f"Failed to process ESP32 response: {e}", SOURCE)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error processing ESP32 response.",
        ) from e
    return StatusReportResponse(message="ESP32 response processed successfully", received=received)
