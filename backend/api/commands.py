"""Command relay API routes: /command, /set-command, /get-command."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.exc import SQLAlchemyError

from api.dependencies import get_command_cache, get_gateway, get_simple_command_cache, get_simulators
from charging_core.command_cache import CommandCache
from charging_core.command_relay import (
    get_simple_command,
    latest_command,
    relay_command,
    set_simple_command,
)
from charging_core.errors import InvalidCommandError, MissingFieldsError
from charging_core.gateway import PersistenceGateway
from charging_core.simulator_registry import SimulatorRegistry
from schemas.commands import (
    GetCommandResponse,
    PendingCommandResponse,
    SetCommandRequest,
    SetCommandResponse,
    SimpleCommandRequest,
)
from utils.clock import now_ms

LOG = logging.getLogger(__name__)

router = APIRouter(tags=["commands"])

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


@router.post("/command")
def post_simple_command(
    body: SimpleCommandRequest,
    cache: CommandCache = Depends(get_simple_command_cache),
) -> dict:
    """Store the latest charger-agnostic start/stop command."""
    try:
        pending = set_simple_command(cache, body.command)
    except InvalidCommandError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return {"message": f"Command '{pending.command}' received and stored."}


@router.get("/command")
def get_command_simple(cache: CommandCache = Depends(get_simple_command_cache)) -> dict:
    """Latest charger-agnostic command, or command null."""
    pending = get_simple_command(cache)
    if pending is None:
        return {"command": None, "message": "No new command."}
    return {"command": pending.command, "timestamp": pending.timestamp}


@router.post("/set-command", response_model=SetCommandResponse)
async def set_command(
    body: SetCommandRequest,
    gateway: PersistenceGateway = Depends(get_gateway),
    cache: CommandCache = Depends(get_command_cache),
    simulators: SimulatorRegistry = Depends(get_simulators),
) -> SetCommandResponse:
    """Validate and persist a command for a charger; start also opens a session and starts the simulator."""
    try:
        command_id = relay_command(
            gateway,
            cache,
            body.command,
            body.charger_id,
            body.station_name,
            simulators=simulators,
        )
    except (MissingFieldsError, InvalidCommandError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except SQLAlchemyError as e:
        LOG.exception("Set command failed")
        gateway.log_activity("error", f"Failed to process command: {e}", "api")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error processing request.",
        ) from e
    return SetCommandResponse(
        message=f"Command '{body.command}' sent to charger {body.charger_id} at {body.station_name}",
        command_id=command_id,
    )


@router.get("/set-command")
def get_set_command(
    charger_id: str | None = Query(default=None, alias="chargerId"),
    gateway: PersistenceGateway = Depends(get_gateway),
    cache: CommandCache = Depends(get_command_cache),
) -> dict:
    """Latest pending command for a charger: database, then cache, else a message."""
    if not charger_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="chargerId parameter required")
    pending = latest_command(gateway, cache, charger_id)
    if pending is None:
        return {"message": "No commands found for this charger"}
    return PendingCommandResponse(
        command_id=pending.command_id,
        charger_id=pending.charger_id,
        station_name=pending.station_name,
        command=pending.command,
        timestamp=pending.timestamp,
    ).model_dump(by_alias=True, exclude_none=True)


@router.get("/get-command", response_model=GetCommandResponse, response_model_exclude_none=True)
def poll_command(
    response: Response,
    charger_id: str | None = Query(default=None, alias="chargerId"),
    gateway: PersistenceGateway = Depends(get_gateway),
    cache: CommandCache = Depends(get_command_cache),
) -> GetCommandResponse:
    """Charger poll: latest pending command or 'none'. Responses are never cached."""
    if not charger_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="chargerId_missing",
            headers=NO_CACHE_HEADERS,
        )
    response.headers.update(NO_CACHE_HEADERS)
    pending = latest_command(gateway, cache, charger_id)
    if pending is None:
        return GetCommandResponse(charger_id=charger_id, command="none", timestamp=now_ms())
    LOG.info("Sending command %s to charger %s", pending.command, charger_id)
    return GetCommandResponse(
        charger_id=charger_id,
        command=pending.command,
        timestamp=pending.timestamp,
        command_id=pending.command_id,
    )
