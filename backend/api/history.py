"""Read-only history routes: /get-events, /get-sessions, /get-logs."""
from fastapi import APIRouter, Depends, Query

from api.dependencies import get_gateway
from charging_core.gateway import PersistenceGateway
from models.charging_event import ChargingEvent
from schemas.history import (
    EventListResponse,
    EventResponse,
    LogListResponse,
    LogResponse,
    SessionListResponse,
    SessionResponse,
)
from utils.clock import to_millis

router = APIRouter(tags=["history"])


def normalize_event_type(event_type: str) -> str:
    """start/stop are kept; everything else is reported as 'status'."""
    return event_type if event_type in ("start", "stop") else "status"


def _event_to_response(event: ChargingEvent) -> EventResponse:
    return EventResponse(
        event_id=event.event_id,
        charger_id=event.charger_id,
        station_name=event.station_name,
        event_type=normalize_event_type(event.event_type),
        timestamp=to_millis(event.timestamp),
        data=event.data,
        session_id=event.session_id,
    )


@router.get("/get-events", response_model=EventListResponse)
def get_events(
    charger_id: str | None = Query(default=None, alias="chargerId"),
    limit: int = Query(default=100, ge=1),
    gateway: PersistenceGateway = Depends(get_gateway),
) -> EventListResponse:
    """Events newest-first, at most limit."""
    events = gateway.get_events(charger_id or None, limit)
    gateway.log_activity("info", f"Retrieved {len(events)} events", "api")
    return EventListResponse(events=[_event_to_response(e) for e in events], count=len(events))


@router.get("/get-sessions", response_model=SessionListResponse)
def get_sessions(
    charger_id: str | None = Query(default=None, alias="chargerId"),
    limit: int = Query(default=50, ge=1),
    gateway: PersistenceGateway = Depends(get_gateway),
) -> SessionListResponse:
    """Sessions newest-first by start time, at most limit."""
    sessions = gateway.get_sessions(charger_id or None, limit)
    gateway.log_activity("info", f"Retrieved {len(sessions)} sessions", "api")
    return SessionListResponse(
        sessions=[SessionResponse.model_validate(s) for s in sessions],
        count=len(sessions),
    )


@router.get("/get-logs", response_model=LogListResponse)
def get_logs(
    level: str | None = Query(default=None),
    limit: int = Query(default=100, ge=1),
    gateway: PersistenceGateway = Depends(get_gateway),
) -> LogListResponse:
    """System logs newest-first, optionally by level."""
    logs = gateway.get_logs(level or None, limit)
    return LogListResponse(logs=[LogResponse.model_validate(log) for log in logs], count=len(logs))
