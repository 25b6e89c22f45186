"""Pydantic schemas for events, sessions and logs listings."""
from typing import Any

from schemas.base import CamelModel, UtcDatetime


class EventResponse(CamelModel):
    """Charging event; event_type normalized to start/stop/status and timestamp in epoch ms."""

    event_id: str
    charger_id: str
    station_name: str
    event_type: str
    timestamp: int
    data: dict[str, Any] | None = None
    session_id: str | None = None


class EventListResponse(CamelModel):
    events: list[EventResponse]
    count: int


class SessionResponse(CamelModel):
    """Charging session row."""

    session_id: str
    charger_id: str
    station_name: str
    user_id: str | None = None
    start_time: UtcDatetime
    end_time: UtcDatetime | None = None
    status: str
    duration: float | None = None
    total_energy: float | None = None
    total_cost: float | None = None
    cost_per_unit: float | None = None
    cost_per_minute: float | None = None
    payment_method: str | None = None
    last_updated: UtcDatetime


class SessionListResponse(CamelModel):
    sessions: list[SessionResponse]
    count: int


class LogResponse(CamelModel):
    """System log row."""

    id: str
    level: str
    message: str
    timestamp: UtcDatetime
    source: str
    data: Any = None


class LogListResponse(CamelModel):
    logs: list[LogResponse]
    count: int
