# Schemas package
from .charging_status import ChargingStatusResponse
from .health import HealthResponse
from .history import EventListResponse, LogListResponse, SessionListResponse

__all__ = [
    "ChargingStatusResponse",
    "EventListResponse",
    "HealthResponse",
    "LogListResponse",
    "SessionListResponse",
]
