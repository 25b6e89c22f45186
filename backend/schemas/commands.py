"""Pydantic schemas for the command relay endpoints."""
from schemas.base import CamelModel


class SimpleCommandRequest(CamelModel):
    """Payload for POST /command (start or stop, no charger)."""

    command: str | None = None


class SetCommandRequest(CamelModel):
    """Payload for POST /set-command. Fields are checked by the relay so missing ones map to 400."""

    command: str | None = None
    charger_id: str | None = None
    station_name: str | None = None


class SetCommandResponse(CamelModel):
    """Response for POST /set-command."""

    message: str
    command_id: str


class PendingCommandResponse(CamelModel):
    """Latest pending command for a charger (GET /set-command)."""

    command_id: str | None = None
    charger_id: str
    station_name: str | None = None
    command: str
    timestamp: int


class GetCommandResponse(CamelModel):
    """Poll response for GET /get-command; command is 'none' when nothing is pending."""

    charger_id: str
    command: str
    timestamp: int
    command_id: str | None = None

