"""Pydantic schemas for POST /esp32-response."""
from typing import Any

from schemas.base import CamelModel


class StatusReport(CamelModel):
    """Status report from a charger consumer. chargerId, stationName and status are required by the ingest.

    Identifiers may arrive as numbers from charger firmware; the ingest turns them into text.
    """

    charger_id: str | int | None = None
    station_name: str | int | None = None
    status: str | None = None
    duration: float | None = None
    cost_per_unit: float | None = None
    cost_per_minute: float | None = None
    total_cost: float | None = None
    command_id: str | None = None


class StatusReportResponse(CamelModel):
    """Acknowledgement with the normalized report."""

    message: str
    received: dict[str, Any]
