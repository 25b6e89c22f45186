"""Pydantic schemas for the station catalog."""
from schemas.base import CamelModel


class StationResponse(CamelModel):
    """Station in API responses."""

    id: str
    name: str
    city: str
    address: str
    charger_count: int = 0


class StationChargerResponse(CamelModel):
    """Charger at a station."""

    charger_id: str
    station_id: str
    name: str
    power_rating: str
    status: str
