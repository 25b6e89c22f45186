"""Live simulator values for GET /charging-status."""
from schemas.base import CamelModel


class ChargingStatusResponse(CamelModel):
    """power in kW, energy in kWh, duration in seconds."""

    charger_id: str
    status: str
    power: float = 0.0
    energy: float = 0.0
    amount_paid: float = 0.0
    duration: int = 0
    rate_per_kwh: float
    error_message: str | None = None
