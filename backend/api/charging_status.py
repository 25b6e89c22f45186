"""Live simulator values: GET /charging-status."""
from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.dependencies import get_simulators
from charging_core.simulator_registry import SimulatorRegistry
from schemas.charging_status import ChargingStatusResponse

router = APIRouter(tags=["charging-status"])


@router.get("/charging-status", response_model=ChargingStatusResponse)
def charging_status(
    charger_id: str | None = Query(default=None, alias="chargerId"),
    simulators: SimulatorRegistry = Depends(get_simulators),
) -> ChargingStatusResponse:
    """Current simulator snapshot; Idle with zeros when the charger was never started."""
    if not charger_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="chargerId parameter required")
    return ChargingStatusResponse(**simulators.snapshot(charger_id))
