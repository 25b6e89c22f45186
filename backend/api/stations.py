"""Station catalog API routes."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from db import get_db
from repositories.station_repository import count_chargers_by_station, get_station
from repositories.station_repository import list_chargers_by_station as repo_list_chargers_by_station
from repositories.station_repository import list_stations as repo_list_stations
from schemas.stations import StationChargerResponse, StationResponse

router = APIRouter(prefix="/stations", tags=["stations"])


@router.get("", response_model=list[StationResponse])
def list_stations(db: Session = Depends(get_db)) -> list[StationResponse]:
    """List all stations."""
    return [
        StationResponse(
            id=s.id,
            name=s.name,
            city=s.city,
            address=s.address,
            charger_count=count_chargers_by_station(db, s.id),
        )
        for s in repo_list_stations(db)
    ]


@router.get("/{station_id}", response_model=StationResponse)
def get_station_detail(station_id: str, db: Session = Depends(get_db)) -> StationResponse:
    """Station by id."""
    station = get_station(db, station_id)
    if station is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Station not found")
    return StationResponse(
        id=station.id,
        name=station.name,
        city=station.city,
        address=station.address,
        charger_count=count_chargers_by_station(db, station.id),
    )


@router.get("/{station_id}/chargers", response_model=list[StationChargerResponse])
def list_station_chargers(station_id: str, db: Session = Depends(get_db)) -> list[StationChargerResponse]:
    """Chargers at a station."""
    if get_station(db, station_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Station not found")
    return [StationChargerResponse.model_validate(c) for c in repo_list_chargers_by_station(db, station_id)]
