"""Station repository: stations and their chargers."""
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from models.station import Station
from models.station_charger import StationCharger


def list_stations(session: Session) -> list[Station]:
    """Return all stations ordered by name."""
    result = session.execute(select(Station).order_by(Station.name))
    return list(result.scalars().all())


def get_station(session: Session, station_id: str) -> Optional[Station]:
    """Return a station by id or None."""
    return session.get(Station, station_id)


def create_station(session: Session, station_id: str, name: str, city: str, address: str) -> Station:
    """Create a station, commit, and return it."""
    station = Station(id=station_id, name=name, city=city, address=address)
    session.add(station)
    session.commit()
    session.refresh(station)
    return station


def count_stations(session: Session) -> int:
    """Return the number of stations (for seeding)."""
    result = session.execute(select(func.count()).select_from(Station))
    return result.scalar() or 0


def create_station_charger(
    session: Session,
    *,
    station_id: str,
    charger_id: str,
    name: str,
    power_rating: str,
    status: str = "available",
) -> StationCharger:
    """Create a charger at a station, commit, and return it."""
    charger = StationCharger(
        charger_id=charger_id,
        station_id=station_id,
        name=name,
        power_rating=power_rating,
        status=status,
    )
    session.add(charger)
    session.commit()
    session.refresh(charger)
    return charger


def list_chargers_by_station(session: Session, station_id: str) -> list[StationCharger]:
    """Return all chargers for a station ordered by name."""
    result = session.execute(
        select(StationCharger)
        .where(StationCharger.station_id == station_id)
        .order_by(StationCharger.name)
    )
    return list(result.scalars().all())


def count_chargers_by_station(session: Session, station_id: str) -> int:
    """Return the number of chargers at a station."""
    result = session.execute(
        select(func.count()).select_from(StationCharger).where(StationCharger.station_id == station_id)
    )
    return result.scalar() or 0
