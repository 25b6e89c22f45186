"""Charging event repository: insert and list."""
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from models.charging_event import ChargingEvent


def create_event(
    session: Session,
    *,
    charger_id: str,
    station_name: str,
    event_type: str,
    data: Optional[dict[str, Any]] = None,
    session_id: Optional[str] = None,
    event_id: Optional[str] = None,
) -> ChargingEvent:
    """Insert an event, commit, and return it. Id and timestamp are generated."""
    row = ChargingEvent(
        charger_id=charger_id,
        station_name=station_name,
        event_type=event_type,
        data=data,
        session_id=session_id,
    )
    if event_id:
        row.event_id = event_id
    session.add(row)
    session.commit()
    session.refresh(row)
    return row


def list_events(session: Session, charger_id: Optional[str] = None, limit: int = 100) -> list[ChargingEvent]:
    """Return events newest-first, optionally for one charger."""
    stmt = select(ChargingEvent)
    if charger_id:
        stmt = stmt.where(ChargingEvent.charger_id == charger_id)
    stmt = stmt.order_by(ChargingEvent.timestamp.desc()).limit(limit)
    return list(session.execute(stmt).scalars().all())
