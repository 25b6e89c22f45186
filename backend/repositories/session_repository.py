"""Charging session repository: create, update, list."""
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from models.charging_session import ChargingSession
from utils.clock import utcnow

# Columns a caller may change through update_session.
UPDATABLE_FIELDS = frozenset(
    {
        "status",
        "end_time",
        "duration",
        "total_energy",
        "total_cost",
        "cost_per_unit",
        "cost_per_minute",
        "payment_method",
        "user_id",
    }
)


def get_session(session: Session, session_id: str) -> Optional[ChargingSession]:
    """Return a charging session by id or None."""
    return session.get(ChargingSession, session_id)


def get_active_session(session: Session, charger_id: str) -> Optional[ChargingSession]:
    """Return the active session for a charger or None."""
    return session.execute(
        select(ChargingSession)
        .where(ChargingSession.charger_id == charger_id, ChargingSession.status == "active")
        .order_by(ChargingSession.start_time.desc())
        .limit(1)
    ).scalar_one_or_none()


def create_session(
    session: Session,
    *,
    charger_id: str,
    station_name: str,
    user_id: Optional[str] = None,
    payment_method: Optional[str] = None,
    cost_per_unit: Optional[float] = None,
    cost_per_minute: Optional[float] = None,
    session_id: Optional[str] = None,
) -> ChargingSession:
    """Cancel any active session for the charger, insert a new active one, commit, and return it."""
    now = utcnow()
    previous = get_active_session(session, charger_id)
    if previous is not None:
        previous.status = "cancelled"
        previous.end_time = now
        previous.last_updated = now
        session.flush()  # release the active-session index slot before the insert
    row = ChargingSession(
        charger_id=charger_id,
        station_name=station_name,
        user_id=user_id,
        payment_method=payment_method,
        cost_per_unit=cost_per_unit,
        cost_per_minute=cost_per_minute,
        status="active",
        start_time=now,
        last_updated=now,
    )
    if session_id:
        row.session_id = session_id
    session.add(row)
    session.commit()
    session.refresh(row)
    return row


def update_session(session: Session, session_id: str, updates: dict[str, Any]) -> Optional[ChargingSession]:
    """Apply updates and stamp last_updated. Returns the session or None if not found.

    Raises ValueError for fields outside UPDATABLE_FIELDS.
    """
    unknown = set(updates) - UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Cannot update session fields: {', '.join(sorted(unknown))}")
    row = get_session(session, session_id)
    if row is None:
        return None
    for key, value in updates.items():
        setattr(row, key, value)
    row.last_updated = utcnow()
    session.commit()
    session.refresh(row)
    return row


def list_sessions(session: Session, charger_id: Optional[str] = None, limit: int = 50) -> list[ChargingSession]:
    """Return sessions newest-first by start_time, optionally for one charger."""
    stmt = select(ChargingSession)
    if charger_id:
        stmt = stmt.where(ChargingSession.charger_id == charger_id)
    stmt = stmt.order_by(ChargingSession.start_time.desc()).limit(limit)
    return list(session.execute(stmt).scalars().all())
