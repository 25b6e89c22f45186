"""Command repository: save, latest pending, mark executed."""
from typing import Any, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from models.command import Command
from utils.clock import utcnow


def create_command(
    session: Session,
    *,
    charger_id: str,
    station_name: str,
    command: str,
    command_id: Optional[str] = None,
) -> Command:
    """Insert a pending (executed=False) command, commit, and return it."""
    row = Command(
        charger_id=charger_id,
        station_name=station_name,
        command=command,
        executed=False,
        timestamp=utcnow(),
    )
    if command_id:
        row.command_id = command_id
    session.add(row)
    session.commit()
    session.refresh(row)
    return row


def get_command(session: Session, command_id: str) -> Optional[Command]:
    """Return a command by id or None."""
    return session.get(Command, command_id)


def get_latest_pending_command(session: Session, charger_id: str) -> Optional[Command]:
    """Return the newest not-yet-executed command for a charger or None."""
    return session.execute(
        select(Command)
        .where(Command.charger_id == charger_id, Command.executed.is_(False))
        .order_by(Command.timestamp.desc())
        .limit(1)
    ).scalar_one_or_none()


def mark_command_executed(
    session: Session,
    command_id: str,
    response: Optional[dict[str, Any]] = None,
) -> bool:
    """Set executed=True with response and executed_at. Only pending rows change.

    Returns True if a row was updated, False if unknown or already executed.
    """
    result = session.execute(
        update(Command)
        .where(Command.command_id == command_id, Command.executed.is_(False))
        .values(executed=True, response=response, executed_at=utcnow())
        .execution_options(synchronize_session="fetch")
    )
    session.commit()
    return (result.rowcount or 0) > 0
