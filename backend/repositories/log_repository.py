"""System log repository: append and list."""
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from models.system_log import SystemLog


def create_log(
    session: Session,
    *,
    level: str,
    message: str,
    source: str,
    data: Optional[Any] = None,
) -> SystemLog:
    """Insert a log row and commit."""
    row = SystemLog(level=level, message=message, source=source, data=data)
    session.add(row)
    session.commit()
    return row


def list_logs(session: Session, level: Optional[str] = None, limit: int = 100) -> list[SystemLog]:
    """Return logs newest-first, optionally filtered by level."""
    stmt = select(SystemLog)
    if level:
        stmt = stmt.where(SystemLog.level == level)
    stmt = stmt.order_by(SystemLog.timestamp.desc()).limit(limit)
    return list(session.execute(stmt).scalars().all())
