"""Command model: directives queued for a polling charger consumer."""
import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import JSON

from models import Base
from utils.clock import utcnow

VALID_COMMANDS = ("start", "stop", "status", "reset")


class Command(Base):
    """Command table: command_id, charger_id, station_name, command, timestamp, executed, response, executed_at."""

    __tablename__ = "command"

    command_id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    charger_id: Mapped[str] = mapped_column(String(255), nullable=False)
    station_name: Mapped[str] = mapped_column(String(255), nullable=False)
    command: Mapped[str] = mapped_column(String(16), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    executed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Status report that completed the command (status, duration, cost fields, message).
    response: Mapped[dict | None] = mapped_column(JSON(), nullable=True)
    executed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (Index("ix_command_charger_id_executed_timestamp", "charger_id", "executed", "timestamp"),)
