"""System log model: append-only diagnostic and audit trail."""
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import JSON

from models import Base
from utils.clock import utcnow

LOG_LEVELS = ("info", "warning", "error", "debug")


class SystemLog(Base):
    """Log table: id, level, message, timestamp, source, data."""

    __tablename__ = "system_log"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    level: Mapped[str] = mapped_column(String(16), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    source: Mapped[str] = mapped_column(String(64), nullable=False)
    data: Mapped[dict | list | None] = mapped_column(JSON(), nullable=True)

    __table_args__ = (Index("ix_system_log_level_timestamp", "level", "timestamp"),)
