"""Charging event model: append-only log of charger activity."""
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import JSON

from models import Base
from utils.clock import utcnow


class ChargingEvent(Base):
    """Event table: event_id, charger_id, station_name, event_type, timestamp, data, session_id.

    Rows are never updated after insert.
    """

    __tablename__ = "charging_event"

    event_id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    charger_id: Mapped[str] = mapped_column(String(255), nullable=False)
    station_name: Mapped[str] = mapped_column(String(255), nullable=False)
    # "start" | "stop" | "error" | "status_update"
    event_type: Mapped[str] = mapped_column(String(32), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    # status, voltage, current, power, energy, temperature, duration, cost fields, errorCode, ...
    data: Mapped[dict | None] = mapped_column(JSON(), nullable=True)
    session_id: Mapped[str | None] = mapped_column(String(36), nullable=True)

    __table_args__ = (Index("ix_charging_event_charger_id_timestamp", "charger_id", "timestamp"),)
