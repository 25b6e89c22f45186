"""Charging session model: one row per charging attempt."""
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Float, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from models import Base
from utils.clock import utcnow

SESSION_STATUSES = ("active", "completed", "cancelled", "error")


class ChargingSession(Base):
    """Session table, mutated in place as status reports arrive. last_updated is stamped on every write."""

    __tablename__ = "charging_session"

    session_id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    charger_id: Mapped[str] = mapped_column(String(255), nullable=False)
    station_name: Mapped[str] = mapped_column(String(255), nullable=False)
    user_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="active")
    duration: Mapped[float | None] = mapped_column(Float, nullable=True)  # seconds
    total_energy: Mapped[float | None] = mapped_column(Float, nullable=True)  # kWh
    total_cost: Mapped[float | None] = mapped_column(Float, nullable=True)
    cost_per_unit: Mapped[float | None] = mapped_column(Float, nullable=True)
    cost_per_minute: Mapped[float | None] = mapped_column(Float, nullable=True)
    payment_method: Mapped[str | None] = mapped_column(String(64), nullable=True)
    last_updated: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index("ix_charging_session_charger_id_start_time", "charger_id", "start_time"),
        # At most one active session per charger.
        Index(
            "uq_charging_session_active_charger",
            "charger_id",
            unique=True,
            sqlite_where=text("status = 'active'"),
            postgresql_where=text("status = 'active'"),
        ),
    )
