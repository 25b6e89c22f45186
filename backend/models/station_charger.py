"""Station charger model: a selectable charging point at a station."""
from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from models import Base


class StationCharger(Base):
    """Station charger table: charger_id, station_id, name, power_rating, status."""

    __tablename__ = "station_charger"

    charger_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    station_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("station.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    power_rating: Mapped[str] = mapped_column(String(64), nullable=False)
    # "available" | "in-use" | "offline"
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="available")
