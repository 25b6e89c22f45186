"""Station model for DB persistence."""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from models import Base


class Station(Base):
    """Station table: id, name, city, address."""

    __tablename__ = "station"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(512), nullable=False)
