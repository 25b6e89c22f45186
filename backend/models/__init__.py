"""SQLAlchemy declarative base for the charging platform tables."""
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all DB models."""
    pass
