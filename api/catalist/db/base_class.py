"""SQLAlchemy declarative base shared by the row-store tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base; every model names its table explicitly."""
