"""Import all models here so metadata knows every table."""

from catalist.db.base_class import Base
from catalist.models import catalog  # noqa: F401

__all__ = ["Base"]
