"""SQLAlchemy ORM models."""

from dashboard.models.base import Base
from dashboard.models.record import Record
from dashboard.models.user import User

__all__ = ["Base", "Record", "User"]
