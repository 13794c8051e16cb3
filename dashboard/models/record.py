"""ORM model for records owned by a user."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from dashboard.models.base import Base


class Record(Base):
    """
    A titled record owned by exactly one user.

    Only admins write records; regular users read the ones they own.
    """

    __tablename__ = "records"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    owner_user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # One-directional: user deletion removes records with an explicit bulk delete.
    owner = relationship("User", lazy="joined")
