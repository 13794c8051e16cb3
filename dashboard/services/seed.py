"""Bootstrap seeding: default accounts and sample records on first start against an empty store."""

import logging

from sqlalchemy.orm import Session

from dashboard.core.config import Settings
from dashboard.models import Record, User
from dashboard.services.store import atomic
from dashboard.services.users import add_user

logger = logging.getLogger(__name__)

DEFAULT_USERS: tuple[tuple[str, str, str], ...] = (
    ("admin", "admin123", "admin"),
    ("user", "user123", "user"),
)

# (title, description) pairs owned by the default regular user.
SAMPLE_RECORDS: tuple[tuple[str, str], ...] = (
    ("Sample Record 1", "This is a sample record"),
    ("Sample Record 2", "Another sample record"),
)


def seed_if_empty(db: Session, settings: Settings) -> bool:
    """
    Insert the default admin and user plus two records for the user.

    Does nothing when any user already exists. Returns True if seeding ran.
    """
    if db.query(User.id).first() is not None:
        return False

    created = {
        username: add_user(db, username, password, role, settings)
        for username, password, role in DEFAULT_USERS
    }
    owner = created["user"]
    with atomic(db, "seed_records"):
        for title, description in SAMPLE_RECORDS:
            db.add(Record(title=title, description=description, owner_user_id=owner.id))

    logger.info(
        "Seeded empty store",
        extra={"users_created": len(created), "records_created": len(SAMPLE_RECORDS)},
    )
    return True
