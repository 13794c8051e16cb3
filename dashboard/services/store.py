"""Transaction helpers shared by the record and user services."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dashboard.core.exceptions import StoreError

logger = logging.getLogger(__name__)


@contextmanager
def atomic(db: Session, action: str) -> Iterator[Session]:
    """
    Run the block as one transaction: commit on success, roll back on any error.

    SQLAlchemy errors are logged with traceback and re-raised as StoreError so the
    driver's message never reaches the client.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Store failure during %s", action)
        raise StoreError() from e
    except Exception:
        db.rollback()
        raise
