"""Record store: scoped listing, lookup and admin-only writes."""

import logging

from sqlalchemy.orm import Query, Session, contains_eager

from dashboard.core.exceptions import NotFound, ValidationError
from dashboard.models import Record, User
from dashboard.schemas.auth import Identity
from dashboard.schemas.records import RecordListParams, RecordWrite
from dashboard.services import policy
from dashboard.services.store import atomic

logger = logging.getLogger(__name__)

_SORT_COLUMNS = {
    "id": Record.id,
    "title": Record.title,
    "description": Record.description,
    "username": User.username,
}


def _apply_search(query: Query, term: str | None) -> Query:
    """Case-insensitive literal substring match on title, description or owner username."""
    if term is None:
        return query
    return query.filter(
        Record.title.icontains(term, autoescape=True)
        | Record.description.icontains(term, autoescape=True)
        | User.username.icontains(term, autoescape=True)
    )


def _apply_sort(query: Query, params: RecordListParams) -> Query:
    column = _SORT_COLUMNS.get(params.sort, Record.id)
    ordered = column.desc() if params.order == "desc" else column.asc()
    if params.sort == "id":
        return query.order_by(ordered)
    return query.order_by(ordered, Record.id.asc())


def build_record_query(
    db: Session, identity: Identity, params: RecordListParams | None = None
) -> Query:
    """
    Compose the record list query in a fixed order: join owner, scope, search, sort.

    The ownership scope is applied before anything else and regardless of params.
    """
    query = (
        db.query(Record)
        .join(User, User.id == Record.owner_user_id)
        .options(contains_eager(Record.owner))
    )
    query = policy.scope_records(query, identity)
    params = params or RecordListParams()
    query = _apply_search(query, params.search)
    return _apply_sort(query, params)


def list_records(
    db: Session, identity: Identity, params: RecordListParams | None = None
) -> list[Record]:
    return build_record_query(db, identity, params).all()


def _load_record(db: Session, record_id: int) -> Record:
    record = db.query(Record).filter(Record.id == record_id).first()
    if record is None:
        raise NotFound("Record not found")
    return record


def get_record(db: Session, identity: Identity, record_id: int) -> Record:
    """Return the record if it exists and the identity may see it (404 before 403)."""
    record = _load_record(db, record_id)
    policy.ensure_can_view_record(identity, record)
    return record


def _ensure_owner_exists(db: Session, user_id: int) -> None:
    if db.query(User.id).filter(User.id == user_id).first() is None:
        raise ValidationError("User not found")


def create_record(db: Session, identity: Identity, body: RecordWrite) -> Record:
    policy.require_admin(identity, "create_record")
    _ensure_owner_exists(db, body.user_id)
    record = Record(
        title=body.title,
        description=body.description,
        owner_user_id=body.user_id,
    )
    with atomic(db, "create_record"):
        db.add(record)
    db.refresh(record)
    logger.info(
        "Record created",
        extra={"record_id": record.id, "owner_user_id": record.owner_user_id, "by": identity.id},
    )
    return record


def update_record(db: Session, identity: Identity, record_id: int, body: RecordWrite) -> Record:
    """Replace title, description and owner of an existing record."""
    policy.require_admin(identity, "update_record")
    record = _load_record(db, record_id)
    _ensure_owner_exists(db, body.user_id)
    with atomic(db, "update_record"):
        record.title = body.title
        record.description = body.description
        record.owner_user_id = body.user_id
    db.refresh(record)
    logger.info("Record updated", extra={"record_id": record.id, "by": identity.id})
    return record


def delete_record(db: Session, identity: Identity, record_id: int) -> None:
    policy.require_admin(identity, "delete_record")
    with atomic(db, "delete_record"):
        deleted = (
            db.query(Record)
            .filter(Record.id == record_id)
            .delete(synchronize_session=False)
        )
        if deleted == 0:
            raise NotFound("Record not found")
    logger.info("Record deleted", extra={"record_id": record_id, "by": identity.id})
