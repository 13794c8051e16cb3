"""Record endpoints. Listing and lookup are scoped by role; writes are admin-only."""

from fastapi import APIRouter, status

from dashboard.api.deps import AdminIdentity, CurrentIdentity, DbSession, ResourceId
from dashboard.schemas.records import RecordListParams, RecordOut, RecordWrite
from dashboard.schemas.users import MessageResponse
from dashboard.services import records as record_service

router = APIRouter()


@router.get("", response_model=list[RecordOut])
def list_records(
    identity: CurrentIdentity,
    db: DbSession,
    sort: str | None = None,
    order: str | None = None,
    search: str | None = None,
) -> list[RecordOut]:
    """
    List records visible to the caller: all for admins, own records for users.

    Optional query parameters: search (case-insensitive substring of title,
    description or owner username), sort (id, title, description, username;
    anything else means id), order (asc or desc).
    """
    params = RecordListParams.from_query(search=search, sort=sort, order=order)
    rows = record_service.list_records(db, identity, params)
    return [RecordOut.from_record(r) for r in rows]


@router.get("/{record_id}", response_model=RecordOut)
def get_record(record_id: ResourceId, identity: CurrentIdentity, db: DbSession) -> RecordOut:
    return RecordOut.from_record(record_service.get_record(db, identity, record_id))


@router.post("", response_model=RecordOut, status_code=status.HTTP_201_CREATED)
def create_record(body: RecordWrite, identity: AdminIdentity, db: DbSession) -> RecordOut:
    return RecordOut.from_record(record_service.create_record(db, identity, body))


@router.put("/{record_id}", response_model=RecordOut)
def update_record(
    record_id: ResourceId, body: RecordWrite, identity: AdminIdentity, db: DbSession
) -> RecordOut:
    return RecordOut.from_record(record_service.update_record(db, identity, record_id, body))


@router.delete("/{record_id}", response_model=MessageResponse)
def delete_record(
    record_id: ResourceId, identity: AdminIdentity, db: DbSession
) -> MessageResponse:
    record_service.delete_record(db, identity, record_id)
    return MessageResponse(message="Record deleted")
