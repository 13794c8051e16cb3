"""User management endpoints. Admins manage everyone; users may read and edit themselves."""

from fastapi import APIRouter, status

from dashboard.api.deps import (
    AdminIdentity,
    AppSettings,
    CurrentIdentity,
    DbSession,
    ResourceId,
)
from dashboard.schemas.users import MessageResponse, UserCreate, UserOut, UserPatch
from dashboard.services import users as user_service

router = APIRouter()


@router.get("", response_model=list[UserOut])
def list_users(identity: AdminIdentity, db: DbSession) -> list[UserOut]:
    """List all users ordered by id (admin only)."""
    return [UserOut.model_validate(u) for u in user_service.list_users(db, identity)]


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: ResourceId, identity: CurrentIdentity, db: DbSession) -> UserOut:
    return UserOut.model_validate(user_service.get_user(db, identity, user_id))


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreate, identity: AdminIdentity, db: DbSession, settings: AppSettings
) -> UserOut:
    return UserOut.model_validate(user_service.create_user(db, identity, body, settings))


@router.put("/{user_id}", response_model=UserOut)
def update_user(
    user_id: ResourceId,
    body: UserPatch,
    identity: CurrentIdentity,
    db: DbSession,
    settings: AppSettings,
) -> UserOut:
    """
    Update username, password or role. Admins may change any field of any user;
    a user may change their own username and password (a role sent by them is ignored).
    """
    return UserOut.model_validate(
        user_service.update_user(db, identity, user_id, body, settings)
    )


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: ResourceId, identity: AdminIdentity, db: DbSession
) -> MessageResponse:
    """Delete a user and all records they own (admin only, never your own account)."""
    user_service.delete_user(db, identity, user_id)
    return MessageResponse(message="User and associated records deleted")
