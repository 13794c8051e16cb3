"""Credential store: user CRUD with role checks and the delete-user cascade."""

import logging

from sqlalchemy.orm import Session

from dashboard.core.config import Settings
from dashboard.core.exceptions import NotFound, ValidationError
from dashboard.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    hash_password,
)
from dashboard.models import Record, User
from dashboard.schemas.auth import ROLE_VALUES, Identity
from dashboard.schemas.users import UserCreate, UserPatch
from dashboard.services import policy
from dashboard.services.store import atomic

logger = logging.getLogger(__name__)


def _validate_username(username: str) -> str:
    username = username.strip()
    if not (USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN):
        raise ValidationError("Invalid username length")
    return username


def _validate_password(password: str) -> str:
    if not (PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
        raise ValidationError(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters"
        )
    return password


def _validate_role(role: str) -> str:
    if role not in ROLE_VALUES:
        raise ValidationError("Invalid role")
    return role


def _ensure_username_free(db: Session, username: str, exclude_id: int | None = None) -> None:
    query = db.query(User.id).filter(User.username == username)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    if query.first() is not None:
        raise ValidationError("Username already taken")


def _admin_count(db: Session) -> int:
    return db.query(User).filter(User.role == "admin").count()


def _load_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFound("User not found")
    return user


def list_users(db: Session, identity: Identity) -> list[User]:
    policy.require_admin(identity, "list_users")
    return db.query(User).order_by(User.id).all()


def get_user(db: Session, identity: Identity, user_id: int) -> User:
    """Admins can fetch anyone; a user can fetch themself. Forbidden is decided before lookup."""
    policy.ensure_self_or_admin(identity, user_id, "view_user")
    return _load_user(db, user_id)


def add_user(db: Session, username: str, password: str, role: str, settings: Settings) -> User:
    """Validate and insert a user. No policy check; callers are the admin endpoint, seeding and the CLI."""
    username = _validate_username(username)
    _validate_password(password)
    _validate_role(role)
    _ensure_username_free(db, username)
    user = User(
        username=username,
        password_hash=hash_password(password, rounds=settings.BCRYPT_ROUNDS),
        role=role,
    )
    with atomic(db, "create_user"):
        db.add(user)
    db.refresh(user)
    return user


def create_user(db: Session, identity: Identity, body: UserCreate, settings: Settings) -> User:
    policy.require_admin(identity, "create_user")
    user = add_user(db, body.username, body.password, body.role, settings)
    logger.info(
        "User created",
        extra={"user_id": user.id, "role": user.role, "by": identity.id},
    )
    return user


def update_user(
    db: Session,
    identity: Identity,
    user_id: int,
    patch: UserPatch,
    settings: Settings,
) -> User:
    """
    Apply a partial update.

    An unknown role is rejected even when the policy would drop it. A patch left
    empty after the policy runs is rejected. Demoting the last admin is refused.
    """
    policy.ensure_self_or_admin(identity, user_id, "update_user")
    if patch.role:
        _validate_role(patch.role)

    fields = policy.restrict_user_patch(identity, patch).present_fields()
    if not fields:
        raise ValidationError("Nothing to update")

    user = _load_user(db, user_id)
    values: dict[str, str] = {}
    if "username" in fields:
        username = _validate_username(fields["username"])
        _ensure_username_free(db, username, exclude_id=user.id)
        values["username"] = username
    if "password" in fields:
        _validate_password(fields["password"])
        values["password_hash"] = hash_password(
            fields["password"], rounds=settings.BCRYPT_ROUNDS
        )
    if "role" in fields:
        if user.role == "admin" and fields["role"] != "admin" and _admin_count(db) <= 1:
            raise ValidationError("Cannot remove the last admin")
        values["role"] = fields["role"]

    with atomic(db, "update_user"):
        db.query(User).filter(User.id == user.id).update(values, synchronize_session="fetch")
    db.refresh(user)
    logger.info(
        "User updated",
        extra={"user_id": user.id, "fields": sorted(fields), "by": identity.id},
    )
    return user


def delete_user(db: Session, identity: Identity, user_id: int) -> int:
    """
    Delete a user and every record they own in a single transaction.

    Returns the number of records removed by the cascade.
    """
    policy.require_admin(identity, "delete_user")
    user = _load_user(db, user_id)
    policy.ensure_can_delete_user(identity, user.id)
    if user.role == "admin" and _admin_count(db) <= 1:
        raise ValidationError("Cannot remove the last admin")

    with atomic(db, "delete_user"):
        records_deleted = (
            db.query(Record)
            .filter(Record.owner_user_id == user.id)
            .delete(synchronize_session=False)
        )
        db.query(User).filter(User.id == user.id).delete(synchronize_session=False)
    logger.info(
        "User deleted",
        extra={"user_id": user_id, "records_deleted": records_deleted, "by": identity.id},
    )
    return records_deleted
