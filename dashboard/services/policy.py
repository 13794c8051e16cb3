"""
Authorization policy: who may do what, and which records an identity can see.

Every function here is pure with respect to the store: it inspects the identity
(and, where needed, the already-loaded target) and either returns or raises
Forbidden. Handlers call these before touching the store for writes, and record
queries always pass through scope_records.
"""

import logging

from sqlalchemy.orm import Query

from dashboard.core.exceptions import Forbidden
from dashboard.models import Record
from dashboard.schemas.auth import Identity
from dashboard.schemas.users import UserPatch

logger = logging.getLogger(__name__)


def _deny(identity: Identity, action: str, message: str | None = None) -> Forbidden:
    logger.warning(
        "Access denied",
        extra={"user_id": identity.id, "role": identity.role, "action": action},
    )
    return Forbidden(message)


def require_admin(identity: Identity, action: str) -> None:
    """Admin-only operations: record writes and user create/list/delete."""
    if not identity.is_admin:
        raise _deny(identity, action)


def scope_records(query: Query, identity: Identity) -> Query:
    """Restrict a Record query to the rows the identity may see. Admins see everything."""
    if identity.is_admin:
        return query
    return query.filter(Record.owner_user_id == identity.id)


def ensure_can_view_record(identity: Identity, record: Record) -> None:
    if identity.is_admin or record.owner_user_id == identity.id:
        return
    raise _deny(identity, "view_record")


def ensure_self_or_admin(identity: Identity, user_id: int, action: str) -> None:
    """Viewing or updating a user is allowed for admins and for the user themself."""
    if identity.is_admin or identity.id == user_id:
        return
    raise _deny(identity, action)


def restrict_user_patch(identity: Identity, patch: UserPatch) -> UserPatch:
    """
    Drop fields the identity may not change.

    Non-admins can change their own username and password only; a role sent by
    them is ignored rather than rejected.
    """
    if identity.is_admin or patch.role is None:
        return patch
    logger.info("Ignoring role change in self-update", extra={"user_id": identity.id})
    return patch.model_copy(update={"role": None})


def ensure_can_delete_user(identity: Identity, user_id: int) -> None:
    """Admins may delete users, but never their own account."""
    require_admin(identity, "delete_user")
    if identity.id == user_id:
        raise _deny(identity, "delete_user", "You cannot delete your own account")
