"""Token issuance (login) and verification (per request). Stateless: no server-side sessions."""

import logging

import jwt
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from dashboard.core.config import Settings
from dashboard.core.exceptions import InvalidCredentials, InvalidToken, MissingToken
from dashboard.core.security import create_access_token, decode_access_token, verify_password
from dashboard.models import User
from dashboard.schemas.auth import Identity

logger = logging.getLogger(__name__)


def issue_token(
    db: Session, username: str, password: str, settings: Settings
) -> tuple[str, Identity]:
    """
    Check credentials and return (token, identity).

    Unknown username and wrong password raise the same InvalidCredentials so a
    caller cannot tell which one happened.
    """
    user = db.query(User).filter(User.username == username).first()
    if user is None or not verify_password(password, user.password_hash):
        logger.warning("Login failed", extra={"username": username[:255]})
        raise InvalidCredentials()

    identity = Identity(id=user.id, username=user.username, role=user.role)
    token = create_access_token(identity.id, identity.username, identity.role, settings)
    logger.info("Login succeeded", extra={"user_id": identity.id, "role": identity.role})
    return token, identity


def verify_token(token: str | None, settings: Settings) -> Identity:
    """Return the identity embedded in a valid token. Does not consult the store."""
    if not token:
        raise MissingToken()
    try:
        payload = decode_access_token(token, settings)
    except jwt.PyJWTError as e:
        raise InvalidToken() from e
    try:
        return Identity(
            id=int(payload["sub"]),
            username=payload["username"],
            role=payload["role"],
        )
    except (KeyError, TypeError, ValueError, PydanticValidationError) as e:
        raise InvalidToken() from e
