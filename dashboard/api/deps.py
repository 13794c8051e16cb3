"""Request dependencies: settings and DB session from app.state, bearer identity, admin gate."""

from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, Path, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from dashboard.core.config import Settings
from dashboard.schemas.auth import Identity
from dashboard.services import policy
from dashboard.services.auth import verify_token

security = HTTPBearer(auto_error=False)

# Largest id a signed 64-bit INTEGER column can hold.
MAX_ID = 2**63 - 1


def get_app_settings(request: Request) -> Settings:
    """Settings the app was created with."""
    return request.app.state.settings


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> Identity:
    """Require a valid Bearer JWT and return the identity it carries. 401 if missing, 403 if invalid."""
    token = credentials.credentials if credentials is not None else None
    return verify_token(token, settings)


def require_admin(
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> Identity:
    """Require an authenticated admin. Raises Forbidden for anyone else."""
    policy.require_admin(identity, "admin_route")
    return identity


DbSession = Annotated[Session, Depends(get_db)]
CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
AdminIdentity = Annotated[Identity, Depends(require_admin)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]
ResourceId = Annotated[int, Path(ge=1, le=MAX_ID)]
