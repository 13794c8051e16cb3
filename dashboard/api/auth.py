"""Login and current-identity endpoints."""

from fastapi import APIRouter

from dashboard.api.deps import AppSettings, CurrentIdentity, DbSession
from dashboard.schemas.auth import LoginRequest, LoginResponse, MeResponse
from dashboard.services.auth import issue_token

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, db: DbSession, settings: AppSettings) -> LoginResponse:
    """
    Authenticate with username and password; returns a JWT and the user it identifies.
    Include the token in the Authorization header as: Bearer <token>
    """
    token, identity = issue_token(db, body.username, body.password, settings)
    return LoginResponse(token=token, user=identity)


@router.get("/me", response_model=MeResponse)
def me(identity: CurrentIdentity) -> MeResponse:
    """Return the identity carried by the presented token."""
    return MeResponse(user=identity)
