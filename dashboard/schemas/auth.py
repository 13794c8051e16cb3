"""Request/response schemas for auth endpoints."""

from typing import Literal

from pydantic import BaseModel, Field

Role = Literal["admin", "user"]

ROLE_VALUES: frozenset[str] = frozenset({"admin", "user"})


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class Identity(BaseModel):
    """Verified identity carried by a token: who is calling and with which role."""

    model_config = {"frozen": True}

    id: int
    username: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class LoginResponse(BaseModel):
    """Signed token plus the identity it asserts."""

    token: str = Field(..., description="JWT access token; send as 'Authorization: Bearer <token>'")
    user: Identity


class MeResponse(BaseModel):
    """Response for GET /me."""

    user: Identity
