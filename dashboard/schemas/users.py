"""Request/response schemas for user management."""

from pydantic import BaseModel, Field


class UserOut(BaseModel):
    """User as returned by the API (never includes the password hash)."""

    model_config = {"from_attributes": True}

    id: int
    username: str
    role: str


class UserCreate(BaseModel):
    """Body for POST /users. Role is checked by the service so the error reads 'Invalid role'."""

    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)
    role: str = Field(..., min_length=1)


class UserPatch(BaseModel):
    """
    Partial update for PUT /users/{id}. Every field is optional; empty strings count as absent.

    A non-admin's role is dropped by the policy before the patch is applied.
    """

    username: str | None = None
    password: str | None = None
    role: str | None = None

    def present_fields(self) -> dict[str, str]:
        """Fields that carry a value (None and '' are treated as not sent)."""
        return {
            name: value
            for name, value in self.model_dump().items()
            if value is not None and value != ""
        }


class MessageResponse(BaseModel):
    message: str
