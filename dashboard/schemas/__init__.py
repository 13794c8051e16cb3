"""Pydantic request/response schemas."""

from dashboard.schemas.auth import Identity, LoginRequest, LoginResponse, MeResponse, Role
from dashboard.schemas.records import RecordListParams, RecordOut, RecordWrite
from dashboard.schemas.users import MessageResponse, UserCreate, UserOut, UserPatch

__all__ = [
    "Identity",
    "LoginRequest",
    "LoginResponse",
    "MeResponse",
    "MessageResponse",
    "RecordListParams",
    "RecordOut",
    "RecordWrite",
    "Role",
    "UserCreate",
    "UserOut",
    "UserPatch",
]
