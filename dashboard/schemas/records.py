"""Request/response schemas for records and the record list query."""

from typing import Literal

from pydantic import BaseModel, Field

# Fields the record list may be sorted by; anything else falls back to DEFAULT_SORT.
SORTABLE_FIELDS: tuple[str, ...] = ("id", "title", "description", "username")
DEFAULT_SORT = "id"

SortOrder = Literal["asc", "desc"]


class RecordOut(BaseModel):
    """Record as returned by the API, with the owner's username joined in."""

    id: int
    title: str
    description: str
    user_id: int = Field(..., description="Owner user id")
    username: str = Field(..., description="Owner username")

    @classmethod
    def from_record(cls, record) -> "RecordOut":
        return cls(
            id=record.id,
            title=record.title,
            description=record.description,
            user_id=record.owner_user_id,
            username=record.owner.username,
        )


class RecordWrite(BaseModel):
    """Body for POST /records and PUT /records/{id}; all fields required (full replacement)."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    user_id: int = Field(..., ge=1, le=2**63 - 1, description="Owner user id")


class RecordListParams(BaseModel):
    """
    Normalized search/sort parameters for listing records.

    Built with from_query so that unknown or malformed values degrade to defaults
    instead of failing the request.
    """

    search: str | None = None
    sort: str = DEFAULT_SORT
    order: SortOrder = "asc"

    @classmethod
    def from_query(
        cls,
        search: str | None = None,
        sort: str | None = None,
        order: str | None = None,
    ) -> "RecordListParams":
        term = search if search is not None and search.strip() else None
        if sort and sort not in SORTABLE_FIELDS:
            # Unknown field: the whole ordering falls back to the default (id ascending).
            return cls(search=term)
        sort_order: SortOrder = "desc" if order and order.strip().lower() == "desc" else "asc"
        return cls(search=term, sort=sort or DEFAULT_SORT, order=sort_order)
