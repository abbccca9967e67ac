"""Shared response envelopes and pagination metadata."""

from datetime import datetime, timezone
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# camelCase on the wire, snake_case in Python.
CAMEL_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "from_attributes": True,
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int

    model_config = CAMEL_CONFIG

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        # Ceiling division keeps total_pages exact for any positive limit.
        return cls(page=page, limit=limit, total=total, total_pages=-(-total // limit))


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope used by the create endpoints."""
    success: bool = True
    message: str = "Success"
    data: Optional[T] = None
    timestamp: datetime = Field(default_factory=_utc_now)

    model_config = CAMEL_CONFIG


class PaginatedResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str = "Success"
    items: List[T]
    pagination: Pagination
    timestamp: datetime = Field(default_factory=_utc_now)

    model_config = CAMEL_CONFIG
