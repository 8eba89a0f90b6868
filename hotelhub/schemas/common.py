
from typing import Any, Optional, List, Generic, TypeVar
from pydantic import BaseModel
from datetime import datetime

T = TypeVar("T")


# Paginated response wrapper: used by all list endpoints
class PaginatedResponse(BaseModel, Generic[T]):
    data: List[T]
    total: int
    page: int
    limit: int
    total_pages: int


# Error responses
class ErrorResponse(BaseModel):
    error: str
    message: str


class ConflictingBooking(BaseModel):
    booking_id: Any
    check_in: datetime
    check_out: datetime
    status: str


class AlternativeRoom(BaseModel):
    room_id: Any
    number: str
    type: str
    price: Optional[Any] = None


class ConflictErrorResponse(ErrorResponse):
    conflicts: List[ConflictingBooking]
    alternatives: List[AlternativeRoom] = []


def paginate(query, page: int, limit: int, serialize=None) -> PaginatedResponse:
    """Apply offset/limit to a query and wrap the page in a PaginatedResponse."""
    total = query.count()
    rows = query.offset((page - 1) * limit).limit(limit).all()
    return PaginatedResponse(
        data=[serialize(r) for r in rows] if serialize else rows,
        total=total,
        page=page,
        limit=limit,
        total_pages=-(-total // limit) if total else 0,
    )
