"""
Response envelopes shared by every router
"""
from typing import Annotated, Generic, List, Optional, TypeVar
from pydantic import BaseModel, Field

from blog_api.config import MAX_ID

T = TypeVar("T")

# Primary/foreign key values accepted from clients
RecordId = Annotated[int, Field(ge=1, le=MAX_ID)]


class Envelope(BaseModel, Generic[T]):
    """Single object wrapped as {success, data}"""
    success: bool = True
    data: T


class ListEnvelope(BaseModel, Generic[T]):
    """List of objects with its length"""
    success: bool = True
    count: int
    data: List[T]


class PaginatedEnvelope(ListEnvelope[T], Generic[T]):
    """One page of a larger result set"""
    total: int
    page: int
    pages: int


class EmptyEnvelope(BaseModel):
    """Returned after a delete"""
    success: bool = True
    data: dict = Field(default_factory=dict)


class ErrorDetail(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: Optional[List[ErrorDetail]] = None
