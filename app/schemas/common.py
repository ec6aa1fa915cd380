from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


class Envelope(BaseModel, Generic[DataT]):
    """Uniform success body: ``{"data": ..., "message": ...}``"""
    data: DataT
    message: str


class ErrorDetails(BaseModel):
    issues: List[Any] = []
    method: str
    url: str
    stack: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
    message: str
    details: ErrorDetails
