from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class TransactionTypeCreate(BaseModel):
    label: str = Field(..., min_length=1, max_length=50)

    class Config:
        extra = "forbid"


class TransactionTypeUpdate(BaseModel):
    label: Optional[str] = Field(None, min_length=1, max_length=50)

    class Config:
        extra = "forbid"


class TransactionTypeResponse(BaseModel):
    id: int
    budget_id: Optional[int] = None  # None for shared, predefined types
    label: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
