from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class BudgetBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    amount: int = Field(0, ge=0)


class BudgetCreate(BudgetBase):
    class Config:
        extra = "forbid"


class BudgetUpdate(BaseModel):
    # id, user_id and timestamps are not accepted here
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    amount: Optional[int] = Field(None, ge=0)

    class Config:
        extra = "forbid"


class BudgetResponse(BudgetBase):
    id: int
    user_id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
