from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class BudgetCategoryBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None


class BudgetCategoryCreate(BudgetCategoryBase):
    class Config:
        extra = "forbid"


class BudgetCategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None

    class Config:
        extra = "forbid"


class BudgetCategoryResponse(BudgetCategoryBase):
    id: int
    budget_id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
