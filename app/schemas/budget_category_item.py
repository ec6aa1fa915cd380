from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class BudgetCategoryItemBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    amount: int = Field(0, ge=0)


class BudgetCategoryItemCreate(BudgetCategoryItemBase):
    class Config:
        extra = "forbid"


class BudgetCategoryItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    amount: Optional[int] = Field(None, ge=0)

    class Config:
        extra = "forbid"


class BudgetCategoryItemResponse(BudgetCategoryItemBase):
    id: int
    category_id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
