from pydantic import BaseModel
from typing import Optional
from datetime import date as Date, datetime


class TransactionBase(BaseModel):
    amount: int
    date: Date
    description: Optional[str] = None
    item_id: Optional[int] = None
    transaction_type_id: Optional[int] = None


class TransactionCreate(TransactionBase):
    class Config:
        extra = "forbid"


class TransactionUpdate(BaseModel):
    # budget_id / user_id are fixed at creation
    amount: Optional[int] = None
    date: Optional[Date] = None
    description: Optional[str] = None
    item_id: Optional[int] = None
    transaction_type_id: Optional[int] = None

    class Config:
        extra = "forbid"


class TransactionResponse(TransactionBase):
    id: int
    user_id: int
    budget_id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
