from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime


class UserBase(BaseModel):
    email: EmailStr


class UserCreate(UserBase):
    name: Optional[str] = Field(None, max_length=100)
    password: str = Field(..., min_length=8, max_length=72)

    class Config:
        extra = "forbid"


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None

    class Config:
        extra = "forbid"


class UserProfile(UserBase):
    id: int
    external_id: Optional[str] = None
    name: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
