# villagestay/schemas/contact.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field


class ContactInfoIn(BaseModel):
    email: EmailStr
    phone: str = Field(min_length=1, max_length=50)
    address: str = Field(min_length=1, max_length=500)
    maps_embed_code: Optional[str] = None


class ContactInfoOut(BaseModel):
    id: int
    email: str
    phone: str
    address: str
    maps_embed_code: Optional[str] = None

    model_config = {"from_attributes": True}


class ContactMessageCreate(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    subject: str = Field(min_length=5, max_length=200)
    message: str = Field(min_length=10, max_length=5000)

    model_config = {"str_strip_whitespace": True}


class ContactMessageOut(BaseModel):
    id: int
    name: str
    email: str
    subject: str
    message: str
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}


class MessageStatusUpdate(BaseModel):
    status: Literal["UNREAD", "READ", "REPLIED"]


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class ContactMessagePage(BaseModel):
    data: List[ContactMessageOut]
    pagination: Pagination
