# villagestay/schemas/user.py
from typing import Literal, Optional
from pydantic import BaseModel, EmailStr, Field


class UserBase(BaseModel):
    id: int
    name: str
    email: EmailStr
    phone: Optional[str] = None
    role: str
    image: Optional[str] = None

    model_config = {"from_attributes": True}


class UserCreate(BaseModel):
    name: str = Field(min_length=2, max_length=255)
    email: EmailStr
    password: str = Field(min_length=6)
    phone: Optional[str] = Field(default=None, max_length=32)


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserProfileUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=32)
    image: Optional[str] = Field(default=None, max_length=500)


class UserRoleUpdate(BaseModel):
    role: Literal["user", "admin"]


class UserSummary(BaseModel):
    """
    What other users get to see (review authors).
    """
    id: int
    name: str
    image: Optional[str] = None

    model_config = {"from_attributes": True}


class UserContact(UserSummary):
    email: EmailStr


class UserOut(UserBase):
    pass
