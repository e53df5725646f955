# villagestay/schemas/content.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class CategoryIn(BaseModel):
    name: str = Field(min_length=2, max_length=100)

    model_config = {"str_strip_whitespace": True}


class CategoryOut(BaseModel):
    id: int
    name: str
    slug: str

    model_config = {"from_attributes": True}


class AuthorOut(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class PostCreate(BaseModel):
    title: str = Field(min_length=5, max_length=255)
    content: str = Field(min_length=20)
    excerpt: Optional[str] = None
    cover_image: Optional[str] = None
    category_id: int
    published: bool = False

    model_config = {"str_strip_whitespace": True}


class PostUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=5, max_length=255)
    content: Optional[str] = Field(default=None, min_length=20)
    excerpt: Optional[str] = None
    cover_image: Optional[str] = None
    category_id: Optional[int] = None
    published: Optional[bool] = None

    model_config = {"str_strip_whitespace": True}

    @field_validator("title", "content", "published")
    @classmethod
    def required_not_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v


class PostOut(BaseModel):
    id: int
    title: str
    slug: str
    content: str
    excerpt: Optional[str] = None
    cover_image: Optional[str] = None
    published: bool
    created_at: datetime
    author: Optional[AuthorOut] = None
    category: Optional[CategoryOut] = None

    model_config = {"from_attributes": True}


class PlaceCreate(BaseModel):
    """
    Shared by attractions and culinary spots.
    """
    name: str = Field(min_length=3, max_length=255)
    description: str = Field(min_length=20)
    location: str = Field(min_length=1, max_length=255)
    photos: List[str] = []
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    maps_embed_code: Optional[str] = None
    featured: bool = False
    published: bool = False

    model_config = {"str_strip_whitespace": True}


class PlaceUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=3, max_length=255)
    description: Optional[str] = Field(default=None, min_length=20)
    location: Optional[str] = Field(default=None, min_length=1, max_length=255)
    photos: Optional[List[str]] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    maps_embed_code: Optional[str] = None
    featured: Optional[bool] = None
    published: Optional[bool] = None

    model_config = {"str_strip_whitespace": True}

    @field_validator("name", "description", "location", "photos", "featured", "published")
    @classmethod
    def required_not_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v


class AttractionOut(BaseModel):
    id: int
    name: str
    slug: str
    description: str
    location: str
    photos: List[str] = []
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    maps_embed_code: Optional[str] = None
    featured: bool
    published: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class CulinaryCreate(PlaceCreate):
    price_range: Optional[str] = Field(default=None, max_length=100)


class CulinaryUpdate(PlaceUpdate):
    price_range: Optional[str] = Field(default=None, max_length=100)


class CulinaryOut(AttractionOut):
    price_range: Optional[str] = None
