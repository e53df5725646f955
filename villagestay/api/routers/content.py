# villagestay/api/routers/content.py
"""
Public blog, attraction and culinary pages: published entries only.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from villagestay.db import crud_content
from villagestay.db.models import Attraction, Culinary
from villagestay.db.session import get_db
from villagestay.schemas.content import (
    AttractionOut,
    CategoryOut,
    CulinaryOut,
    PostOut,
)

router = APIRouter()


@router.get("/posts")
async def list_posts(
    category: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    posts = await crud_content.list_published_posts(db, category_slug=category)
    return [PostOut.model_validate(p) for p in posts]


@router.get("/posts/{slug}")
async def get_post(slug: str, db: AsyncSession = Depends(get_db)):
    post = await crud_content.get_published_post_by_slug(db, slug)
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return PostOut.model_validate(post)


@router.get("/categories")
async def list_categories(db: AsyncSession = Depends(get_db)):
    categories = await crud_content.list_categories(db)
    return [CategoryOut.model_validate(c) for c in categories]


@router.get("/attractions")
async def list_attractions(db: AsyncSession = Depends(get_db)):
    items = await crud_content.list_published(db, Attraction)
    return [AttractionOut.model_validate(a) for a in items]


@router.get("/attractions/{slug}")
async def get_attraction(slug: str, db: AsyncSession = Depends(get_db)):
    item = await crud_content.get_published_by_slug(db, Attraction, slug)
    if not item:
        raise HTTPException(status_code=404, detail="Attraction not found")
    return AttractionOut.model_validate(item)


@router.get("/culinary")
async def list_culinary(db: AsyncSession = Depends(get_db)):
    items = await crud_content.list_published(db, Culinary)
    return [CulinaryOut.model_validate(c) for c in items]


@router.get("/culinary/{slug}")
async def get_culinary(slug: str, db: AsyncSession = Depends(get_db)):
    item = await crud_content.get_published_by_slug(db, Culinary, slug)
    if not item:
        raise HTTPException(status_code=404, detail="Culinary spot not found")
    return CulinaryOut.model_validate(item)
