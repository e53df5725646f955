# villagestay/db/crud_content.py
"""
Blog posts, categories, attractions and culinary spots.

These are plain slugged records; the helpers are shared and take the model
class as their first argument where it matters.
"""
from typing import List, Optional, Type

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from villagestay.core.exceptions import DuplicateSlug, InvalidName
from villagestay.core.utils import generate_slug
from villagestay.db.models import Category, Post


def _post_options(stmt):
    return stmt.options(selectinload(Post.author), selectinload(Post.category))


async def slug_exists(
    db: AsyncSession,
    model: Type,
    slug: str,
    exclude_id: Optional[int] = None,
) -> bool:
    stmt = select(model.id).where(model.slug == slug)
    if exclude_id is not None:
        stmt = stmt.where(model.id != exclude_id)
    res = await db.execute(stmt.limit(1))
    return res.first() is not None


async def list_published(db: AsyncSession, model: Type) -> List:
    stmt = (
        select(model)
        .where(model.published.is_(True))
        .order_by(model.created_at.desc(), model.id.desc())
    )
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def get_published_by_slug(db: AsyncSession, model: Type, slug: str):
    stmt = select(model).where(model.slug == slug, model.published.is_(True))
    res = await db.execute(stmt)
    return res.scalars().first()


async def list_all(db: AsyncSession, model: Type) -> List:
    res = await db.execute(select(model).order_by(model.id.desc()))
    return list(res.scalars().all())


async def get_item(db: AsyncSession, model: Type, item_id: int):
    res = await db.execute(select(model).where(model.id == item_id))
    return res.scalars().first()


async def create_item(db: AsyncSession, model: Type, *, source: str, **kwargs):
    """
    Create a record whose slug is generated from ``source`` (its title or name).
    """
    slug = generate_slug(source)
    if not slug:
        raise InvalidName()
    if await slug_exists(db, model, slug):
        raise DuplicateSlug(f"A {model.__tablename__} entry with this name already exists")
    item = model(slug=slug, **kwargs)
    db.add(item)
    await db.commit()
    await db.refresh(item)
    return item


async def update_item(db: AsyncSession, item, data: dict, *, source: Optional[str] = None):
    """
    Apply every field in ``data``, None included; a new ``source``
    regenerates the slug.
    """
    if source:
        slug = generate_slug(source)
        if not slug:
            raise InvalidName()
        if slug != item.slug and await slug_exists(db, type(item), slug, item.id):
            raise DuplicateSlug(
                f"A {item.__tablename__} entry with this name already exists"
            )
        item.slug = slug
    for k, v in data.items():
        setattr(item, k, v)
    db.add(item)
    await db.commit()
    await db.refresh(item)
    return item


async def delete_item(db: AsyncSession, item):
    await db.delete(item)
    await db.commit()
    return True


# --- blog posts ---

async def list_published_posts(
    db: AsyncSession,
    category_slug: Optional[str] = None,
) -> List[Post]:
    stmt = _post_options(select(Post)).where(Post.published.is_(True))
    if category_slug:
        stmt = stmt.join(Category, Post.category_id == Category.id).where(
            Category.slug == category_slug
        )
    stmt = stmt.order_by(Post.created_at.desc(), Post.id.desc())
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def get_post(db: AsyncSession, post_id: int) -> Optional[Post]:
    stmt = (
        _post_options(select(Post))
        .where(Post.id == post_id)
        .execution_options(populate_existing=True)
    )
    res = await db.execute(stmt)
    return res.scalars().first()


async def get_published_post_by_slug(db: AsyncSession, slug: str) -> Optional[Post]:
    stmt = _post_options(select(Post)).where(
        Post.slug == slug,
        Post.published.is_(True),
    )
    res = await db.execute(stmt)
    return res.scalars().first()


async def list_all_posts(db: AsyncSession) -> List[Post]:
    stmt = _post_options(select(Post)).order_by(Post.created_at.desc(), Post.id.desc())
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def list_categories(db: AsyncSession) -> List[Category]:
    res = await db.execute(select(Category).order_by(Category.name.asc()))
    return list(res.scalars().all())
