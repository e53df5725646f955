from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from villagestay.api.dependencies import require_admin
from villagestay.db import crud_content
from villagestay.db.models import Attraction, Category, Culinary, Post
from villagestay.db.session import get_db
from villagestay.schemas.content import (
    AttractionOut,
    CategoryIn,
    CategoryOut,
    CulinaryCreate,
    CulinaryOut,
    CulinaryUpdate,
    PlaceCreate,
    PlaceUpdate,
    PostCreate,
    PostOut,
    PostUpdate,
)

router = APIRouter(dependencies=[Depends(require_admin)])


async def _get_or_404(db: AsyncSession, model, item_id: int):
    item = await crud_content.get_item(db, model, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Not found")
    return item


async def _ensure_category(db: AsyncSession, category_id: int):
    if not await crud_content.get_item(db, Category, category_id):
        raise HTTPException(status_code=404, detail="Category not found")


# --- posts ---

@router.get("/posts")
async def admin_list_posts(db: AsyncSession = Depends(get_db)):
    posts = await crud_content.list_all_posts(db)
    return [PostOut.model_validate(p) for p in posts]


@router.post("/posts", status_code=status.HTTP_201_CREATED)
async def admin_create_post(
    body: PostCreate,
    db: AsyncSession = Depends(get_db),
    current_user=Depends(require_admin),
):
    await _ensure_category(db, body.category_id)
    post = await crud_content.create_item(
        db,
        Post,
        source=body.title,
        author_id=current_user.id,
        **body.model_dump(),
    )
    return PostOut.model_validate(await crud_content.get_post(db, post.id))


@router.get("/posts/{post_id}")
async def admin_get_post(post_id: int, db: AsyncSession = Depends(get_db)):
    post = await crud_content.get_post(db, post_id)
    if not post:
        raise HTTPException(status_code=404, detail="Not found")
    return PostOut.model_validate(post)


@router.patch("/posts/{post_id}")
async def admin_update_post(
    post_id: int,
    body: PostUpdate,
    db: AsyncSession = Depends(get_db),
):
    post = await _get_or_404(db, Post, post_id)
    if body.category_id is not None:
        await _ensure_category(db, body.category_id)
    await crud_content.update_item(
        db, post, body.model_dump(exclude_unset=True), source=body.title
    )
    return PostOut.model_validate(await crud_content.get_post(db, post_id))


@router.delete("/posts/{post_id}")
async def admin_delete_post(post_id: int, db: AsyncSession = Depends(get_db)):
    post = await _get_or_404(db, Post, post_id)
    await crud_content.delete_item(db, post)
    return {"message": "deleted"}


# --- categories ---

@router.post("/categories", status_code=status.HTTP_201_CREATED)
async def admin_create_category(body: CategoryIn, db: AsyncSession = Depends(get_db)):
    category = await crud_content.create_item(db, Category, source=body.name, name=body.name)
    return CategoryOut.model_validate(category)


@router.patch("/categories/{category_id}")
async def admin_update_category(
    category_id: int,
    body: CategoryIn,
    db: AsyncSession = Depends(get_db),
):
    category = await _get_or_404(db, Category, category_id)
    category = await crud_content.update_item(
        db, category, {"name": body.name}, source=body.name
    )
    return CategoryOut.model_validate(category)


@router.delete("/categories/{category_id}")
async def admin_delete_category(category_id: int, db: AsyncSession = Depends(get_db)):
    category = await _get_or_404(db, Category, category_id)
    await crud_content.delete_item(db, category)
    return {"message": "deleted"}


# --- attractions ---

@router.get("/attractions")
async def admin_list_attractions(db: AsyncSession = Depends(get_db)):
    items = await crud_content.list_all(db, Attraction)
    return [AttractionOut.model_validate(a) for a in items]


@router.post("/attractions", status_code=status.HTTP_201_CREATED)
async def admin_create_attraction(body: PlaceCreate, db: AsyncSession = Depends(get_db)):
    item = await crud_content.create_item(db, Attraction, source=body.name, **body.model_dump())
    return AttractionOut.model_validate(item)


@router.patch("/attractions/{item_id}")
async def admin_update_attraction(
    item_id: int,
    body: PlaceUpdate,
    db: AsyncSession = Depends(get_db),
):
    item = await _get_or_404(db, Attraction, item_id)
    item = await crud_content.update_item(
        db, item, body.model_dump(exclude_unset=True), source=body.name
    )
    return AttractionOut.model_validate(item)


@router.delete("/attractions/{item_id}")
async def admin_delete_attraction(item_id: int, db: AsyncSession = Depends(get_db)):
    item = await _get_or_404(db, Attraction, item_id)
    await crud_content.delete_item(db, item)
    return {"message": "deleted"}


# --- culinary ---

@router.get("/culinary")
async def admin_list_culinary(db: AsyncSession = Depends(get_db)):
    items = await crud_content.list_all(db, Culinary)
    return [CulinaryOut.model_validate(c) for c in items]


@router.post("/culinary", status_code=status.HTTP_201_CREATED)
async def admin_create_culinary(body: CulinaryCreate, db: AsyncSession = Depends(get_db)):
    item = await crud_content.create_item(db, Culinary, source=body.name, **body.model_dump())
    return CulinaryOut.model_validate(item)


@router.patch("/culinary/{item_id}")
async def admin_update_culinary(
    item_id: int,
    body: CulinaryUpdate,
    db: AsyncSession = Depends(get_db),
):
    item = await _get_or_404(db, Culinary, item_id)
    item = await crud_content.update_item(
        db, item, body.model_dump(exclude_unset=True), source=body.name
    )
    return CulinaryOut.model_validate(item)


@router.delete("/culinary/{item_id}")
async def admin_delete_culinary(item_id: int, db: AsyncSession = Depends(get_db)):
    item = await _get_or_404(db, Culinary, item_id)
    await crud_content.delete_item(db, item)
    return {"message": "deleted"}
