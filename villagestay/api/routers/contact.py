import math
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from villagestay.api.dependencies import require_admin
from villagestay.db import crud_contact
from villagestay.db.session import get_db
from villagestay.schemas.contact import (
    ContactInfoIn,
    ContactInfoOut,
    ContactMessageCreate,
    ContactMessageOut,
    ContactMessagePage,
    MessageStatusUpdate,
    Pagination,
)

router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("")
async def get_contact_info(db: AsyncSession = Depends(get_db)):
    info = await crud_contact.get_contact_info(db)
    if not info:
        raise HTTPException(status_code=404, detail="Contact info not found")
    return ContactInfoOut.model_validate(info)


@router.post("/messages", status_code=status.HTTP_201_CREATED)
async def send_message(body: ContactMessageCreate, db: AsyncSession = Depends(get_db)):
    message = await crud_contact.create_message(db, **body.model_dump())
    return {
        "success": True,
        "message": "Message sent. We will reply within 24 working hours.",
        "data": ContactMessageOut.model_validate(message),
    }


# --- admin ---

@admin_router.put("/contact")
async def admin_update_contact_info(body: ContactInfoIn, db: AsyncSession = Depends(get_db)):
    info = await crud_contact.upsert_contact_info(db, body.model_dump())
    return ContactInfoOut.model_validate(info)


@admin_router.get("/messages", response_model=ContactMessagePage)
async def admin_list_messages(
    db: AsyncSession = Depends(get_db),
    status: Optional[str] = Query(None, pattern="^(UNREAD|READ|REPLIED)$"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
):
    messages, total = await crud_contact.list_messages(
        db, status=status, page=page, limit=limit
    )
    return ContactMessagePage(
        data=[ContactMessageOut.model_validate(m) for m in messages],
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            pages=math.ceil(total / limit),
        ),
    )


@admin_router.patch("/messages/{message_id}")
async def admin_update_message(
    message_id: int,
    body: MessageStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    message = await crud_contact.get_message(db, message_id)
    if not message:
        raise HTTPException(status_code=404, detail="Message not found")
    message = await crud_contact.update_message_status(db, message, body.status)
    return ContactMessageOut.model_validate(message)


@admin_router.delete("/messages/{message_id}")
async def admin_delete_message(message_id: int, db: AsyncSession = Depends(get_db)):
    message = await crud_contact.get_message(db, message_id)
    if not message:
        raise HTTPException(status_code=404, detail="Message not found")
    await crud_contact.delete_message(db, message)
    return {"success": True}
