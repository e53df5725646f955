# villagestay/db/crud_contact.py

from typing import List, Optional, Tuple

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from villagestay.db.models import ContactInfo, ContactMessage, MessageStatus


async def get_contact_info(db: AsyncSession) -> Optional[ContactInfo]:
    res = await db.execute(select(ContactInfo).order_by(ContactInfo.id.asc()).limit(1))
    return res.scalars().first()


async def upsert_contact_info(db: AsyncSession, data: dict) -> ContactInfo:
    """
    There is only ever one contact info row: update it, or create it.
    """
    info = await get_contact_info(db)
    if info is None:
        info = ContactInfo(**data)
    else:
        for k, v in data.items():
            setattr(info, k, v)
    db.add(info)
    await db.commit()
    await db.refresh(info)
    return info


async def create_message(db: AsyncSession, **kwargs) -> ContactMessage:
    message = ContactMessage(status=MessageStatus.UNREAD, **kwargs)
    db.add(message)
    await db.commit()
    await db.refresh(message)
    return message


async def list_messages(
    db: AsyncSession,
    status: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
) -> Tuple[List[ContactMessage], int]:
    stmt = select(ContactMessage)
    if status:
        stmt = stmt.where(ContactMessage.status == status)

    count_stmt = select(func.count()).select_from(stmt.subquery())
    total = (await db.execute(count_stmt)).scalar_one()

    stmt = (
        stmt.order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    res = await db.execute(stmt)
    return list(res.scalars().all()), int(total)


async def get_message(db: AsyncSession, message_id: int) -> Optional[ContactMessage]:
    res = await db.execute(select(ContactMessage).where(ContactMessage.id == message_id))
    return res.scalar_one_or_none()


async def update_message_status(
    db: AsyncSession,
    message: ContactMessage,
    status: str,
) -> ContactMessage:
    message.status = status
    db.add(message)
    await db.commit()
    await db.refresh(message)
    return message


async def delete_message(db: AsyncSession, message: ContactMessage):
    await db.delete(message)
    await db.commit()
    return True
