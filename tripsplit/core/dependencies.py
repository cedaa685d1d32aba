from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from tripsplit.core.config import settings
from tripsplit.core.security import decode_token, get_bearer_token
from tripsplit.db.session import async_session
from tripsplit.db.store import RecordStore
from tripsplit.models.group import Group
from tripsplit.models.group_member import GroupMember
from tripsplit.services.user_queries import get_user_by_id
from tripsplit.storage.blob import HttpBlobStore

async def get_db():
    async with async_session() as session:
        yield session

async def get_store(db: AsyncSession = Depends(get_db)):
    return RecordStore(db)

def get_document_blobs():
    return HttpBlobStore(settings.DOCUMENTS_BUCKET)

def get_photo_blobs():
    return HttpBlobStore(settings.PHOTOS_BUCKET)

async def get_current_user(request: Request, db: AsyncSession = Depends(get_db)):
    token = get_bearer_token(request)
    payload = decode_token(token)
    user_id = payload.get("sub")

    if user_id is None:
        raise HTTPException(status_code=401, detail="Invalid authentication credentials")

    user = await get_user_by_id(db, int(user_id))

    if user is None:
        raise HTTPException(status_code=401, detail="User not found")

    return user

async def check_group_membership(db: AsyncSession, group_id: int, user_id: int):
    q_group = select(Group).where(Group.id == group_id, Group.is_deleted == False)
    res_group = await db.execute(q_group)
    group = res_group.scalar_one_or_none()

    if not group:
        raise HTTPException(404, "Group does not exist")

    q_member = select(GroupMember).where(
        GroupMember.group_id == group_id,
        GroupMember.user_id == user_id
    )

    res_member = await db.execute(q_member)
    member = res_member.scalar_one_or_none()

    if not member:
        raise HTTPException(403, "You are not a member of this group")

    return member

async def fetch_group_member_ids(db: AsyncSession, group_id: int, member_ids=None):
    q = select(GroupMember.id).where(GroupMember.group_id == group_id)
    if member_ids is not None:
        q = q.where(GroupMember.id.in_(member_ids))
    res = await db.execute(q)
    return {row[0] for row in res.all()}
