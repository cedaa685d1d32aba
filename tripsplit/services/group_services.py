from functools import partial

from fastapi import HTTPException
from sqlalchemy import select

from tripsplit.core.dependencies import check_group_membership
from tripsplit.core.saga import WriteCoordinator
from tripsplit.db.store import RecordStore
from tripsplit.models.group import Group
from tripsplit.models.group_member import GroupMember
from tripsplit.schemas.group import GroupCreate
from tripsplit.services.user_queries import get_user_by_id

async def create_group(store: RecordStore, data: GroupCreate, creator_id: int):
    async with WriteCoordinator("create group") as saga:
        group = await saga.step(
            partial(
                store.insert,
                Group(
                    name=data.name,
                    description=data.description,
                    destination=data.destination,
                    created_by=creator_id,
                ),
            ),
            store.remove,
        )
        await saga.step(
            partial(store.insert, GroupMember(group_id=group.id, user_id=creator_id, role="leader"))
        )

    return group

async def add_member(store: RecordStore, group_id: int, user_id: int, current_user_id: int):
    me = await check_group_membership(store.db, group_id, current_user_id)

    if not me.is_leader:
        raise HTTPException(403, "Only the group leader can add members")

    if not await get_user_by_id(store.db, user_id):
        raise HTTPException(404, "User not found")

    existing = await store.query(
        select(GroupMember).where(GroupMember.group_id == group_id, GroupMember.user_id == user_id)
    )
    if existing:
        raise HTTPException(400, "User is already a member of this group")

    return await store.insert(GroupMember(group_id=group_id, user_id=user_id))

async def list_group_for_user(store: RecordStore, user_id: int):
    q = (
        select(Group)
        .join(GroupMember)
        .where(GroupMember.user_id == user_id, Group.is_deleted == False)
        .order_by(Group.id)
    )
    return await store.query(q)
