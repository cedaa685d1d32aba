from fastapi import APIRouter, Depends
from tripsplit.core.dependencies import get_current_user, get_store
from tripsplit.db.store import RecordStore
from tripsplit.schemas.group import GroupCreate, GroupMemberOut, GroupOut
from tripsplit.services.group_services import create_group, add_member, list_group_for_user

router = APIRouter()

@router.post("/", response_model=GroupOut)
async def create_new_group(
    data: GroupCreate,
    store: RecordStore = Depends(get_store),
    user = Depends(get_current_user)
):
    return await create_group(store, data, user.id)

@router.post("/{group_id}/add/{user_id}", response_model=GroupMemberOut)
async def add_user_to_group(group_id: int, user_id: int, store: RecordStore = Depends(get_store), user = Depends(get_current_user)):
    return await add_member(store, group_id, user_id, user.id)

@router.get("/my-groups", response_model=list[GroupOut])
async def my_groups(store: RecordStore = Depends(get_store), user = Depends(get_current_user)):
    return await list_group_for_user(store, user.id)
