from typing import Optional
from fastapi import APIRouter, Depends
from tripsplit.core.dependencies import get_current_user, get_store
from tripsplit.db.store import RecordStore
from tripsplit.schemas.balances import GroupBalanceOut
from tripsplit.services.balance_services import get_group_balances, get_my_balance

router = APIRouter()

@router.get("/{group_id}", response_model=GroupBalanceOut)
async def group_balances(
    group_id: int,
    currency: Optional[str] = None,
    store: RecordStore = Depends(get_store),
    current_user = Depends(get_current_user),
):
    return await get_group_balances(store, group_id, current_user.id, currency)

@router.get("/{group_id}/me")
async def my_balance(
    group_id: int,
    store: RecordStore = Depends(get_store),
    current_user = Depends(get_current_user),
):
    return await get_my_balance(store, group_id, current_user.id)
