from typing import Optional
from fastapi import APIRouter, Depends
from tripsplit.core.dependencies import get_current_user, get_store
from tripsplit.db.store import RecordStore
from tripsplit.schemas.expense import ExpenseCreate, ExpenseOut, ExpenseUpdate
from tripsplit.schemas.payment import PaymentOut
from tripsplit.services.expense_services import (
    create_expense_with_splits,
    delete_expense,
    get_expense_detail,
    get_expenses_by_group,
    settle_split,
    update_expense,
)

router = APIRouter()

@router.post("/{group_id}/add", response_model=ExpenseOut)
async def add_expense(group_id: int, data: ExpenseCreate, store: RecordStore = Depends(get_store), current_user = Depends(get_current_user)):
    return await create_expense_with_splits(store, data, current_user.id, group_id)

@router.get("/{group_id}/all")
async def all_expenses(group_id: int, store: RecordStore = Depends(get_store), current_user = Depends(get_current_user)):
    return await get_expenses_by_group(store, group_id, current_user.id)

@router.get("/item/{expense_id}", response_model=ExpenseOut)
async def fetch(expense_id: int, store: RecordStore = Depends(get_store), current_user = Depends(get_current_user)):
    return await get_expense_detail(store, expense_id, current_user.id)

@router.put("/item/{expense_id}", response_model=ExpenseOut)
async def edit(expense_id: int, data: ExpenseUpdate, store: RecordStore = Depends(get_store), current_user = Depends(get_current_user)):
    return await update_expense(store, data, expense_id=expense_id, user_id=current_user.id)

@router.delete("/item/{expense_id}")
async def del_expense(expense_id: int, store: RecordStore = Depends(get_store), current_user = Depends(get_current_user)):
    return await delete_expense(store, expense_id=expense_id, user=current_user)

@router.post("/item/{expense_id}/settle/{member_id}", response_model=Optional[PaymentOut])
async def settle(expense_id: int, member_id: int, store: RecordStore = Depends(get_store), current_user = Depends(get_current_user)):
    return await settle_split(store, expense_id, member_id, current_user)
