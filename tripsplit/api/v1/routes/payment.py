from typing import List
from fastapi import APIRouter, Depends
from tripsplit.core.dependencies import get_current_user, get_store
from tripsplit.db.store import RecordStore
from tripsplit.schemas.payment import PaymentCreate, PaymentOut, PaymentUpdate
from tripsplit.services.payment_services import (
    delete_payment,
    get_group_payments,
    record_payment,
    update_payment,
)

router = APIRouter()

@router.post("/", response_model=PaymentOut)
async def add_payment(data: PaymentCreate, store: RecordStore = Depends(get_store), current_user = Depends(get_current_user)):
    return await record_payment(store, data, current_user)

@router.get("/group/{group_id}", response_model=List[PaymentOut])
async def group_payments(group_id: int, store: RecordStore = Depends(get_store), current_user = Depends(get_current_user)):
    return await get_group_payments(store, group_id, current_user.id)

@router.patch("/{payment_id}", response_model=PaymentOut)
async def edit_payment(payment_id: int, data: PaymentUpdate, store: RecordStore = Depends(get_store), current_user = Depends(get_current_user)):
    return await update_payment(store, payment_id, data, current_user)

@router.delete("/{payment_id}")
async def remove_payment(payment_id: int, store: RecordStore = Depends(get_store), current_user = Depends(get_current_user)):
    return await delete_payment(store, payment_id, current_user)
