import logging
from datetime import date

from fastapi import HTTPException
from sqlalchemy import select

from tripsplit.core.dependencies import check_group_membership, fetch_group_member_ids
from tripsplit.core.errors import ValidationError
from tripsplit.core.money import to_cents
from tripsplit.db.store import RecordStore
from tripsplit.models.payment import Payment
from tripsplit.models.user import User
from tripsplit.schemas.payment import PaymentCreate, PaymentUpdate

logger = logging.getLogger(__name__)


async def _get_payment(store: RecordStore, payment_id: int) -> Payment:
    rows = await store.query(
        select(Payment)
        .where(Payment.id == payment_id)
        .execution_options(populate_existing=True)
    )

    if not rows:
        raise HTTPException(404, "Payment not found")

    return rows[0]


async def record_payment(store: RecordStore, data: PaymentCreate, user: User):
    sender = await check_group_membership(store.db, data.group_id, user.id)

    receivers = await fetch_group_member_ids(store.db, data.group_id, [data.to_member_id])
    if data.to_member_id not in receivers:
        raise HTTPException(400, "Recipient is not a member of this group")

    if sender.id == data.to_member_id:
        raise ValidationError("self_payment", "You cannot pay yourself")

    payment = await store.insert(
        Payment(
            group_id=data.group_id,
            from_member_id=sender.id,
            to_member_id=data.to_member_id,
            amount_cents=to_cents(data.amount),
            currency=data.currency,
            description=data.description or None,
            payment_date=data.payment_date or date.today(),
            created_by=user.id,
        )
    )

    logger.info(
        "Payment %s recorded in group %s: member %s -> member %s",
        payment.id, data.group_id, sender.id, data.to_member_id,
    )
    return payment


async def update_payment(store: RecordStore, payment_id: int, data: PaymentUpdate, user: User):
    payment = await _get_payment(store, payment_id)

    if payment.created_by != user.id and not user.is_admin:
        raise HTTPException(403, "You can only edit your own payments")

    values = {}
    if data.amount is not None:
        values["amount_cents"] = to_cents(data.amount)
    if data.description is not None:
        values["description"] = data.description or None
    if data.payment_date is not None:
        values["payment_date"] = data.payment_date

    if values:
        await store.update_by_id(Payment, payment_id, **values)

    return await _get_payment(store, payment_id)


async def delete_payment(store: RecordStore, payment_id: int, user: User):
    payment = await _get_payment(store, payment_id)
    if not user.is_admin:
        member = await check_group_membership(store.db, payment.group_id, user.id)

        if payment.created_by != user.id and not member.is_leader:
            raise HTTPException(403, "Not authorized to delete this payment")

    await store.delete_by_id(Payment, payment_id)

    logger.info("Payment %s deleted by user %s", payment_id, user.id)
    return {"status": "deleted"}


async def get_group_payments(store: RecordStore, group_id: int, user_id: int):
    await check_group_membership(store.db, group_id, user_id)

    q = (
        select(Payment)
        .where(Payment.group_id == group_id)
        .order_by(Payment.payment_date.desc(), Payment.created_at.desc(), Payment.id.desc())
    )
    return await store.query(q)
