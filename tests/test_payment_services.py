from datetime import date
from decimal import Decimal

import pytest
from fastapi import HTTPException
from pydantic import ValidationError as PydanticValidationError

from tripsplit.core.errors import ValidationError
from tripsplit.schemas.expense import ExpenseCreate
from tripsplit.schemas.payment import PaymentCreate, PaymentUpdate
from tripsplit.services.payment_services import (
    delete_payment,
    get_group_payments,
    record_payment,
    update_payment,
)


def payment_to(trip, member_id, amount="25.50", **extra):
    return PaymentCreate(group_id=trip.group_id, to_member_id=member_id, amount=Decimal(amount), **extra)


async def test_record_payment_from_current_member(store, trip):
    payment = await record_payment(store, payment_to(trip, trip.a, description="Taxi"), trip.bob)

    assert payment.from_member_id == trip.b
    assert payment.to_member_id == trip.a
    assert payment.amount_cents == 2550
    assert payment.amount == Decimal("25.50")
    assert payment.payment_date == date.today()
    assert payment.created_by == trip.bob.id


async def test_cannot_pay_yourself(store, trip):
    with pytest.raises(ValidationError) as exc:
        await record_payment(store, payment_to(trip, trip.b), trip.bob)

    assert exc.value.rule == "self_payment"


async def test_recipient_must_be_in_group(store, trip):
    with pytest.raises(HTTPException) as exc:
        await record_payment(store, payment_to(trip, 9999), trip.bob)

    assert exc.value.status_code == 400


async def test_outsider_cannot_record_payment(store, trip):
    with pytest.raises(HTTPException) as exc:
        await record_payment(store, payment_to(trip, trip.a), trip.outsider)

    assert exc.value.status_code == 403


async def test_update_payment(store, trip):
    payment = await record_payment(store, payment_to(trip, trip.a), trip.bob)

    updated = await update_payment(
        store, payment.id, PaymentUpdate(amount=Decimal("30"), description="Taxi + tip"), trip.bob
    )

    assert updated.amount_cents == 3000
    assert updated.description == "Taxi + tip"

    with pytest.raises(HTTPException) as exc:
        await update_payment(store, payment.id, PaymentUpdate(amount=Decimal("1")), trip.carol)
    assert exc.value.status_code == 403


async def test_delete_payment_permissions(store, trip):
    first = await record_payment(store, payment_to(trip, trip.a), trip.bob)
    second = await record_payment(store, payment_to(trip, trip.a), trip.carol)
    third = await record_payment(store, payment_to(trip, trip.b), trip.carol)

    with pytest.raises(HTTPException) as exc:
        await delete_payment(store, first.id, trip.carol)
    assert exc.value.status_code == 403

    # creator, group leader and admin may delete
    await delete_payment(store, first.id, trip.bob)
    await delete_payment(store, second.id, trip.alice)
    await delete_payment(store, third.id, trip.admin)

    assert await get_group_payments(store, trip.group_id, trip.alice.id) == []


@pytest.mark.parametrize("amount", ["10.005", "0.001"])
async def test_amounts_beyond_cents_are_rejected(trip, amount):
    with pytest.raises(PydanticValidationError):
        payment_to(trip, trip.a, amount=amount)

    with pytest.raises(PydanticValidationError):
        ExpenseCreate(
            description="Museum tickets",
            amount=Decimal(amount),
            paid_by=trip.a,
            split_type="equal",
            splits=[{"member_id": trip.a}],
        )
