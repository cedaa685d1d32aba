from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from tripsplit.core.balances import (
    ExpenseEntry,
    PaymentEntry,
    SplitEntry,
    compute_balances,
    partition_by_currency,
)
from tripsplit.core.dependencies import check_group_membership
from tripsplit.core.money import from_cents
from tripsplit.core.settlements import compute_settlements
from tripsplit.db.store import RecordStore
from tripsplit.models.expense import Expense
from tripsplit.models.group_member import GroupMember
from tripsplit.models.payment import Payment


async def load_group_ledger(store: RecordStore, group_id: int):
    """
    Point-in-time snapshot of a group's members, expenses and payments,
    converted to engine entries.
    """
    members = await store.query(
        select(GroupMember).where(GroupMember.group_id == group_id).order_by(GroupMember.id)
    )
    expenses = await store.query(
        select(Expense).options(selectinload(Expense.splits)).where(Expense.group_id == group_id)
    )
    payments = await store.query(select(Payment).where(Payment.group_id == group_id))

    expense_entries = [
        ExpenseEntry(
            paid_by=e.paid_by,
            amount=e.amount_cents,
            currency=e.currency,
            splits=[SplitEntry(member_id=s.member_id, amount_owed=s.amount_owed_cents) for s in e.splits],
        )
        for e in expenses
    ]
    payment_entries = [
        PaymentEntry(
            from_member=p.from_member_id,
            to_member=p.to_member_id,
            amount=p.amount_cents,
            currency=p.currency,
        )
        for p in payments
    ]

    return members, expense_entries, payment_entries


def _currency_summary(currency, expenses, payments, names):
    balances = compute_balances(expenses, payments, names.keys())
    transfers = compute_settlements(balances)

    return {
        "currency": currency,
        "balances": [
            {
                "member_id": b.member_id,
                "name": names.get(b.member_id),
                "paid": from_cents(b.paid),
                "owed": from_cents(b.owed),
                "sent": from_cents(b.sent),
                "received": from_cents(b.received),
                "net": from_cents(b.net),
                "settled": b.settled,
            }
            for b in balances.values()
        ],
        "settlements": [
            {
                "from_id": t.from_member,
                "from_name": names.get(t.from_member),
                "to_id": t.to_member,
                "to_name": names.get(t.to_member),
                "amount": from_cents(t.amount),
            }
            for t in transfers
        ],
    }


async def get_group_balances(store: RecordStore, group_id: int, user_id: int, currency: Optional[str] = None):
    await check_group_membership(store.db, group_id, user_id)

    members, expenses, payments = await load_group_ledger(store, group_id)
    names = {m.id: m.user.full_name for m in members}

    partitions = partition_by_currency(expenses, payments)
    if currency:
        partitions = {currency: partitions.get(currency, ([], []))}

    return {
        "group_id": group_id,
        "currencies": [
            _currency_summary(cur, exps, pays, names)
            for cur, (exps, pays) in partitions.items()
        ],
    }


async def get_my_balance(store: RecordStore, group_id: int, user_id: int):
    summary = await get_group_balances(store, group_id, user_id)
    me = await check_group_membership(store.db, group_id, user_id)

    mine = [
        {"currency": cur["currency"], **next(b for b in cur["balances"] if b["member_id"] == me.id)}
        for cur in summary["currencies"]
    ]

    return {"group_id": group_id, "member_id": me.id, "balances": mine}
