import logging
from datetime import datetime, timezone
from functools import partial

from fastapi import HTTPException
from sqlalchemy import select, func
from sqlalchemy.orm import aliased, selectinload

from tripsplit.core.dependencies import check_group_membership, fetch_group_member_ids
from tripsplit.core.money import from_cents, to_cents
from tripsplit.core.saga import WriteCoordinator
from tripsplit.core.splits import Participant, compute_splits
from tripsplit.db.store import RecordStore, snapshot
from tripsplit.models.expense import Expense
from tripsplit.models.expense_split import ExpenseSplit
from tripsplit.models.group_member import GroupMember
from tripsplit.models.payment import Payment
from tripsplit.models.user import User
from tripsplit.schemas.expense import ExpenseCreate, ExpenseUpdate

logger = logging.getLogger(__name__)

EXPENSE_FIELDS = ("description", "amount_cents", "currency", "category", "paid_by", "split_type")


def _participants(splits):
    return [
        Participant(
            member_id=s.member_id,
            percentage=s.percentage,
            amount_owed=to_cents(s.amount_owed) if s.amount_owed is not None else None,
        )
        for s in splits
    ]


def _split_row(expense_id: int, share, payer_id: int, now: datetime) -> ExpenseSplit:
    # the payer cannot owe themselves
    is_payer = share.member_id == payer_id
    return ExpenseSplit(
        expense_id=expense_id,
        member_id=share.member_id,
        amount_owed_cents=share.amount_owed,
        percentage=float(share.percentage) if share.percentage is not None else None,
        is_settled=is_payer,
        settled_at=now if is_payer else None,
    )


async def _ensure_members(store: RecordStore, group_id: int, payer_id: int, member_ids):
    valid = await fetch_group_member_ids(store.db, group_id, set(member_ids) | {payer_id})

    if payer_id not in valid:
        raise HTTPException(400, "Payer is not a member of the group")

    if not set(member_ids) <= valid:
        raise HTTPException(400, "One or more members in splits are not members of the group")


async def _restore_all(store: RecordStore, model, rows):
    for values in rows:
        await store.restore(model, values)


async def load_expense(store: RecordStore, expense_id: int) -> Expense:
    q = (
        select(Expense)
        .options(selectinload(Expense.splits))
        .where(Expense.id == expense_id)
        .execution_options(populate_existing=True)
    )
    rows = await store.query(q)

    if not rows:
        raise HTTPException(404, "Expense not found")

    return rows[0]


async def create_expense_with_splits(store: RecordStore, data: ExpenseCreate, user_id: int, group_id: int):
    await check_group_membership(store.db, group_id, user_id)

    shares = compute_splits(to_cents(data.amount), data.split_type, _participants(data.splits))
    await _ensure_members(store, group_id, data.paid_by, [s.member_id for s in shares])

    now = datetime.now(timezone.utc)

    async with WriteCoordinator("create expense") as saga:
        expense = await saga.step(
            partial(
                store.insert,
                Expense(
                    group_id=group_id,
                    description=data.description,
                    amount_cents=to_cents(data.amount),
                    currency=data.currency,
                    category=data.category,
                    paid_by=data.paid_by,
                    split_type=data.split_type,
                    created_by=user_id,
                ),
            ),
            store.remove,
        )
        expense_id = expense.id

        for share in shares:
            await saga.step(
                partial(store.insert, _split_row(expense_id, share, data.paid_by, now)),
                store.remove,
            )

    logger.info("Expense %s created in group %s with %d splits", expense_id, group_id, len(shares))
    return await load_expense(store, expense_id)


async def update_expense(store: RecordStore, data: ExpenseUpdate, expense_id: int, user_id: int):
    expense = await load_expense(store, expense_id)
    group_id = expense.group_id

    await check_group_membership(store.db, group_id, user_id)

    shares = compute_splits(to_cents(data.amount), data.split_type, _participants(data.splits))
    await _ensure_members(store, group_id, data.paid_by, [s.member_id for s in shares])

    old_values = {k: getattr(expense, k) for k in EXPENSE_FIELDS}
    old_splits = [snapshot(s) for s in expense.splits]
    new_values = {
        "description": data.description,
        "amount_cents": to_cents(data.amount),
        "currency": data.currency,
        "category": data.category,
        "paid_by": data.paid_by,
        "split_type": data.split_type,
    }
    now = datetime.now(timezone.utc)

    # splits are replaced wholesale, never patched
    async with WriteCoordinator("update expense") as saga:
        await saga.step(
            partial(store.update_by_id, Expense, expense_id, **new_values),
            lambda _: store.update_by_id(Expense, expense_id, **old_values),
        )
        await saga.step(
            partial(store.delete_where, ExpenseSplit, ExpenseSplit.expense_id == expense_id),
            lambda _: _restore_all(store, ExpenseSplit, old_splits),
        )
        for share in shares:
            await saga.step(
                partial(store.insert, _split_row(expense_id, share, data.paid_by, now)),
                store.remove,
            )

    logger.info("Expense %s updated", expense_id)
    return await load_expense(store, expense_id)


async def delete_expense(store: RecordStore, expense_id: int, user: User):
    expense = await load_expense(store, expense_id)
    member = await check_group_membership(store.db, expense.group_id, user.id)

    if expense.paid_by != member.id and not member.is_leader and not user.is_admin:
        raise HTTPException(403, "You cannot delete this expense")

    old_splits = [snapshot(s) for s in expense.splits]

    async with WriteCoordinator("delete expense") as saga:
        await saga.step(
            partial(store.delete_where, ExpenseSplit, ExpenseSplit.expense_id == expense_id),
            lambda _: _restore_all(store, ExpenseSplit, old_splits),
        )
        await saga.step(partial(store.delete_by_id, Expense, expense_id))

    logger.info("Expense %s deleted by user %s", expense_id, user.id)
    return {"status": "deleted"}


async def settle_split(store: RecordStore, expense_id: int, member_id: int, user: User):
    """Mark one member's share as paid back and record the matching payment, if any."""
    expense = await load_expense(store, expense_id)
    me = await check_group_membership(store.db, expense.group_id, user.id)

    split = next((s for s in expense.splits if s.member_id == member_id), None)

    if not split:
        raise HTTPException(404, "Split not found")

    if split.is_settled:
        raise HTTPException(400, "Split is already settled")

    if me.id not in (member_id, expense.paid_by) and not me.is_leader and not user.is_admin:
        raise HTTPException(403, "You cannot settle this split")

    split_id = split.id
    amount_cents = split.amount_owed_cents
    now = datetime.now(timezone.utc)

    # nothing is owed, so there is no payment to record
    if amount_cents == 0:
        await store.update_by_id(ExpenseSplit, split_id, is_settled=True, settled_at=now)
        logger.info("Zero split %s of expense %s settled", split_id, expense_id)
        return None

    async with WriteCoordinator("settle split") as saga:
        await saga.step(
            partial(store.update_by_id, ExpenseSplit, split_id, is_settled=True, settled_at=now),
            lambda _: store.update_by_id(ExpenseSplit, split_id, is_settled=False, settled_at=None),
        )
        payment = await saga.step(
            partial(
                store.insert,
                Payment(
                    group_id=expense.group_id,
                    from_member_id=member_id,
                    to_member_id=expense.paid_by,
                    amount_cents=amount_cents,
                    currency=expense.currency,
                    description=f"Settlement: {expense.description}",
                    payment_date=now.date(),
                    created_by=user.id,
                ),
            ),
            store.remove,
        )

    logger.info("Split %s of expense %s settled", split_id, expense_id)
    return payment


async def get_expense_detail(store: RecordStore, expense_id: int, user_id: int):
    expense = await load_expense(store, expense_id)
    await check_group_membership(store.db, expense.group_id, user_id)
    return expense


async def get_expenses_by_group(store: RecordStore, group_id: int, user_id: int):
    current_member = await check_group_membership(store.db, group_id, user_id)

    my_split = aliased(ExpenseSplit)
    payer_member = aliased(GroupMember)
    payer_user = aliased(User)

    q = (
        select(
            Expense,
            func.coalesce(func.sum(my_split.amount_owed_cents), 0).label("my_share"),
            payer_user.full_name.label("payer_name"),
        )
        # join to get my share
        .outerjoin(
            my_split,
            (my_split.expense_id == Expense.id)
            & (my_split.member_id == current_member.id),
        )
        # join to get payer name
        .join(
            payer_member,
            payer_member.id == Expense.paid_by,
        )
        .join(
            payer_user,
            payer_user.id == payer_member.user_id,
        )
        .where(Expense.group_id == group_id)
        .group_by(
            Expense.id,
            payer_user.full_name,
        )
        .order_by(
            Expense.created_at.desc(),
            Expense.id.desc(),
        )
    )

    res = await store.db.execute(q)
    rows = res.all()

    return [
        {
            "id": expense.id,
            "group_id": expense.group_id,
            "description": expense.description,
            "amount": str(expense.amount),
            "currency": expense.currency,
            "category": expense.category,
            "paid_by": expense.paid_by,
            "payer_name": payer_name,
            "split_type": expense.split_type,
            "created_at": expense.created_at,
            "my_share": str(from_cents(my_share)),
        }
        for expense, my_share, payer_name in rows
    ]
