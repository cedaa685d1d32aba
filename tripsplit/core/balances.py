from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, List, Sequence, Tuple

from tripsplit.core.money import TOLERANCE_CENTS


@dataclass(frozen=True)
class SplitEntry:
    member_id: Hashable
    amount_owed: int


@dataclass(frozen=True)
class ExpenseEntry:
    paid_by: Hashable
    amount: int
    splits: Sequence[SplitEntry] = ()
    currency: str = "USD"


@dataclass(frozen=True)
class PaymentEntry:
    from_member: Hashable
    to_member: Hashable
    amount: int
    currency: str = "USD"


@dataclass
class Balance:
    member_id: Hashable
    paid: int = 0
    owed: int = 0
    sent: int = 0
    received: int = 0

    @property
    def net(self) -> int:
        # positive -> the group owes this member, negative -> member owes the group
        return self.paid - self.owed + self.sent - self.received

    @property
    def settled(self) -> bool:
        return abs(self.net) < TOLERANCE_CENTS


def compute_balances(
    expenses: Iterable[ExpenseEntry],
    payments: Iterable[PaymentEntry],
    member_ids: Iterable[Hashable] = (),
) -> Dict[Hashable, Balance]:
    """
    Net position of every member across expenses and direct payments.

    paid  = sum of expense totals the member paid for
    owed  = sum of the member's split amounts
    net   = paid - owed, then moved toward zero by payments: the sender's
            debt shrinks by the amount and so does the receiver's credit.

    All inputs must share one currency; see ``partition_by_currency``.
    """
    balances: Dict[Hashable, Balance] = {}

    def get(member_id):
        if member_id not in balances:
            balances[member_id] = Balance(member_id=member_id)
        return balances[member_id]

    for member_id in member_ids:
        get(member_id)

    for exp in expenses:
        get(exp.paid_by).paid += exp.amount
        for split in exp.splits:
            get(split.member_id).owed += split.amount_owed

    for payment in payments:
        get(payment.from_member).sent += payment.amount
        get(payment.to_member).received += payment.amount

    return balances


def partition_by_currency(
    expenses: Iterable[ExpenseEntry],
    payments: Iterable[PaymentEntry],
) -> Dict[str, Tuple[List[ExpenseEntry], List[PaymentEntry]]]:
    """Group expenses and payments by currency so each is balanced on its own."""
    buckets = defaultdict(lambda: ([], []))

    for exp in expenses:
        buckets[exp.currency][0].append(exp)
    for payment in payments:
        buckets[payment.currency][1].append(payment)

    return dict(sorted(buckets.items()))
