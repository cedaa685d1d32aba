import heapq
from dataclasses import dataclass
from typing import Hashable, List, Mapping, Union

from tripsplit.core.balances import Balance


@dataclass(frozen=True)
class Transfer:
    from_member: Hashable
    to_member: Hashable
    amount: int


def compute_settlements(balances: Mapping[Hashable, Union[Balance, int]]) -> List[Transfer]:
    """
    Greedy algorithm to reduce the number of transactions.

    The largest debtor pays the largest creditor as much as either side
    allows; both are re-ranked and the loop repeats until one side is empty.
    Every step clears at least one member, so at most ``members - 1``
    transfers are produced. This is not a minimum-transfer solver.
    Ties on amount are broken by member id.
    """
    creditors = []
    debtors = []

    for member_id, balance in balances.items():
        net = balance.net if isinstance(balance, Balance) else balance
        if net > 0:
            creditors.append((-net, member_id))
        elif net < 0:
            debtors.append((net, member_id))

    heapq.heapify(creditors)
    heapq.heapify(debtors)

    transfers: List[Transfer] = []

    while creditors and debtors:
        neg_credit, cred_id = heapq.heappop(creditors)
        neg_debt, debt_id = heapq.heappop(debtors)

        credit, debt = -neg_credit, -neg_debt
        pay_amt = min(credit, debt)

        transfers.append(Transfer(from_member=debt_id, to_member=cred_id, amount=pay_amt))

        if credit - pay_amt > 0:
            heapq.heappush(creditors, (pay_amt - credit, cred_id))
        if debt - pay_amt > 0:
            heapq.heappush(debtors, (pay_amt - debt, debt_id))

    return transfers
