import itertools
import random

from tripsplit.core.balances import Balance, ExpenseEntry, SplitEntry, compute_balances
from tripsplit.core.settlements import Transfer, compute_settlements


def apply(balances, transfers):
    remaining = dict(balances)
    for t in transfers:
        remaining[t.from_member] += t.amount
        remaining[t.to_member] -= t.amount
    return remaining


def test_simple_case():
    transfers = compute_settlements({"user1": 5000, "user2": -3000, "user3": -2000})

    assert transfers == [
        Transfer("user2", "user1", 3000),
        Transfer("user3", "user1", 2000),
    ]


def test_three_way_expense_settles_to_payer():
    balances = compute_balances(
        [ExpenseEntry("a", 10000, [SplitEntry("a", 3334), SplitEntry("b", 3333), SplitEntry("c", 3333)])],
        [],
        ["a", "b", "c"],
    )

    transfers = compute_settlements(balances)

    assert len(transfers) == 2
    assert all(t.to_member == "a" for t in transfers)
    assert sum(t.amount for t in transfers) == 6666


def test_accepts_balance_objects():
    transfers = compute_settlements(
        {"a": Balance("a", paid=1000), "b": Balance("b", owed=1000)}
    )

    assert transfers == [Transfer("b", "a", 1000)]


def test_settled_group_needs_no_transfers():
    assert compute_settlements({"a": 0, "b": 0}) == []
    assert compute_settlements({}) == []


def test_largest_parties_are_matched_first():
    transfers = compute_settlements({"a": 100, "b": 900, "c": -600, "d": -400})

    assert transfers[0] == Transfer("c", "b", 600)
    assert transfers[1] == Transfer("d", "b", 300)
    assert transfers[2] == Transfer("d", "a", 100)


def test_ties_are_broken_by_member_id():
    transfers = compute_settlements({3: 500, 1: 500, 2: -500, 4: -500})

    assert transfers == [Transfer(2, 1, 500), Transfer(4, 3, 500)]


def test_random_groups_fully_discharge_with_at_most_n_minus_one_transfers():
    rng = random.Random(20261019)

    for size in range(2, 12):
        for _ in range(25):
            nets = [rng.randint(-50000, 50000) for _ in range(size - 1)]
            nets.append(-sum(nets))
            balances = dict(zip(range(size), nets))

            transfers = compute_settlements(balances)

            assert len(transfers) <= size - 1
            assert all(t.amount > 0 for t in transfers)
            assert all(v == 0 for v in apply(balances, transfers).values())


def test_deterministic():
    balances = {m: v for m, v in zip(itertools.count(), [700, -200, -200, -300, 0])}

    assert compute_settlements(balances) == compute_settlements(balances)
