"""
Split calculation for a single expense.

Amounts are integer cents. Three policies are supported:

- ``equal``: every participant owes ``round(total / n)`` except the last one,
  who absorbs the residual so the shares add up to the total exactly.
- ``percentage``: each participant owes ``round(total * pct / 100)``. The
  percentages must add up to 100 (within 0.01). Rounding residue is *not*
  redistributed, so the shares may differ from the total by a few cents.
- ``custom``: each participant supplies the amount owed; the amounts must add
  up to the total.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Hashable, List, Literal, Optional, Sequence

from tripsplit.core.errors import ValidationError
from tripsplit.core.money import TOLERANCE, TOLERANCE_CENTS, floor_cents, round_cents

SplitPolicy = Literal["equal", "percentage", "custom"]

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class Participant:
    member_id: Hashable
    percentage: Optional[Decimal] = None
    amount_owed: Optional[int] = None


@dataclass(frozen=True)
class SplitShare:
    member_id: Hashable
    amount_owed: int
    percentage: Optional[Decimal] = None


def compute_splits(
    total: int,
    policy: SplitPolicy,
    participants: Sequence[Participant],
) -> List[SplitShare]:
    if total <= 0:
        raise ValidationError("non_positive_total", "Amount must be greater than 0")

    if not participants:
        raise ValidationError("empty_participants", "At least one split is required")

    member_ids = [p.member_id for p in participants]
    if len(member_ids) != len(set(member_ids)):
        raise ValidationError("duplicate_participant", "Duplicate participants found in splits")

    if policy == "equal":
        return _equal_split(total, member_ids)
    if policy == "percentage":
        return _percentage_split(total, participants)
    if policy == "custom":
        return _custom_split(total, participants)

    raise ValidationError("unknown_policy", f"Unknown split type: {policy}")


def _equal_split(total: int, member_ids: List[Hashable]) -> List[SplitShare]:
    count = len(member_ids)
    share = round_cents(Decimal(total) / count)

    # Rounding up on tiny totals can overshoot; never hand out a negative residual.
    if share * (count - 1) > total:
        share = floor_cents(Decimal(total) / count)

    shares = [SplitShare(member_id=m, amount_owed=share) for m in member_ids[:-1]]
    shares.append(SplitShare(member_id=member_ids[-1], amount_owed=total - share * (count - 1)))
    return shares


def _percentage_split(total: int, participants: Sequence[Participant]) -> List[SplitShare]:
    for p in participants:
        if p.percentage is None:
            raise ValidationError(
                "missing_percentage", "A percentage is required for every participant"
            )
        if p.percentage < 0 or p.percentage > HUNDRED:
            raise ValidationError(
                "invalid_percentage", "Percentages must be between 0 and 100"
            )

    total_pct = sum((Decimal(p.percentage) for p in participants), Decimal("0"))
    if abs(total_pct - HUNDRED) >= TOLERANCE:
        raise ValidationError("percentage_sum", "Percentages must add up to 100%")

    return [
        SplitShare(
            member_id=p.member_id,
            amount_owed=round_cents(Decimal(total) * Decimal(p.percentage) / HUNDRED),
            percentage=Decimal(p.percentage),
        )
        for p in participants
    ]


def _custom_split(total: int, participants: Sequence[Participant]) -> List[SplitShare]:
    for p in participants:
        if p.amount_owed is None:
            raise ValidationError(
                "missing_amount", "An amount is required for every participant"
            )
        if p.amount_owed < 0:
            raise ValidationError("negative_amount", "Split amounts cannot be negative")

    if abs(sum(p.amount_owed for p in participants) - total) >= TOLERANCE_CENTS:
        raise ValidationError(
            "custom_sum", "Custom split amounts must add up to total amount"
        )

    return [SplitShare(member_id=p.member_id, amount_owed=p.amount_owed) for p in participants]
