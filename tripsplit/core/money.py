from decimal import Decimal, ROUND_HALF_UP, ROUND_FLOOR, getcontext

getcontext().prec = 28
CENTS = Decimal("0.01")

# Tolerance used where user input is not exact (percentage sums).
TOLERANCE = Decimal("0.01")
TOLERANCE_CENTS = 1


def qround(d: Decimal) -> Decimal:
    return d.quantize(CENTS, rounding=ROUND_HALF_UP)


def to_cents(amount) -> int:
    """Convert a user-facing amount (Decimal, str, int or float) to integer cents."""
    return int(qround(Decimal(str(amount))) * 100)


def from_cents(cents: int) -> Decimal:
    return qround(Decimal(cents) / 100)


def round_cents(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def floor_cents(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_FLOOR))
