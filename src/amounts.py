from decimal import Decimal, ROUND_HALF_EVEN, localcontext

TICKS_PER_UNIT = 10_000
DECIMAL_PLACES = 4


def to_ticks(amount: Decimal) -> int:
    """Convert a currency amount to integer ticks, rounding half-even past four decimals."""
    if not amount.is_finite():
        raise ValueError(f"amount {amount} is not finite")
    with localcontext() as ctx:
        # Wide enough that scaling never rounds, whatever the input's digit count.
        ctx.prec = max(ctx.prec, len(amount.as_tuple().digits) + DECIMAL_PLACES + 1)
        scaled = amount.scaleb(DECIMAL_PLACES)
        return int(scaled.to_integral_value(rounding=ROUND_HALF_EVEN))


def from_ticks(ticks: int) -> Decimal:
    sign, digits, _ = Decimal(ticks).as_tuple()
    return Decimal((sign, digits, -DECIMAL_PLACES))


def format_ticks(ticks: int) -> str:
    """Format ticks with exactly four decimal places, e.g. 15000 -> '1.5000'."""
    return f"{from_ticks(ticks):f}"
