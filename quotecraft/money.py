"""
Fixed-point money helpers.

Money is a Decimal quantized to the cent. Every multiply and every
accumulation is rounded with round2() as it happens, not at display time.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext

from .errors import InvalidInput

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")

# Largest accepted quantity, price or percentage. With every input at or
# below this, all intermediate values fit in MONEY_PRECISION digits.
MAX_INPUT = Decimal("1e12")
MONEY_PRECISION = 100


def round2(value) -> Decimal:
    """
    Round to 2 decimal places, half away from zero.

    Same result as sign(x) * floor(|x| * 100 + 0.5) / 100 for any finite
    input; ROUND_HALF_UP in the decimal module rounds ties away from zero.
    """
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    with localcontext() as ctx:
        ctx.prec = MONEY_PRECISION
        return value.quantize(CENT, rounding=ROUND_HALF_UP)


def to_decimal(value, field: str = "value") -> Decimal:
    """
    Validate a numeric input and return it as an exact Decimal.

    Floats go through str() so 1.005 stays 1.005 instead of its binary
    approximation. Raises InvalidInput for None, booleans, non-numeric
    strings, NaN, infinities, negatives and anything above MAX_INPUT.
    """
    if value is None or isinstance(value, bool):
        raise InvalidInput(field, value)
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidInput(field, value) from None
    else:
        raise InvalidInput(field, value)

    if not result.is_finite():
        raise InvalidInput(field, value)
    if result < 0:
        raise InvalidInput(field, value)
    if result > MAX_INPUT:
        raise InvalidInput(field, value, reason=f"must not exceed {MAX_INPUT:,.0f}")
    if result.is_zero():
        return result.copy_abs()
    return result


def to_cents(value) -> int:
    """Money as an integer count of cents."""
    return int(round2(value) * 100)


def from_cents(cents: int) -> Decimal:
    return (Decimal(cents) / HUNDRED).quantize(CENT)


def sum_money(values) -> Decimal:
    total = Decimal("0")
    with localcontext() as ctx:
        ctx.prec = MONEY_PRECISION
        for v in values:
            total += v if isinstance(v, Decimal) else Decimal(str(v))
    return round2(total)


def apply_percentage(base, pct) -> Decimal:
    """round2(base * pct / 100)."""
    if not isinstance(base, Decimal):
        base = Decimal(str(base))
    if not isinstance(pct, Decimal):
        pct = Decimal(str(pct))
    with localcontext() as ctx:
        ctx.prec = MONEY_PRECISION
        return round2(base * pct / HUNDRED)


def format_money(value, symbol: str = "$") -> str:
    """Display form, e.g. "$1,234.56" or "-$3.10"."""
    amount = round2(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"
