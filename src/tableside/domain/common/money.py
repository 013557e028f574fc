from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

ZERO = Decimal("0.00")
_CENT = Decimal("0.01")


def quantize(amount: Decimal) -> Decimal:
    return amount.quantize(_CENT, rounding=ROUND_HALF_UP)


def to_amount(value: object) -> Decimal:
    """Coerce a price-like value into a Decimal; anything unusable is 0.

    The value is not rounded. Callers quantize once, on the finished sum.
    """
    if isinstance(value, bool) or value is None:
        return ZERO
    if isinstance(value, Decimal):
        candidate = value
    else:
        try:
            candidate = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return ZERO
    if not candidate.is_finite():
        return ZERO
    return candidate


def to_quantity(value: object, default: int = 0) -> int:
    """Truncate a quantity-like value to an int; anything unusable is ``default``."""
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, int):
        return value
    try:
        candidate = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return default
    if not candidate.is_finite():
        return default
    return int(candidate)
