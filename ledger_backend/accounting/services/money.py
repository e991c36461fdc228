# accounting/services/money.py

"""
MONEY NORMALIZER

Fixed-point, 2-decimal money for the whole posting engine.

normalize_money(x) goes through integer minor units (cents):
    to_minor_units(x) = round_half_up(x * 100)
    from_minor_units(n) = n / 100 (exact)
so repeated normalization is idempotent and each operation errs by at most
0.005. Other modules normalize exactly once per arithmetic boundary
(sum, multiply, divide).
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

ZERO = Decimal("0.00")
_ONE = Decimal("1")
_HUNDRED = Decimal("100")


class InvalidMoneyError(ValueError):
    """Raised for non-numeric, NaN or infinite money input."""


def _to_decimal(value) -> Decimal:
    if value is None or value == "":
        return Decimal("0")

    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            # str() keeps floats at their shortest repr (0.1 -> "0.1")
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError, TypeError) as exc:
            raise InvalidMoneyError(f"Invalid money value: {value!r}") from exc

    if not amount.is_finite():
        raise InvalidMoneyError(f"Invalid money value: {value!r}")
    return amount


def to_minor_units(value) -> int:
    return int((_to_decimal(value) * _HUNDRED).quantize(_ONE, rounding=ROUND_HALF_UP))


def from_minor_units(minor: int) -> Decimal:
    return Decimal(int(minor)).scaleb(-2)


def normalize_money(value) -> Decimal:
    return from_minor_units(to_minor_units(value))


def sum_money(values) -> Decimal:
    """Sum in minor units; the result is already normalized."""
    return from_minor_units(sum(to_minor_units(v) for v in values))
