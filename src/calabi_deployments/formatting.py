"""Fixed-point amount formatting for calabi-deployments."""

from decimal import Decimal, InvalidOperation
from typing import Union

from .constants import DEFAULT_DECIMALS
from .exceptions import InvalidAmountError

Number = Union[int, float, Decimal, str]


def format_amount(value: Number, decimals: int = DEFAULT_DECIMALS) -> str:
    """
    Convert a human-scale amount into a fixed-point integer string.

    Floats go through their shortest repr, so 0.1 means one tenth and not
    the nearest binary fraction. The shift is done on the decimal digits
    with integer arithmetic, so no rounding ever happens.

    Args:
        value: Amount, e.g. 1.5
        decimals: Token decimals, e.g. 18

    Returns:
        Base-10 integer string, e.g. "1500000000000000000"

    Raises:
        InvalidAmountError: If value is negative, not finite, not numeric,
            or has more fractional digits than decimals allows
    """
    if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
        raise InvalidAmountError(f"Decimals must be a non-negative integer: {decimals!r}")

    amount = _to_decimal(value)
    if not amount.is_finite():
        raise InvalidAmountError(f"Amount must be finite: {value!r}")
    if amount < 0:
        raise InvalidAmountError(f"Amount must not be negative: {value!r}")

    _, digits, exponent = amount.as_tuple()
    coefficient = int("".join(str(d) for d in digits))
    shift = exponent + decimals

    if shift >= 0:
        return str(coefficient * 10**shift)

    divisor = 10**-shift
    if coefficient % divisor:
        raise InvalidAmountError(
            f"Amount {value!r} has more than {decimals} fractional digits"
        )
    return str(coefficient // divisor)


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, bool):
        raise InvalidAmountError(f"Amount must be a number: {value!r}")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float)):
        return Decimal(repr(value))
    if isinstance(value, str):
        try:
            return Decimal(value.strip())
        except InvalidOperation as e:
            raise InvalidAmountError(f"Amount must be a number: {value!r}") from e
    raise InvalidAmountError(f"Amount must be a number: {value!r}")
