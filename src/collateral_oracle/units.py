from __future__ import annotations

from decimal import Decimal
from typing import cast

from .errors import InvalidArgument


def _digits_of(raw: int | str) -> str:
    if isinstance(raw, bool):
        raise InvalidArgument(f"Fixed-point value must be an integer, got {raw!r}")
    if isinstance(raw, int):
        if raw < 0:
            raise InvalidArgument(f"Fixed-point value must be non-negative, got {raw}")
        return format(Decimal(raw), "f")
    if isinstance(raw, str):
        digits = raw.strip()
        if not digits or not digits.isascii() or not digits.isdigit():
            raise InvalidArgument(f"Malformed unsigned integer string: {raw!r}")
        return digits.lstrip("0") or "0"
    raise InvalidArgument(f"Unsupported fixed-point value type: {type(raw).__name__}")


def _check_digits(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidArgument(f"{name} must be a non-negative integer, got {value!r}")


def normalize_fixed_point(raw: int | str, implicit_scale_digits: int) -> Decimal:
    """Convert an unsigned integer encoded at ``10**implicit_scale_digits`` to a Decimal.

    Args:
        raw: Unsigned integer (or its decimal digit string) whose value is
            ``true_value * 10**implicit_scale_digits``.
        implicit_scale_digits: Number of implicit fractional digits.

    Returns:
        The exact decimal value, carrying ``implicit_scale_digits`` fractional
        digits (trailing zeros included).

    Raises:
        InvalidArgument: If ``raw`` is negative or not a digit string.

    Notes:
        - Works on the digit string, so arbitrarily large values never pass
          through floating point or a bounded integer type.
        - ``normalize_fixed_point(1234, 18)`` is ``0.000000000000001234``.
    """
    _check_digits("implicit_scale_digits", implicit_scale_digits)
    digits = _digits_of(raw)
    if implicit_scale_digits == 0:
        return Decimal(digits)

    if len(digits) > implicit_scale_digits:
        point = len(digits) - implicit_scale_digits
        text = f"{digits[:point]}.{digits[point:]}"
    else:
        text = "0." + digits.rjust(implicit_scale_digits, "0")
    return Decimal(text)


def rescale(raw: int, from_digits: int, to_digits: int) -> int:
    """Re-encode a fixed-point integer from one implicit scale to another.

    Widening multiplies by a power of ten; narrowing truncates toward zero.
    """
    _check_digits("from_digits", from_digits)
    _check_digits("to_digits", to_digits)
    if from_digits == to_digits:
        return raw
    if from_digits < to_digits:
        return raw * (10 ** (to_digits - from_digits))
    quotient = abs(raw) // (10 ** (from_digits - to_digits))
    return quotient if raw >= 0 else -quotient


def scale_to_18(value: int, decimals: int) -> int:
    """Scale an integer amount to 18 decimals.

    Args:
        value: Integer amount expressed with ``decimals`` decimal places.
        decimals: Current decimal precision of ``value``.

    Returns:
        The amount scaled to 18-decimal precision.
    """
    return rescale(value, decimals, 18)


def to_fixed_point(value: Decimal, digits: int) -> int:
    """Encode a non-negative Decimal as an integer at ``10**digits``.

    Raises:
        InvalidArgument: If ``value`` is negative, not finite, or carries more
            fractional digits than ``digits``.
    """
    _check_digits("digits", digits)
    if not value.is_finite() or value < 0:
        raise InvalidArgument(f"Cannot encode {value} as an unsigned fixed-point value")
    _, coefficient, exponent = value.as_tuple()
    units = int(Decimal((0, coefficient, 0)))
    shift = digits + cast(int, exponent)
    if shift >= 0:
        return units * (10**shift)
    if units % (10**-shift):
        raise InvalidArgument(f"{value} has more than {digits} fractional digits")
    return units // (10**-shift)
