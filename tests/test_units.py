from __future__ import annotations

from decimal import Decimal, localcontext

import pytest

from collateral_oracle.errors import InvalidArgument
from collateral_oracle.units import (
    normalize_fixed_point,
    rescale,
    scale_to_18,
    to_fixed_point,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (3493968700000000000000, "3493.968700000000000000"),
        (1234, "0.000000000000001234"),
        (100000000000000001, "0.100000000000000001"),
        (0, "0.000000000000000000"),
    ],
)
def test_normalize_fixed_point_known_rates(raw, expected):
    result = normalize_fixed_point(raw, 18)
    assert result == Decimal(expected)
    assert f"{result:f}" == expected


def test_normalize_fixed_point_digit_count_equal_to_scale_has_zero_integer_part():
    assert f"{normalize_fixed_point(123456, 6):f}" == "0.123456"


def test_normalize_fixed_point_one_more_digit_than_scale():
    assert f"{normalize_fixed_point(1234567, 6):f}" == "1.234567"


def test_normalize_fixed_point_zero_scale_is_integral():
    assert f"{normalize_fixed_point(42, 0):f}" == "42"


def test_normalize_fixed_point_beyond_any_native_integer_width():
    raw = 10**80 + 7
    result = normalize_fixed_point(raw, 18)
    assert f"{result:f}" == "1" + "0" * 62 + "." + "0" * 17 + "7"


def test_normalize_fixed_point_int_past_str_conversion_limit():
    raw = 10**5000 + 7
    result = normalize_fixed_point(raw, 18)
    assert f"{result:f}" == "1" + "0" * 4982 + "." + "0" * 17 + "7"
    assert to_fixed_point(result, 18) == raw


def test_normalize_fixed_point_accepts_digit_strings():
    assert normalize_fixed_point("3493968700000000000000", 18) == Decimal("3493.9687")
    assert f"{normalize_fixed_point('000042', 2):f}" == "0.42"


@pytest.mark.parametrize("raw", [-1, "-5", "12a4", "", "1.5", " ", True])
def test_normalize_fixed_point_rejects_malformed_input(raw):
    with pytest.raises(InvalidArgument):
        normalize_fixed_point(raw, 18)


def test_normalize_fixed_point_rejects_negative_scale():
    with pytest.raises(InvalidArgument):
        normalize_fixed_point(1, -1)


@pytest.mark.parametrize(
    ("raw", "digits"),
    [
        (0, 18),
        (1, 18),
        (999_999_999_999_999_999, 18),
        (3493968700000000000000, 18),
        (2**128 - 1, 18),
        (12345, 2),
        (7, 30),
        (10**50 + 1, 6),
    ],
)
def test_normalize_fixed_point_round_trips(raw, digits):
    value = normalize_fixed_point(raw, digits)
    with localcontext() as ctx:
        ctx.prec = 200
        assert int((value * Decimal(10) ** digits).to_integral_value()) == raw
    assert to_fixed_point(value, digits) == raw


def test_scale_to_18_same_decimals():
    assert scale_to_18(123, 18) == 123


def test_scale_to_18_scale_up():
    assert scale_to_18(1, 6) == 10**12
    assert scale_to_18(10**8, 8) == 10**18


def test_scale_to_18_scale_down():
    assert scale_to_18(10**20, 20) == 10**18
    assert scale_to_18(100, 20) == 1


def test_rescale_between_arbitrary_scales():
    assert rescale(1_500_000, 6, 8) == 150_000_000
    assert rescale(150_000_099, 8, 6) == 1_500_000
    assert rescale(-150_000_099, 8, 6) == -1_500_000


def test_to_fixed_point_encodes_decimal():
    assert to_fixed_point(Decimal("1.5"), 18) == 15 * 10**17
    assert to_fixed_point(Decimal("1E+2"), 2) == 10_000
    assert to_fixed_point(Decimal("1.00000000000000000000"), 18) == 10**18
    assert to_fixed_point(Decimal("0E-18"), 18) == 0


def test_to_fixed_point_rejects_excess_precision():
    with pytest.raises(InvalidArgument, match="more than 18 fractional digits"):
        to_fixed_point(Decimal("1.0000000000000000001"), 18)


@pytest.mark.parametrize("value", [Decimal("-1"), Decimal("NaN"), Decimal("Infinity")])
def test_to_fixed_point_rejects_unrepresentable_values(value):
    with pytest.raises(InvalidArgument):
        to_fixed_point(value, 18)
