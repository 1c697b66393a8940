"""Tests for decimath.core.numeric -- predicates, conversions, fixed-point iteration."""

from __future__ import annotations

import logging
import math
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from decimath.core.context import DecimalFamily, get_context
from decimath.core.errors import ConvergenceError
from decimath.core.numeric import (
    MAX_ITERATIONS,
    decimal_to_double,
    decimal_to_int,
    double_to_decimal,
    int_to_decimal,
    integer_power,
    is_integral,
    is_odd_integer,
    is_special,
    iterate_until_stable,
    settle,
)
from decimath.core.result import Err, Ok

# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


class TestPredicates:
    @pytest.mark.parametrize("text", ["NaN", "sNaN", "Infinity", "-Infinity"])
    def test_is_special(self, text: str) -> None:
        assert is_special(Decimal(text))

    def test_finite_is_not_special(self) -> None:
        assert not is_special(Decimal("-0"))

    @pytest.mark.parametrize("text, expected", [
        ("3", True), ("3.000", True), ("1E+5", True), ("-7", True),
        ("2.5", False), ("0.001", False), ("Infinity", False), ("NaN", False),
    ])
    def test_is_integral(self, text: str, expected: bool) -> None:
        assert is_integral(Decimal(text)) is expected

    @pytest.mark.parametrize("text, expected", [
        ("3", True), ("-5", True), ("7.00", True), ("4", False),
        ("0", False), ("1E+1", False), ("2.5", False), ("Infinity", False),
    ])
    def test_is_odd_integer(self, text: str, expected: bool) -> None:
        assert is_odd_integer(Decimal(text)) is expected


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------


class TestConversions:
    def test_int_to_decimal_rounds_to_context(self) -> None:
        context = get_context(DecimalFamily.DECIMAL32)
        assert int_to_decimal(123456789, context) == Decimal("1.234568E+8")

    def test_decimal_to_int_truncates(self) -> None:
        assert decimal_to_int(Decimal("42.9")) == Ok(42)
        assert decimal_to_int(Decimal("-42.9")) == Ok(-42)

    def test_decimal_to_int_small_fraction_is_zero(self) -> None:
        assert decimal_to_int(Decimal("0.75")) == Ok(0)
        assert decimal_to_int(Decimal("-0.75")) == Ok(0)

    def test_decimal_to_int_saturates(self) -> None:
        assert decimal_to_int(Decimal("1E+30")) == Ok(2**63 - 1)
        assert decimal_to_int(Decimal("-1E+30")) == Ok(-(2**63))
        assert decimal_to_int(Decimal("300"), bits=8) == Ok(127)

    def test_decimal_to_int_infinity_saturates(self) -> None:
        assert decimal_to_int(Decimal("Infinity"), bits=16) == Ok(32767)
        assert decimal_to_int(Decimal("-Infinity"), bits=16) == Ok(-32768)

    def test_decimal_to_int_nan_is_err(self) -> None:
        assert isinstance(decimal_to_int(Decimal("NaN")), Err)

    def test_double_to_decimal_is_exact(self) -> None:
        assert double_to_decimal(0.1) == Decimal("0.1000000000000000055511151231257827021181583404541015625")

    def test_decimal_to_double(self) -> None:
        assert decimal_to_double(Decimal("2.5")) == 2.5
        assert math.isnan(decimal_to_double(Decimal("sNaN")))


class TestIntegerPower:
    def test_small_powers(self) -> None:
        with get_context().activate():
            assert integer_power(Decimal(2), 10) == 1024
            assert integer_power(Decimal("1.5"), 0) == 1
            assert integer_power(Decimal(-3), 3) == -27

    @given(st.integers(min_value=-50, max_value=50), st.integers(min_value=0, max_value=20))
    def test_matches_python_int_power(self, base: int, exponent: int) -> None:
        context = get_context()
        with context.working(60):
            assert integer_power(Decimal(base), exponent) == base**exponent


# ---------------------------------------------------------------------------
# Fixed-point iteration
# ---------------------------------------------------------------------------


class TestIterateUntilStable:
    def test_newton_sqrt_converges(self) -> None:
        two = Decimal(2)
        with get_context().activate():
            result = iterate_until_stable(lambda g: (g + two / g) / 2, Decimal(1), source="test")
        match result:
            case Ok(value):
                assert str(value).startswith("1.41421356237309504880168872420969")
            case Err(error):
                pytest.fail(f"should converge: {error}")

    def test_two_cycle_counts_as_converged(self) -> None:
        flip = {Decimal(1): Decimal(2), Decimal(2): Decimal(1)}
        result = iterate_until_stable(lambda g: flip[g], Decimal(1), source="test")
        assert isinstance(result, Ok)

    def test_cap_returns_err_with_estimate(self) -> None:
        result = iterate_until_stable(lambda g: g + 1, Decimal(0), source="test.counter", limit=10)
        match result:
            case Err(ConvergenceError(iterations=iterations, estimate=estimate, code=code)):
                assert iterations == 10
                assert estimate == 10
                assert code == "ITERATION_LIMIT"
            case _:
                pytest.fail("should hit the cap")

    def test_non_finite_iterate_is_err(self) -> None:
        result = iterate_until_stable(lambda g: Decimal("Infinity"), Decimal(1), source="test")
        match result:
            case Err(ConvergenceError(code=code, estimate=estimate)):
                assert code == "DIVERGED"
                assert estimate == 1
            case _:
                pytest.fail("should report divergence")

    def test_default_cap(self) -> None:
        result = iterate_until_stable(lambda g: g + 1, Decimal(0), source="test")
        assert isinstance(result, Err)
        assert result.error.iterations == MAX_ITERATIONS


class TestSettle:
    def test_ok_passes_value(self) -> None:
        assert settle(Ok(Decimal(3))) == 3

    def test_err_logs_and_returns_estimate(self, caplog: pytest.LogCaptureFixture) -> None:
        error = ConvergenceError(
            message="no stable value", code="ITERATION_LIMIT",
            source="decimath.roots.root", iterations=1000, estimate=Decimal("1.5"),
        )
        with caplog.at_level(logging.WARNING, logger="decimath.core.numeric"):
            assert settle(Err(error)) == Decimal("1.5")
        assert "decimath.roots.root" in caplog.text
        assert "likely inexact" in caplog.text
