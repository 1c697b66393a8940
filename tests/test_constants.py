"""Tests for decimath.constants -- Borwein pi and ln 2, with caching."""

from __future__ import annotations

import logging
from decimal import Decimal, localcontext

import pytest

from decimath.constants import clear_cache, ln2, pi
from decimath.core.context import DecimalFamily, RoundingMode, get_context

# pi to 120 decimals
_PI = Decimal(
    "3.14159265358979323846264338327950288419716939937510582097494459230781640628"
    "6208998628034825342117067982148086513282306647093844609550582231725359"
)
# ln(2) = 0.69314718055994530941723212145817656807550013436025...
_LN2 = Decimal("0.6931471805599453094172321214581765680755001343602552541206800094933936")


def _rounded(value: Decimal, digits: int) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = digits
        return +value


class TestPi:
    def test_default_digits(self) -> None:
        assert pi() == _rounded(_PI, 34)

    @pytest.mark.parametrize("digits", [1, 5, 16, 50, 100])
    def test_rounded_to_requested_digits(self, digits: int) -> None:
        context = get_context()
        context.digits = digits
        assert pi() == _rounded(_PI, digits)

    def test_fixed_families(self) -> None:
        assert pi(context=get_context(DecimalFamily.DECIMAL32)) == Decimal("3.141593")
        assert pi(context=get_context(DecimalFamily.DECIMAL64)) == Decimal("3.141592653589793")

    def test_rounding_mode_applies(self) -> None:
        context = get_context(DecimalFamily.DECIMAL32)
        context.rounding = RoundingMode.CEILING
        assert pi(context=context) == Decimal("3.141593")
        context.rounding = RoundingMode.FLOOR
        assert pi(context=context) == Decimal("3.141592")

    def test_restores_digits(self) -> None:
        context = get_context()
        context.digits = 80
        pi()
        assert context.digits == 80


class TestCaching:
    def test_second_call_uses_cache(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="decimath.constants"):
            pi()
            first = caplog.text
            pi()
        assert "computing pi" in first
        assert caplog.text == first

    def test_fewer_digits_served_from_cache(self, caplog: pytest.LogCaptureFixture) -> None:
        context = get_context()
        context.digits = 60
        pi()
        context.digits = 20
        with caplog.at_level(logging.DEBUG, logger="decimath.constants"):
            assert pi() == _rounded(_PI, 20)
        assert "computing pi" not in caplog.text

    def test_more_digits_recompute(self, caplog: pytest.LogCaptureFixture) -> None:
        pi()
        context = get_context()
        context.digits = 100
        with caplog.at_level(logging.DEBUG, logger="decimath.constants"):
            pi()
        assert "computing pi to 110 digits" in caplog.text

    def test_clear_cache(self, caplog: pytest.LogCaptureFixture) -> None:
        pi()
        clear_cache()
        with caplog.at_level(logging.DEBUG, logger="decimath.constants"):
            pi()
        assert "computing pi" in caplog.text


class TestLn2:
    def test_default_digits(self) -> None:
        assert ln2() == _rounded(_LN2, 34)

    def test_fixed_family(self) -> None:
        assert ln2(context=get_context(DecimalFamily.DECIMAL32)) == Decimal("0.6931472")

    def test_beyond_literal_uses_kernel(self, caplog: pytest.LogCaptureFixture) -> None:
        context = get_context()
        context.digits = 400
        with caplog.at_level(logging.DEBUG, logger="decimath.constants"):
            value = ln2()
        assert "extending ln2" in caplog.text
        with localcontext() as ctx:
            ctx.prec = 400
            assert value == Decimal(2).ln()

    def test_literal_agrees_with_kernel(self) -> None:
        context = get_context()
        context.digits = 250
        with localcontext() as ctx:
            ctx.prec = 250
            assert ln2() == Decimal(2).ln()
