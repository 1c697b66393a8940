"""Package-level checks: re-exports, and every public function leaves the context as it found it."""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal, getcontext

import pytest

import decimath
from decimath.core.context import DecimalFamily, RoundingMode, get_context
from decimath.core.result import Ok

_UNARY: list[Callable[..., Decimal]] = [
    decimath.sin, decimath.cos, decimath.tan, decimath.asin, decimath.acos, decimath.atan,
    decimath.sinh, decimath.cosh, decimath.tanh, decimath.asinh, decimath.acosh, decimath.atanh,
    decimath.exp, decimath.expm1, decimath.exp2, decimath.ln, decimath.ln1p, decimath.log2,
    decimath.log10, decimath.sqrt, decimath.cbrt, decimath.factorial, decimath.gamma,
    decimath.log_gamma, decimath.erf,
]

_BINARY: list[Callable[..., Decimal]] = [
    decimath.atan2, decimath.pow, decimath.hypot, decimath.comb, decimath.perm,
]


def _argument(fn: Callable[..., Decimal]) -> Decimal:
    if fn in (decimath.acosh, decimath.factorial):
        return Decimal(3)
    return Decimal("0.375")


class TestContextIsolation:
    @pytest.mark.parametrize("fn", _UNARY, ids=lambda fn: fn.__name__)
    def test_unary_restores_digits(self, fn: Callable[..., Decimal]) -> None:
        context = get_context()
        context.digits = 42
        fn(_argument(fn))
        assert context.digits == 42

    @pytest.mark.parametrize("fn", _BINARY, ids=lambda fn: fn.__name__)
    def test_binary_restores_digits(self, fn: Callable[..., Decimal]) -> None:
        context = get_context()
        context.digits = 42
        fn(Decimal(7), Decimal(3))
        assert context.digits == 42

    @pytest.mark.parametrize("fn", _UNARY, ids=lambda fn: fn.__name__)
    def test_thread_context_untouched(self, fn: Callable[..., Decimal]) -> None:
        before = getcontext()
        prec = before.prec
        fn(_argument(fn))
        assert getcontext() is before
        assert getcontext().prec == prec

    @pytest.mark.parametrize("fn", _UNARY, ids=lambda fn: fn.__name__)
    def test_result_has_requested_digits(self, fn: Callable[..., Decimal]) -> None:
        context = get_context()
        context.digits = 20
        result = fn(_argument(fn))
        assert len(result.as_tuple().digits) <= 20

    def test_rounding_mode_survives_calls(self) -> None:
        context = get_context(DecimalFamily.DECIMAL64)
        context.rounding = RoundingMode.FLOOR
        decimath.sin(Decimal(1), context=context)
        decimath.gamma(Decimal("2.5"), context=context)
        assert context.rounding is RoundingMode.FLOOR
        assert context.digits == 16


class TestExports:
    def test_pi_and_ln2(self) -> None:
        assert str(decimath.pi()).startswith("3.14159265358979323846")
        assert str(decimath.ln2()).startswith("0.69314718055994530941")

    def test_sincos_type(self) -> None:
        sc = decimath.sincos(Decimal(0))
        assert isinstance(sc, decimath.SinCos)

    def test_checked_is_exported(self) -> None:
        assert decimath.checked(decimath.sqrt, Decimal(9)) == Ok(Decimal(3))
