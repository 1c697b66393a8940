"""Hyperbolic functions and their inverses.

sinh, cosh, tanh are built on exp; small arguments take a Taylor series
(sinh) or go through sinh (tanh) to avoid the cancellation in e^x - e^-x.
The inverses are logarithms expressed through ln1p so that arguments near
the origin keep their leading digits.

    atanh(+-1)            -> +-Infinity
    atanh(|x| > 1)        -> NaN
    acosh(x < 1)          -> NaN
    tanh(+-Inf)           -> +-1
"""

from __future__ import annotations

from decimal import Decimal

from decimath.constants import ln2
from decimath.core.context import PrecisionContext, get_context
from decimath.core.numeric import HALF, INF, NAN, NEG_INF, ONE, TWO, ZERO, settle
from decimath.powers import exp, ln1p
from decimath.roots import sqrt
from decimath.series import sum_series

HYPERBOLIC_GUARD_DIGITS = 10

_SMALL = Decimal("0.05")
_HALF_LN10 = Decimal("1.1512925465")  # tanh(x) rounds to 1 past digits * ln(10) / 2


def _large(x: Decimal, context: PrecisionContext) -> bool:
    """True when 1 is negligible beside x^2 at the context's digits."""
    return x.adjusted() > context.digits // 2 + 2


# ---------------------------------------------------------------------------
# sinh, cosh, tanh
# ---------------------------------------------------------------------------


def _sinh_taylor(a: Decimal) -> Decimal:
    # a + a^3/3! + a^5/5! + ...
    a2 = a * a
    return settle(sum_series(
        a,
        lambda term, k: term * a2 / ((2 * k) * (2 * k + 1)),
        source="decimath.hyperbolic.sinh",
    ))


def sinh(x: Decimal, *, context: PrecisionContext | None = None) -> Decimal:
    context = context or get_context()
    if x.is_nan():
        return NAN
    if x.is_infinite() or x.is_zero():
        return x
    with context.extended(HYPERBOLIC_GUARD_DIGITS):
        if x.copy_abs() <= _SMALL:
            result = _sinh_taylor(x)
        else:
            e = exp(x.copy_abs(), context=context)
            result = ((e - ONE / e) * HALF).copy_sign(x)
    return context.round(result)


def cosh(x: Decimal, *, context: PrecisionContext | None = None) -> Decimal:
    context = context or get_context()
    if x.is_nan():
        return NAN
    if x.is_infinite():
        return INF
    if x.is_zero():
        return ONE
    with context.extended(HYPERBOLIC_GUARD_DIGITS):
        e = exp(x.copy_abs(), context=context)
        result = (e + ONE / e) * HALF
    return context.round(result)


def tanh(x: Decimal, *, context: PrecisionContext | None = None) -> Decimal:
    """Hyperbolic tangent, exactly +-1 once the difference from 1 is below one ulp."""
    context = context or get_context()
    if x.is_nan():
        return NAN
    if x.is_zero():
        return x
    with context.activate():
        saturated = x.is_infinite() or x.copy_abs() > (context.digits + 2) * _HALF_LN10
    if saturated:
        return ONE.copy_sign(x)
    with context.extended(HYPERBOLIC_GUARD_DIGITS):
        if x.copy_abs() <= _SMALL:
            s = _sinh_taylor(x)
            result = s / sqrt(ONE + s * s, context=context)
        else:
            e2 = exp(TWO * x.copy_abs(), context=context)
            result = ((e2 - ONE) / (e2 + ONE)).copy_sign(x)
    return context.round(result)


# ---------------------------------------------------------------------------
# Inverses
# ---------------------------------------------------------------------------


def asinh(x: Decimal, *, context: PrecisionContext | None = None) -> Decimal:
    """ln(x + sqrt(x^2 + 1)), odd in x.

    Written as ln1p(|x| + x^2 / (1 + sqrt(1 + x^2))) so small x loses no
    digits; for large |x| the 1 is dropped and asinh(x) = ln 2 + ln|x|.
    """
    context = context or get_context()
    if x.is_nan():
        return NAN
    if x.is_infinite() or x.is_zero():
        return x
    magnitude = x.copy_abs()
    with context.extended(HYPERBOLIC_GUARD_DIGITS):
        if _large(magnitude, context):
            result = ln2(context=context) + magnitude.ln()
        else:
            x2 = magnitude * magnitude
            result = ln1p(magnitude + x2 / (ONE + sqrt(ONE + x2, context=context)), context=context)
    return context.round(result.copy_sign(x))


def acosh(x: Decimal, *, context: PrecisionContext | None = None) -> Decimal:
    """ln(x + sqrt(x^2 - 1)) for x >= 1, written as ln1p((x - 1) + sqrt((x - 1)(x + 1)))."""
    context = context or get_context()
    if x.is_nan() or x < ONE:
        return NAN
    if x.is_infinite():
        return INF
    if x == ONE:
        return ZERO
    with context.extended(HYPERBOLIC_GUARD_DIGITS):
        if _large(x, context):
            result = ln2(context=context) + x.ln()
        else:
            t = x - ONE
            result = ln1p(t + sqrt(t * (x + ONE), context=context), context=context)
    return context.round(result)


def atanh(x: Decimal, *, context: PrecisionContext | None = None) -> Decimal:
    """(1/2) ln((1 + x) / (1 - x)), computed as ln1p(2x / (1 - x)) / 2."""
    context = context or get_context()
    if x.is_nan():
        return NAN
    if x.is_zero():
        return x
    magnitude = x.copy_abs()
    if magnitude == ONE:
        return NEG_INF if x.is_signed() else INF
    if magnitude > ONE:
        return NAN
    with context.extended(HYPERBOLIC_GUARD_DIGITS):
        result = ln1p(TWO * x / (ONE - x), context=context) * HALF
    return context.round(result)
