"""Exponentials, logarithms and powers.

Functions
---------
pow_int : x^n for integer n (square-and-multiply)
pow     : x^y, integral y through pow_int, otherwise exp(y ln|x|)
exp     : Taylor series on x / 2^k with |x / 2^k| <= 1, squared k times
expm1   : exp(x) - 1 without cancellation near zero
exp2    : 2^x
ln, log10 : kernel logarithms (correctly rounded)
log2    : ln(x) / ln(2)
ln1p    : ln(1 + x) without cancellation near zero

Special values are answered before any series runs. Zero to any integral
power other than zero is zero; 0^0 is 1.
"""

from __future__ import annotations

from decimal import Decimal

from decimath.constants import ln2
from decimath.core.context import PrecisionContext, Status, get_context
from decimath.core.numeric import (
    INF,
    NAN,
    NEG_INF,
    ONE,
    TWO,
    ZERO,
    integer_power,
    is_integral,
    is_odd_integer,
    settle,
)
from decimath.series import sum_series

POWER_GUARD_DIGITS = 10
EXP_GUARD_DIGITS = 10

_LN10 = Decimal("2.302585092994045684017991454684364207601")


# ---------------------------------------------------------------------------
# Integer power
# ---------------------------------------------------------------------------


def pow_int(x: Decimal, n: int, *, context: PrecisionContext | None = None) -> Decimal:
    """x^n for integer n in O(log |n|) multiplications; negative n reciprocates."""
    context = context or get_context()
    if x.is_nan():
        return NAN
    if n == 0:
        return ONE
    odd = n % 2 == 1
    if x.is_zero():
        return ZERO.copy_sign(x) if odd and n > 0 else ZERO
    if x.is_infinite():
        magnitude = INF if n > 0 else ZERO
        return magnitude.copy_sign(x) if odd else magnitude
    # Rounding error grows with the number of multiplications.
    with context.extended(POWER_GUARD_DIGITS + len(str(abs(n)))):
        result = integer_power(x, abs(n))
        if n < 0:
            result = ONE / result
    return context.round(result)


# ---------------------------------------------------------------------------
# exp and friends
# ---------------------------------------------------------------------------


def _exp_limits(context: PrecisionContext) -> tuple[Decimal, Decimal]:
    """Arguments beyond which exp overflows, or underflows to zero."""
    with context.activate():
        over = (context.emax + 1) * _LN10
        under = (context.emin - context.digits - 1) * _LN10
    return over, under


def exp(x: Decimal, *, context: PrecisionContext | None = None) -> Decimal:
    """e^x.

    x is halved until |x| <= 1, the series sum(x^k / k!) is summed, and the
    sum is squared once per halving. Negative x is the reciprocal of
    exp(|x|).
    """
    context = context or get_context()
    if x.is_nan():
        return NAN
    if x.is_infinite():
        return ZERO if x.is_signed() else INF
    if x.is_zero():
        return ONE
    over, under = _exp_limits(context)
    if x > over:
        context.raise_flag(Status.OVERFLOW)
        return INF
    if x < under:
        context.raise_flag(Status.UNDERFLOW)
        return ZERO

    magnitude = x.copy_abs()
    # Each squaring doubles the relative error: one guard digit per decade of |x|.
    extra = EXP_GUARD_DIGITS + max(0, magnitude.adjusted() + 1)
    with context.extended(extra):
        reduced = magnitude
        halvings = 0
        while reduced > ONE:
            reduced /= TWO
            halvings += 1
        result = settle(sum_series(
            ONE, lambda term, k: term * reduced / k, source="decimath.powers.exp",
        ))
        for _ in range(halvings):
            result *= result
        if x.is_signed():
            result = ONE / result
    return context.round(result)


def expm1(x: Decimal, *, context: PrecisionContext | None = None) -> Decimal:
    """e^x - 1, summed directly for |x| < 1."""
    context = context or get_context()
    if x.is_nan():
        return NAN
    if x.is_infinite():
        return ONE.copy_negate() if x.is_signed() else INF
    if x.is_zero():
        return x
    with context.extended(EXP_GUARD_DIGITS):
        if x.copy_abs() < ONE:
            # x + x^2/2! + x^3/3! + ...
            result = settle(sum_series(
                x, lambda term, k: term * x / (k + 1), source="decimath.powers.expm1",
            ))
        else:
            result = exp(x, context=context) - ONE
    return context.round(result)


def exp2(x: Decimal, *, context: PrecisionContext | None = None) -> Decimal:
    return pow(TWO, x, context=context)


# ---------------------------------------------------------------------------
# Logarithms
# ---------------------------------------------------------------------------


def ln(x: Decimal, *, context: PrecisionContext | None = None) -> Decimal:
    """Natural logarithm: -Inf at zero, NaN for negative x."""
    context = context or get_context()
    with context.activate():
        return x.ln()


def log10(x: Decimal, *, context: PrecisionContext | None = None) -> Decimal:
    context = context or get_context()
    with context.activate():
        return x.log10()


def log2(x: Decimal, *, context: PrecisionContext | None = None) -> Decimal:
    """ln(x) / ln(2) from the cached high-precision ln(2)."""
    context = context or get_context()
    if x.is_nan() or x.is_signed() or x.is_zero() or x.is_infinite():
        return ln(x, context=context)
    with context.extended(POWER_GUARD_DIGITS):
        result = x.ln() / ln2(context=context)
    return context.round(result)


def ln1p(x: Decimal, *, context: PrecisionContext | None = None) -> Decimal:
    """ln(1 + x).

    With u = 1 + x rounded, ln(u) * x / (u - 1) cancels the rounding error
    of u.
    """
    context = context or get_context()
    if x.is_nan():
        return NAN
    if x.is_zero():
        return x
    if x.is_infinite():
        return NAN if x.is_signed() else INF
    if x == -ONE:
        return NEG_INF
    if x < -ONE:
        return NAN
    with context.extended(POWER_GUARD_DIGITS):
        u = ONE + x
        v = u - ONE
        if v.is_zero():
            result = x
        else:
            result = u.ln() * (x / v)
    return context.round(result)


# ---------------------------------------------------------------------------
# General power
# ---------------------------------------------------------------------------


def _special_pow(x: Decimal, y: Decimal) -> Decimal | None:
    """x^y for infinite x or y; None when both are finite."""
    if x.is_infinite():
        if y.is_zero():
            return ONE
        magnitude = INF if y > ZERO else ZERO
        return magnitude.copy_sign(x) if is_odd_integer(y) else magnitude
    if y.is_infinite():
        base = x.copy_abs()
        if base == ONE:
            return ONE
        grows = (base > ONE) != y.is_signed()
        return INF if grows else ZERO
    return None


def pow(x: Decimal, y: Decimal, *, context: PrecisionContext | None = None) -> Decimal:  # noqa: A001
    """x^y.

    Integral y goes through square-and-multiply; otherwise x^y = exp(y ln|x|).
    For negative x the parity of y picks the sign, and a non-integral y
    has no real result (NaN).
    """
    context = context or get_context()
    if x.is_nan() or y.is_nan():
        return NAN
    special = _special_pow(x, y)
    if special is not None:
        return special
    if x.is_zero():
        return ONE if y.is_zero() else x
    integral = is_integral(y)
    if integral and y.adjusted() < 18:
        return pow_int(x, int(y), context=context)
    if x.is_signed() and not integral:
        return NAN

    magnitude = x.copy_abs()
    with context.extended(POWER_GUARD_DIGITS):
        exponent = y * magnitude.ln()
    # exp amplifies the absolute error of y ln|x| into relative error.
    # Beyond 10^11 the exponent overflows every family, so exp answers directly.
    extra = POWER_GUARD_DIGITS + min(max(0, exponent.adjusted() + 1), 12)
    with context.extended(extra):
        result = exp(y * magnitude.ln(), context=context)
        if x.is_signed() and is_odd_integer(y):
            result = result.copy_negate()
    return context.round(result)
