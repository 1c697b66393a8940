"""Newton-Raphson solvers: nth root, square root, hypot and atan2.

Functions
---------
root        : x^(1/n), odd roots of negative numbers allowed
sqrt, cbrt  : root(x, 2), root(x, 3)
hypot       : sqrt(x^2 + y^2) without intermediate overflow
solve_atan2 : angle z with sin z = y/r, cos z = x/r, refined from a double seed

All iterations run with guard digits and stop when two successive iterates
agree at that precision (see decimath.core.numeric.iterate_until_stable).
"""

from __future__ import annotations

import math
from decimal import Decimal

from decimath.core.context import PrecisionContext, get_context
from decimath.core.numeric import (
    INF,
    NAN,
    ONE,
    ZERO,
    decimal_to_double,
    double_to_decimal,
    integer_power,
    iterate_until_stable,
    settle,
)
from decimath.series import sincos_taylor

ROOT_GUARD_DIGITS = 5
ATAN_GUARD_DIGITS = 5


# ---------------------------------------------------------------------------
# nth root
# ---------------------------------------------------------------------------


def _seed_root(magnitude: Decimal, n: int) -> Decimal:
    """Double-precision estimate of magnitude^(1/n), magnitude finite and > 0.

    The decimal exponent is split off first so the estimate never overflows
    a double.
    """
    exponent = magnitude.adjusted()
    quotient, remainder = divmod(exponent, n)
    mantissa = decimal_to_double(magnitude.scaleb(-exponent))  # in [1, 10)
    estimate = 10.0 ** ((math.log10(mantissa) + remainder) / n)
    return double_to_decimal(estimate).scaleb(quotient)


def root(x: Decimal, n: int, *, context: PrecisionContext | None = None) -> Decimal:
    """Return the real nth root of x.

    Newton iteration g <- (x / g^(n-1) - g) / n + g. Negative x with even n
    is NaN; with odd n the root of |x| is negated. A negative n gives the
    reciprocal of the |n|th root; n == 0 is NaN.
    """
    context = context or get_context()
    if x.is_nan() or n == 0:
        return NAN
    if x.is_signed() and n % 2 == 0 and not x.is_zero():
        return NAN
    if n < 0:
        if x.is_zero() and n % 2 == 0:
            x = x.copy_abs()  # an even root of -0 is +0 before the reciprocal
        with context.extended(ROOT_GUARD_DIGITS):
            inverse = ONE / root(x, -n, context=context)
        return context.round(inverse)
    if x.is_infinite() or x.is_zero():
        return x
    if n == 1:
        return context.round(x)

    magnitude = x.copy_abs()
    with context.extended(ROOT_GUARD_DIGITS):
        order = Decimal(n)

        def step(guess: Decimal) -> Decimal:
            return (magnitude / integer_power(guess, n - 1) - guess) / order + guess

        result = settle(iterate_until_stable(
            step, +_seed_root(magnitude, n), source="decimath.roots.root",
        ))
    return context.round(result.copy_sign(x))


def sqrt(x: Decimal, *, context: PrecisionContext | None = None) -> Decimal:
    """Square root; NaN for negative x, -0 for -0."""
    return root(x, 2, context=context)


def cbrt(x: Decimal, *, context: PrecisionContext | None = None) -> Decimal:
    """Cube root; defined for negative x."""
    return root(x, 3, context=context)


# ---------------------------------------------------------------------------
# hypot
# ---------------------------------------------------------------------------


def hypot(x: Decimal, y: Decimal, *, context: PrecisionContext | None = None) -> Decimal:
    """sqrt(x^2 + y^2), scaled by the larger magnitude.

    An infinite argument gives +Infinity even when the other is NaN.
    """
    context = context or get_context()
    if x.is_infinite() or y.is_infinite():
        return INF
    if x.is_nan() or y.is_nan():
        return NAN
    big, small = sorted((x.copy_abs(), y.copy_abs()), reverse=True)
    if big.is_zero():
        return ZERO
    with context.extended(ROOT_GUARD_DIGITS):
        ratio = small / big
        result = big * sqrt(ONE + ratio * ratio, context=context)
    return context.round(result)


# ---------------------------------------------------------------------------
# atan2 fixed point
# ---------------------------------------------------------------------------


def _seed_atan2(y: Decimal, x: Decimal) -> Decimal:
    """Double-precision atan2, with both arguments shifted into double range."""
    shift = max(x.adjusted(), y.adjusted())
    return double_to_decimal(math.atan2(
        decimal_to_double(y.scaleb(-shift)),
        decimal_to_double(x.scaleb(-shift)),
    ))


def solve_atan2(y: Decimal, x: Decimal, context: PrecisionContext) -> Decimal:
    """Angle z in (-pi, pi] with sin z = y/r and cos z = x/r, r = hypot(x, y).

    x and y must be finite and not both zero; the caller handles the axis
    and special-value cases. The Newton update divides by whichever of
    cos z, sin z is larger in magnitude.
    """
    with context.extended(ATAN_GUARD_DIGITS):
        r = hypot(x, y, context=context)
        x_norm = x / r
        y_norm = y / r

        if x_norm.copy_abs() >= y_norm.copy_abs():
            def step(z: Decimal) -> Decimal:
                sc = sincos_taylor(z, context)
                return z + (y_norm - sc.sin) / sc.cos
        else:
            def step(z: Decimal) -> Decimal:
                sc = sincos_taylor(z, context)
                return z - (x_norm - sc.cos) / sc.sin

        z = settle(iterate_until_stable(
            step, +_seed_atan2(y, x), source="decimath.roots.solve_atan2",
        ))
    return context.round(z)
