"""Trigonometric functions and their inverses.

Arguments of sin/cos/tan and results of the inverse functions are in the
context's angular unit unless `unit=` overrides it. Special values are
handled before any series or Newton iteration runs:

    sin, cos, tan (NaN or +-Inf)  -> NaN
    asin, acos    (|x| > 1, NaN)  -> NaN
    atan          (+-Inf)         -> +-pi/2
    atan2         full IEEE case table, atan2(0, 0) -> NaN
"""

from __future__ import annotations

from decimal import Decimal

from decimath.angles import (
    COS_QUADRANTS,
    SIN_QUADRANTS,
    TAN_QUADRANTS,
    ExactQuadrant,
    Reduced,
    expand_angle,
    reduce_angle,
)
from decimath.constants import pi
from decimath.core.context import AngularUnit, PrecisionContext, get_context
from decimath.core.numeric import NAN, ONE, TWO, ZERO, is_special
from decimath.roots import solve_atan2, sqrt
from decimath.series import SinCos, sincos_taylor

TRIG_GUARD_DIGITS = 5


# ---------------------------------------------------------------------------
# sin, cos, tan
# ---------------------------------------------------------------------------


def sin(x: Decimal, *, context: PrecisionContext | None = None, unit: AngularUnit | None = None) -> Decimal:
    context = context or get_context()
    if is_special(x):
        return NAN
    match reduce_angle(x, SIN_QUADRANTS, context, unit):
        case ExactQuadrant(value=value):
            return value
        case Reduced(value=a):
            result = sincos_taylor(a, context, want_cos=False).sin
            assert result is not None
            return result
    raise TypeError("unreachable reduction")


def cos(x: Decimal, *, context: PrecisionContext | None = None, unit: AngularUnit | None = None) -> Decimal:
    context = context or get_context()
    if is_special(x):
        return NAN
    match reduce_angle(x, COS_QUADRANTS, context, unit):
        case ExactQuadrant(value=value):
            return value
        case Reduced(value=a):
            result = sincos_taylor(a, context, want_sin=False).cos
            assert result is not None
            return result
    raise TypeError("unreachable reduction")


def sincos(x: Decimal, *, context: PrecisionContext | None = None, unit: AngularUnit | None = None) -> SinCos:
    """sin(x) and cos(x) from a single Taylor pass."""
    context = context or get_context()
    if is_special(x):
        return SinCos(sin=NAN, cos=NAN)
    sine = reduce_angle(x, SIN_QUADRANTS, context, unit)
    if isinstance(sine, ExactQuadrant):
        cosine = reduce_angle(x, COS_QUADRANTS, context, unit)
        assert isinstance(cosine, ExactQuadrant)
        return SinCos(sin=sine.value, cos=cosine.value)
    return sincos_taylor(sine.value, context)


def tan(x: Decimal, *, context: PrecisionContext | None = None, unit: AngularUnit | None = None) -> Decimal:
    """Tangent; NaN at exact odd right angles, 0 at exact straight angles."""
    context = context or get_context()
    if is_special(x):
        return NAN
    # Exact quadrants are matched at the caller's digits, like sin and cos.
    reduction = reduce_angle(x, TAN_QUADRANTS, context, unit)
    if isinstance(reduction, ExactQuadrant):
        return reduction.value
    with context.extended(TRIG_GUARD_DIGITS):
        sc = sincos_taylor(reduction.value, context)
        assert sc.sin is not None
        assert sc.cos is not None
        quotient = sc.sin / sc.cos
    return context.round(quotient)


# ---------------------------------------------------------------------------
# atan2, atan, asin, acos (radian cores, then unit conversion)
# ---------------------------------------------------------------------------


def _atan2_radians(y: Decimal, x: Decimal, context: PrecisionContext) -> Decimal:
    """atan2 in radians, with every special and axis case answered directly."""
    if x.is_nan() or y.is_nan():
        return NAN
    if x.is_zero() and y.is_zero():
        return NAN

    with context.extended(TRIG_GUARD_DIGITS):
        p = pi(context=context)
        half_pi = p / TWO
        quarter_pi = p / 4
        if y.is_infinite():
            if x.is_infinite():
                angle = 3 * quarter_pi if x.is_signed() else quarter_pi
            else:
                angle = half_pi
            angle = angle.copy_sign(y)
        elif x.is_infinite():
            angle = p.copy_sign(y) if x.is_signed() else ZERO.copy_sign(y)
        elif x.is_zero():
            angle = half_pi.copy_sign(y)
        elif y.is_zero():
            # The sign of a zero numerator selects +pi or -pi on the negative axis.
            angle = p.copy_sign(y) if x.is_signed() else ZERO.copy_sign(y)
        elif x == y:
            angle = -3 * quarter_pi if y.is_signed() else quarter_pi
        elif x == y.copy_negate():
            angle = quarter_pi.copy_negate() if y.is_signed() else 3 * quarter_pi
        else:
            angle = solve_atan2(y, x, context)
    return context.round(angle)


def atan2(
    y: Decimal, x: Decimal, *, context: PrecisionContext | None = None, unit: AngularUnit | None = None,
) -> Decimal:
    """Angle of the point (x, y) in (-pi, pi], in the requested unit."""
    context = context or get_context()
    with context.extended(TRIG_GUARD_DIGITS):
        result = expand_angle(_atan2_radians(y, x, context), context, unit)
    return context.round(result)


def atan(x: Decimal, *, context: PrecisionContext | None = None, unit: AngularUnit | None = None) -> Decimal:
    context = context or get_context()
    if x.is_nan():
        return NAN
    if x.is_zero():
        return x
    return atan2(x, ONE, context=context, unit=unit)


def _asin_radians(x: Decimal, context: PrecisionContext) -> Decimal:
    # 2 atan(x / (1 + sqrt(1 - x^2)))
    with context.extended(TRIG_GUARD_DIGITS):
        z = ONE + sqrt(ONE - x * x, context=context)
        return TWO * _atan2_radians(x / z, ONE, context)


def asin(x: Decimal, *, context: PrecisionContext | None = None, unit: AngularUnit | None = None) -> Decimal:
    context = context or get_context()
    if x.is_nan() or x.copy_abs() > ONE:
        return NAN
    if x.is_zero():
        return x
    with context.extended(TRIG_GUARD_DIGITS):
        result = expand_angle(_asin_radians(x, context), context, unit)
    return context.round(result)


def _acos_radians(x: Decimal, context: PrecisionContext) -> Decimal:
    if x == ONE:
        return ZERO
    with context.extended(TRIG_GUARD_DIGITS):
        if x == -ONE:
            return pi(context=context)
        # 2 atan((1 - x) / sqrt(1 - x^2))
        z = (ONE - x) / sqrt(ONE - x * x, context=context)
        return TWO * _atan2_radians(z, ONE, context)


def acos(x: Decimal, *, context: PrecisionContext | None = None, unit: AngularUnit | None = None) -> Decimal:
    context = context or get_context()
    if x.is_nan() or x.copy_abs() > ONE:
        return NAN
    with context.extended(TRIG_GUARD_DIGITS):
        result = expand_angle(_acos_radians(x, context), context, unit)
    return context.round(result)
