"""Angle range reduction and angular-unit conversion.

reduce_angle maps an argument in the context's angular unit to either

    Reduced(value)        -- radians in [-pi, pi], to feed the Taylor series
    ExactQuadrant(value)  -- a literal result for an exact multiple of a
                             right angle (no series, no rounding error)

expand_angle converts a radian result back to the caller's unit.

Exact right angles are detected for degrees and gradians by an exact
remainder, and for radians by comparing against k * pi / 2 rounded to the
caller's digits (so sin(pi) == 0 and cos(pi) == -1 when pi is the
working-precision constant).

Arguments with more than MAX_REDUCTION_DIGITS integer digits are not
reduced: the result is NaN with the invalid-operation flag raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import final

from decimath.constants import pi
from decimath.core.context import AngularUnit, PrecisionContext, Status
from decimath.core.numeric import NAN, ONE, TWO, ZERO

REDUCTION_GUARD_DIGITS = 10
MAX_REDUCTION_DIGITS = 4000  # integer digits of the largest argument reduced
_MAX_EXACT_RADIAN_QUADRANT = 64  # beyond this, k * pi/2 no longer matches the input


@final
@dataclass(frozen=True, slots=True)
class QuadrantValues:
    """Function values at 0, 1, 2 and 3 right angles."""

    zero: Decimal
    right: Decimal
    straight: Decimal
    three_right: Decimal

    def at(self, quadrant: int) -> Decimal:
        return (self.zero, self.right, self.straight, self.three_right)[quadrant % 4]


SIN_QUADRANTS = QuadrantValues(ZERO, ONE, ZERO, -ONE)
COS_QUADRANTS = QuadrantValues(ONE, ZERO, -ONE, ZERO)
TAN_QUADRANTS = QuadrantValues(ZERO, NAN, ZERO, NAN)


@final
@dataclass(frozen=True, slots=True)
class Reduced:
    """Argument reduced to radians in [-pi, pi]."""

    value: Decimal


@final
@dataclass(frozen=True, slots=True)
class ExactQuadrant:
    """Literal result: an exact right-angle multiple, or NaN when x cannot be reduced."""

    value: Decimal


type Reduction = Reduced | ExactQuadrant


def _zero_result(x: Decimal, quadrants: QuadrantValues) -> ExactQuadrant:
    # sin(-0) is -0; cos(-0) is 1.
    value = quadrants.zero
    return ExactQuadrant(value.copy_sign(x) if value.is_zero() else value)


def _exact_radian_quadrant(x: Decimal, context: PrecisionContext) -> int | None:
    """k when x equals k * pi / 2 at the caller's precision, else None."""
    p = pi(context=context)
    with context.activate():
        k = (x / (p / TWO)).to_integral_value()
        if k.copy_abs() > _MAX_EXACT_RADIAN_QUADRANT:
            return None
        if k * p / TWO == x or k * (p / TWO) == x:
            return int(k)
    return None


def _reduce_radians(x: Decimal, quadrants: QuadrantValues, context: PrecisionContext) -> Reduction:
    quadrant = _exact_radian_quadrant(x, context)
    if quadrant is not None:
        return ExactQuadrant(quadrants.at(quadrant))
    # x % 2pi needs as many extra digits as x has integer digits.
    extra = REDUCTION_GUARD_DIGITS + max(0, x.adjusted() + 1)
    with context.extended(extra):
        p = pi(context=context)
        two_pi = TWO * p
        r = x % two_pi
        if r > p:
            r -= two_pi
        elif r < -p:
            r += two_pi
        return Reduced(+r)


def _reduce_circle(
    x: Decimal, circle: Decimal, right: Decimal, quadrants: QuadrantValues, context: PrecisionContext,
) -> Reduction:
    # The remainder is exact once the working digits cover x's integer part.
    extra = REDUCTION_GUARD_DIGITS + max(0, x.adjusted() + 1)
    with context.extended(extra):
        fm = x % circle
        if fm.is_signed():
            fm += circle
        if (fm % right).is_zero():
            return ExactQuadrant(quadrants.at(int(fm / right)))
        if fm > circle / TWO:
            fm -= circle
        return Reduced(fm * TWO * pi(context=context) / circle)


def reduce_angle(
    x: Decimal,
    quadrants: QuadrantValues,
    context: PrecisionContext,
    unit: AngularUnit | None = None,
) -> Reduction:
    """Reduce finite x, given in `unit` (default: the context's), for sin/cos/tan."""
    unit = unit or context.angular_unit
    if x.is_zero():
        return _zero_result(x, quadrants)
    if x.adjusted() >= MAX_REDUCTION_DIGITS:
        context.raise_flag(Status.INVALID_OPERATION)
        return ExactQuadrant(NAN)
    circle = unit.circle
    right = unit.right_angle
    if circle is None or right is None:
        return _reduce_radians(x, quadrants, context)
    return _reduce_circle(x, circle, right, quadrants, context)


def expand_angle(
    radians: Decimal, context: PrecisionContext, unit: AngularUnit | None = None,
) -> Decimal:
    """Convert a radian result to `unit` (default: the context's); identity for radians."""
    unit = unit or context.angular_unit
    circle = unit.circle
    if circle is None or not radians.is_finite():
        return radians
    with context.extended(REDUCTION_GUARD_DIGITS):
        return radians * circle / (TWO * pi(context=context))

