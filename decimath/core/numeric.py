"""Shared numeric utilities: constants, predicates, conversions, iteration.

Conversions follow kernel semantics: int -> Decimal is exact before context
rounding, Decimal -> int truncates and saturates to a bit width, and
float -> Decimal is the exact binary value of the double.

`iterate_until_stable` and `settle` are the convergence discipline shared by
every Newton loop: stop when two successive iterates compare equal (or fall
into a two-cycle) at the active precision, cap the loop at MAX_ITERATIONS,
and return the last estimate with a warning if the cap is hit.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from decimal import ROUND_DOWN, Decimal

from decimath.core.context import PrecisionContext
from decimath.core.errors import ConvergenceError
from decimath.core.result import Err, Ok

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

ZERO = Decimal(0)
ONE = Decimal(1)
TWO = Decimal(2)
HALF = Decimal("0.5")
NAN = Decimal("NaN")
INF = Decimal("Infinity")
NEG_INF = Decimal("-Infinity")

MAX_ITERATIONS = 1000


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def is_special(x: Decimal) -> bool:
    """True for NaN, sNaN and the infinities."""
    return not x.is_finite()


def is_integral(x: Decimal) -> bool:
    """True when x is finite and has no fractional part."""
    return x.is_finite() and x == x.to_integral_value(rounding=ROUND_DOWN)


def is_odd_integer(x: Decimal) -> bool:
    if x.is_zero() or not is_integral(x):
        return False
    _, digits, exponent = x.as_tuple()
    if exponent > 0:
        return False  # a multiple of ten
    return digits[len(digits) - 1 + exponent] % 2 == 1


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------


def int_to_decimal(n: int, context: PrecisionContext) -> Decimal:
    """Convert an integer, rounding to the context's working digits."""
    return context.round(Decimal(n))


def decimal_to_int(x: Decimal, bits: int = 64) -> Ok[int] | Err[str]:
    """Truncate x to a signed integer of `bits` width, saturating at the limits.

    Fractions of magnitude below one give 0; NaN has no integer value.
    """
    if x.is_nan():
        return Err(f"cannot convert {x} to an integer")
    high = (1 << (bits - 1)) - 1
    low = -(1 << (bits - 1))
    if x.is_infinite():
        return Ok(low if x.is_signed() else high)
    if x.copy_abs() < ONE:
        return Ok(0)
    if x >= high:
        return Ok(high)
    if x <= low:
        return Ok(low)
    return Ok(int(x.to_integral_value(rounding=ROUND_DOWN)))


def double_to_decimal(value: float) -> Decimal:
    """Exact decimal value of a double (NaN and infinities map across)."""
    return Decimal(value)


def decimal_to_double(x: Decimal) -> float:
    """Nearest double to x; signaling NaNs become quiet NaN."""
    if x.is_nan():
        return math.nan
    return float(x)


# ---------------------------------------------------------------------------
# Integer power (square-and-multiply)
# ---------------------------------------------------------------------------


def integer_power(x: Decimal, n: int) -> Decimal:
    """x**n for finite x and n >= 0 in O(log n) multiplications.

    Runs at the active decimal precision; callers add guard digits.
    """
    if n == 0:
        return ONE
    base = x
    result = ONE
    while True:
        if n & 1:
            result *= base
        n >>= 1
        if n == 0:
            return result
        base *= base


# ---------------------------------------------------------------------------
# Iteration to a fixed point
# ---------------------------------------------------------------------------


def iterate_until_stable(
    step: Callable[[Decimal], Decimal],
    start: Decimal,
    *,
    source: str,
    limit: int = MAX_ITERATIONS,
) -> Ok[Decimal] | Err[ConvergenceError]:
    """Apply `step` until the iterate stops changing at the active precision.

    A two-cycle (last-digit oscillation) also counts as converged. Returns
    Err carrying the last estimate when the cap is reached or an iterate
    leaves the finite numbers.
    """
    older: Decimal | None = None
    current = start
    for count in range(1, limit + 1):
        following = step(current)
        if not following.is_finite():
            return Err(ConvergenceError(
                message=f"iterate left the finite numbers after {count} steps",
                code="DIVERGED", source=source, iterations=count, estimate=current,
            ))
        if following == current or following == older:
            return Ok(following)
        older, current = current, following
    return Err(ConvergenceError(
        message=f"no stable value after {limit} iterations",
        code="ITERATION_LIMIT", source=source, iterations=limit, estimate=current,
    ))


def settle(result: Ok[Decimal] | Err[ConvergenceError]) -> Decimal:
    """Value of a converged iteration, or the last estimate with a warning."""
    match result:
        case Ok(value=value):
            return value
        case Err(error=error):
            logger.warning(
                "%s: %s (estimate %s); result is likely inexact",
                error.source, error.message, error.estimate,
            )
            return error.estimate
    raise TypeError(f"Expected Ok or Err, got {type(result).__name__}")
