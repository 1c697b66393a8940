"""Mathematical constants at the active working precision.

pi  : Borwein quartic iteration, recomputed only when more digits are
      requested than any earlier call needed
ln2 : 300-digit literal, extended through the kernel logarithm beyond that

Both are cached at the highest precision computed so far and rounded to the
caller's digits and rounding mode on every call.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from decimath.core.context import PrecisionContext, get_context
from decimath.core.numeric import MAX_ITERATIONS, ONE, TWO
from decimath.roots import sqrt

logger = logging.getLogger(__name__)

CONSTANT_GUARD_DIGITS = 10

_LN2_LITERAL = Decimal(
    "0.69314718055994530941723212145817656807550013436025525412068000949339362196"
    "969471560586332699641868754200148102057068573368552023575813055703267075163507"
    "596193072757082837143519030703862389167347112335011536449795523912047517268157"
    "493206515552473413952588295045300709532636664265410423915781495204374"
)
_LN2_LITERAL_DIGITS = len(_LN2_LITERAL.as_tuple().digits)

# name -> (digits, value); holds the most precise value computed so far
_CACHE: dict[str, tuple[int, Decimal]] = {}


def _borwein_pi(context: PrecisionContext) -> Decimal:
    """Pi at the context's current digits by the Borwein quartic iteration.

    a0 = 6 - 4 sqrt(2), y0 = sqrt(2) - 1; each step
    r = (1 - y^4)^(1/4), y <- (1 - r)/(1 + r),
    a <- a (1 + y)^4 - m y (1 + y + y^2) with m = 2^(2k+3);
    1/a converges quartically to pi.
    """
    with context.activate():
        root2 = sqrt(TWO, context=context)
        a = 6 - 4 * root2
        y = root2 - ONE
        m = 2
        estimate = ONE / a
        for _ in range(MAX_ITERATIONS):
            m *= 4
            y2 = y * y
            r = sqrt(sqrt(ONE - y2 * y2, context=context), context=context)
            y = (ONE - r) / (ONE + r)
            p = (ONE + y) * (ONE + y)
            a = a * p * p - m * y * (ONE + y + y * y)
            previous, estimate = estimate, ONE / a
            if estimate == previous:
                return estimate
    logger.warning("pi: Borwein iteration still changing after %d steps", MAX_ITERATIONS)
    return estimate


def _cached(name: str, digits: int) -> Decimal | None:
    entry = _CACHE.get(name)
    if entry is None or entry[0] < digits:
        return None
    return entry[1]


def pi(*, context: PrecisionContext | None = None) -> Decimal:
    """Pi rounded to the context's working digits."""
    context = context or get_context()
    needed = context.digits + CONSTANT_GUARD_DIGITS
    value = _cached("pi", needed)
    if value is None:
        logger.debug("computing pi to %d digits", needed)
        with context.working(needed):
            value = _borwein_pi(context)
        _CACHE["pi"] = (needed, value)
    return context.round(value)


def ln2(*, context: PrecisionContext | None = None) -> Decimal:
    """Natural logarithm of 2 rounded to the context's working digits."""
    context = context or get_context()
    needed = context.digits + CONSTANT_GUARD_DIGITS
    if needed <= _LN2_LITERAL_DIGITS:
        return context.round(_LN2_LITERAL)
    value = _cached("ln2", needed)
    if value is None:
        logger.debug("extending ln2 to %d digits", needed)
        with context.working(needed):
            value = TWO.ln()
        _CACHE["ln2"] = (needed, value)
    return context.round(value)


def clear_cache() -> None:
    """Forget cached constants (next request recomputes)."""
    _CACHE.clear()
