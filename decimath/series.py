"""Power-series evaluation with precision-adaptive termination.

Functions
---------
sum_series    : accumulate term[k+1] = next_term(term[k], k) until a term no
                longer changes the running sum at the active precision
sincos_taylor : sin and/or cos of a range-reduced argument from one shared
                Taylor recurrence

Termination compares the partial sums by value, not against a tolerance, so
raising the working digits automatically tightens convergence.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal
from typing import final

from decimath.core.context import PrecisionContext
from decimath.core.errors import ConvergenceError
from decimath.core.numeric import MAX_ITERATIONS, ONE
from decimath.core.result import Err, Ok

logger = logging.getLogger(__name__)

SERIES_GUARD_DIGITS = 10


def sum_series(
    first: Decimal,
    next_term: Callable[[Decimal, int], Decimal],
    *,
    source: str,
    min_terms: int = 0,
    limit: int = MAX_ITERATIONS,
) -> Ok[Decimal] | Err[ConvergenceError]:
    """Sum first + term[1] + term[2] + ... at the active decimal precision.

    `next_term(term, k)` returns term k from term k-1. The sum is complete
    when adding a term leaves it unchanged, but never before `min_terms`
    terms (alternating series whose terms grow before they shrink).
    """
    total = first
    term = first
    for k in range(1, limit):
        term = next_term(term, k)
        updated = total + term
        if updated == total and k >= min_terms:
            return Ok(updated)
        total = updated
    return Err(ConvergenceError(
        message=f"series still changing after {limit} terms",
        code="ITERATION_LIMIT", source=source, iterations=limit, estimate=total,
    ))


@final
@dataclass(frozen=True, slots=True)
class SinCos:
    """Outputs of one shared Taylor pass; a field is None when not requested."""

    sin: Decimal | None
    cos: Decimal | None


def sincos_taylor(
    a: Decimal,
    context: PrecisionContext,
    *,
    want_sin: bool = True,
    want_cos: bool = True,
) -> SinCos:
    """sin(a) and/or cos(a) for a reduced argument a in radians.

    Both series share the recurrence t <- t * a^2 / (j (j + 1)); each output
    stops independently when its partial sum stops changing. The sums run
    with guard digits, then the results are rounded to the caller's digits.
    a must be finite.
    """
    sin_done = not want_sin
    cos_done = not want_cos
    with context.extended(SERIES_GUARD_DIGITS):
        a2 = a * a
        j = ONE
        t = ONE
        s = ONE
        c = ONE
        i = 1
        while not (sin_done and cos_done) and i < MAX_ITERATIONS:
            odd = i & 1
            j += ONE
            t *= a2 / j
            if not cos_done:
                previous = c
                c = c - t if odd else c + t
                cos_done = c == previous
            j += ONE
            t /= j
            if not sin_done:
                previous = s
                s = s - t if odd else s + t
                sin_done = s == previous
            i += 1
        if not (sin_done and cos_done):
            logger.warning("sincos_taylor(%s): series still changing after %d terms", a, i)

    # Back at the caller's digits: one rounding per output.
    with context.activate():
        return SinCos(
            sin=s * a if want_sin else None,
            cos=+c if want_cos else None,
        )
