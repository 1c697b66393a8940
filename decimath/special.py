"""Special functions: factorial, gamma, log-gamma, comb/perm, erf.

gamma
-----
Spouge's approximation with a = ceil(1.25 n / log10(2 pi)) terms for n
requested digits:

    Gamma(z + 1) = (z + a)^(z + 1/2) e^-(z + a) [c0 + sum_{k=1}^{a-1} c_k / (z + k)]
    c0  = sqrt(2 pi)
    c_k = (-1)^(k-1) (a - k)^(k - 1/2) e^(a - k) / (k - 1)!

The c_k alternate in sign and grow to about e^a, so the sum runs with
roughly 0.56 a extra digits. Arguments below 1/2 use the reflection
Gamma(x) Gamma(1 - x) = pi / sin(pi x). Positive integers up to
FACTORIAL_LOOP_LIMIT go straight to the factorial product.

erf
---
    erf(x) = 2/sqrt(pi) * sum_k (-1)^k x^(2k+1) / (k! (2k+1))

summed at n + log2(x^2) + 8 + ceil(log2 n) + x^2/ln(10) digits (the
alternating terms peak near e^(x^2)). Tiny x is answered from the bounds
2x/sqrt(pi) (1 - x^2/3) <= erf(x) <= 2x/sqrt(pi), and erf saturates to +-1
once x^2 / ln 2 exceeds the binary precision of n digits.
"""

from __future__ import annotations

import logging
import math
from decimal import ROUND_CEILING, Decimal

from decimath.constants import ln2, pi
from decimath.core.context import AngularUnit, PrecisionContext, Status, get_context
from decimath.core.numeric import (
    HALF,
    INF,
    MAX_ITERATIONS,
    NAN,
    ONE,
    TWO,
    ZERO,
    decimal_to_double,
    is_integral,
    is_odd_integer,
    settle,
)
from decimath.powers import exp, pow
from decimath.roots import sqrt
from decimath.series import sum_series
from decimath.trig import sin

logger = logging.getLogger(__name__)

FACTORIAL_LOOP_LIMIT = 5000
ERF_BOUND_GUARD_DIGITS = 17

_LOG10_TWO_PI = math.log10(2 * math.pi)
_LOG2_TEN = math.log2(10)


# ---------------------------------------------------------------------------
# factorial, comb, perm
# ---------------------------------------------------------------------------


def _factorial_overflows(n: int, context: PrecisionContext) -> bool:
    """Stirling check: log10(n!) beyond the context's largest exponent."""
    return math.lgamma(n + 1) / math.log(10) > context.emax + 1


def factorial(x: Decimal, *, context: PrecisionContext | None = None) -> Decimal:
    """x! for a non-negative integer x.

    Negative and non-integral arguments are outside the domain (NaN). A
    result too large for the context's exponent range is +Infinity with
    the overflow flag raised.
    """
    context = context or get_context()
    if x.is_nan() or (x.is_signed() and not x.is_zero()):
        return NAN
    if x.is_infinite():
        return INF
    if not is_integral(x):
        return NAN
    if x.adjusted() > 18:
        context.raise_flag(Status.OVERFLOW)
        return INF
    n = int(x)
    if n < 2:
        return ONE
    if _factorial_overflows(n, context):
        context.raise_flag(Status.OVERFLOW)
        return INF
    if n > FACTORIAL_LOOP_LIMIT:
        with context.extended(len(str(n)) + 5):
            result = exp(log_gamma(Decimal(n + 1), context=context), context=context)
        return context.round(result)
    # Each multiplication rounds once: guard digits cover n roundings.
    with context.extended(len(str(n)) + 5):
        result = ONE
        for k in range(2, n + 1):
            result *= k
            if result.is_infinite():
                break
    return context.round(result)


def _falling_product(x: Decimal, count: int) -> Decimal:
    """x (x - 1) ... (x - count + 1) at the active precision."""
    result = ONE
    for i in range(count):
        result *= x - i
    return result


def _check_choice(x: Decimal, y: Decimal) -> int | None:
    """y as an int when 0 <= y <= x are integers, else None."""
    if not (x.is_finite() and y.is_finite()):
        return None
    if not (is_integral(x) and is_integral(y)):
        return None
    if y.is_signed() and not y.is_zero():
        return None
    if y > x:
        return None
    return int(y)


def perm(x: Decimal, y: Decimal, *, context: PrecisionContext | None = None) -> Decimal:
    """Permutations P(x, y) = x! / (x - y)!; NaN unless 0 <= y <= x are integers."""
    context = context or get_context()
    count = _check_choice(x, y)
    if count is None:
        return NAN
    if count > FACTORIAL_LOOP_LIMIT:
        with context.extended(y.adjusted() + 6):
            result = factorial(x, context=context) / factorial(x - y, context=context)
    else:
        with context.extended(y.adjusted() + 6):
            result = _falling_product(x, count)
    return context.round(result)


def comb(x: Decimal, y: Decimal, *, context: PrecisionContext | None = None) -> Decimal:
    """Combinations C(x, y) = P(x, y) / y!."""
    context = context or get_context()
    count = _check_choice(x, y)
    if count is None:
        return NAN
    with context.extended(y.adjusted() + 6):
        # C(x, y) == C(x, x - y); the shorter product is cheaper.
        smaller = min(y, x - y)
        result = perm(x, smaller, context=context) / factorial(smaller, context=context)
    return context.round(result)


# ---------------------------------------------------------------------------
# gamma, log_gamma
# ---------------------------------------------------------------------------


def _spouge_terms(digits: int) -> int:
    return math.ceil(1.25 * digits / _LOG10_TWO_PI)


def _spouge_digits(digits: int, terms: int, x: Decimal) -> int:
    """Working digits: the coefficient cancellation plus the size of ln Gamma."""
    cancellation = digits + math.ceil(0.56 * terms) + 10
    return max(math.ceil(1.5 * digits), cancellation) + max(0, x.adjusted() + 1)


def _spouge_log(arg: Decimal, terms: int, context: PrecisionContext) -> Decimal:
    """ln Gamma(arg) for arg >= 1/2 at the active working digits."""
    z = arg - ONE
    e_inv = exp(ONE.copy_negate(), context=context)
    running_exp = exp(Decimal(terms), context=context)  # e^(a - k) after k divisions
    running_factorial = ONE  # (k - 1)!
    total = sqrt(TWO * pi(context=context), context=context)
    for k in range(1, terms):
        if k > 1:
            running_factorial *= k - 1
        running_exp *= e_inv
        coefficient = running_exp * pow(Decimal(terms - k), k - HALF, context=context) / running_factorial
        term = coefficient / (z + k)
        total = total + term if k % 2 == 1 else total - term
    shifted = z + terms
    return (z + HALF) * shifted.ln() - shifted + total.ln()


def _sin_pi(x: Decimal, context: PrecisionContext) -> Decimal:
    return sin(pi(context=context) * x, context=context, unit=AngularUnit.RADIANS)


def _log10_gamma(v: float) -> float:
    """log10 Gamma(v) for v >= 1 as a double, +inf past the double range."""
    if v > 1e300:
        return math.inf
    return math.lgamma(v) / math.log(10)


def _gamma_beyond_range(x: Decimal, context: PrecisionContext) -> Decimal | None:
    """+Infinity or a signed zero when Gamma(x) certainly leaves the exponent range."""
    if x >= ONE:
        if _log10_gamma(float(x)) > context.emax + 1:
            context.raise_flag(Status.OVERFLOW)
            return INF
        return None
    if not x.is_signed():
        return None
    # |Gamma(x)| = pi / (|sin(pi x)| Gamma(1 - x)) and |sin(pi x)| >= 2 * 10^exponent.
    largest = math.log10(math.pi / 2) - _log10_gamma(1.0 + float(x.copy_negate())) - x.as_tuple().exponent
    if largest >= context.emin - context.digits:
        return None
    context.raise_flag(Status.UNDERFLOW)
    # Gamma(x) has the sign (-1)^ceil(-x) between the poles.
    if is_odd_integer(x.copy_negate().to_integral_value(rounding=ROUND_CEILING)):
        return ZERO.copy_negate()
    return ZERO


def gamma(x: Decimal, *, context: PrecisionContext | None = None) -> Decimal:
    """Gamma function.

    NaN at zero and the negative integers, +Infinity at the poles
    sin(pi x) == 0 detected at working precision. Results past the
    exponent range are +Infinity (overflow) or a signed zero (underflow).
    """
    context = context or get_context()
    if x.is_nan():
        return NAN
    if x.is_infinite():
        return NAN if x.is_signed() else INF
    if is_integral(x) and (x.is_zero() or x.is_signed()):
        return NAN
    saturated = _gamma_beyond_range(x, context)
    if saturated is not None:
        logger.debug("gamma(%s): result beyond the exponent range", x)
        return saturated
    if is_integral(x) and x <= FACTORIAL_LOOP_LIMIT:
        with context.activate():
            previous = x - ONE
        return factorial(previous, context=context)

    terms = _spouge_terms(context.digits)
    with context.working(_spouge_digits(context.digits, terms, x)):
        if x < HALF:
            s = _sin_pi(x, context)
            if s.is_zero():
                return INF
            # Reflection in log space: Gamma(1 - x) may overflow while Gamma(x) underflows.
            p = pi(context=context)
            magnitude = p.ln() - s.copy_abs().ln() - _spouge_log(ONE - x, terms, context)
            result = exp(magnitude, context=context).copy_sign(s)
        else:
            result = exp(_spouge_log(x, terms, context), context=context)
    return context.round(result)


def log_gamma(x: Decimal, *, context: PrecisionContext | None = None) -> Decimal:
    """ln Gamma(x) for x > 0, without forming Gamma(x) itself."""
    context = context or get_context()
    if x.is_nan() or x.is_signed() or x.is_zero():
        return NAN
    if x.is_infinite():
        return INF
    if x == ONE or x == TWO:
        return ZERO
    terms = _spouge_terms(context.digits)
    with context.working(_spouge_digits(context.digits, terms, x)):
        if x < HALF:
            # ln Gamma(x) = ln pi - ln sin(pi x) - ln Gamma(1 - x)
            p = pi(context=context)
            result = p.ln() - _sin_pi(x, context).ln() - _spouge_log(ONE - x, terms, context)
        else:
            result = _spouge_log(x, terms, context)
    return context.round(result)


# ---------------------------------------------------------------------------
# erf
# ---------------------------------------------------------------------------


def _erf_tiny(x: Decimal, context: PrecisionContext) -> Decimal | None:
    """erf(x) when both bounds round to the same value, else None."""
    with context.extended(ERF_BOUND_GUARD_DIGITS):
        root_pi = sqrt(pi(context=context), context=context)
        high = TWO * x / root_pi
        low = high * (ONE - x * x / 3)
    low = context.round(low)
    high = context.round(high)
    return high if low == high else None


def _erf_saturates(x: Decimal, context: PrecisionContext) -> bool:
    bits = math.ceil(context.digits * _LOG2_TEN)
    with context.extended(ERF_BOUND_GUARD_DIGITS):
        return x * x / ln2(context=context) > bits + 1


def _erf_series(x: Decimal, context: PrecisionContext) -> Decimal:
    n = context.digits
    x2 = decimal_to_double(x) ** 2
    digits = (
        n + (math.ceil(math.log2(x2)) if x2 > 1 else 0) + 8 + math.ceil(math.log2(n))
        + math.ceil(x2 / math.log(10))
    )
    with context.working(digits):
        square = x * x
        minus_square = square.copy_negate()
        # u_k = (-x^2)^k / (k! (2k+1)), u_k / u_(k-1) = -x^2 (2k-1) / (k (2k+1))
        total = settle(sum_series(
            ONE,
            lambda term, k: term * minus_square * (2 * k - 1) / (k * (2 * k + 1)),
            source="decimath.special.erf",
            min_terms=math.ceil(x2),
            limit=MAX_ITERATIONS + 6 * math.ceil(x2),
        ))
        result = TWO * x * total / sqrt(pi(context=context), context=context)
    return context.round(result)


def erf(x: Decimal, *, context: PrecisionContext | None = None) -> Decimal:
    """Error function; odd, with erf(+-Inf) = +-1."""
    context = context or get_context()
    if x.is_nan():
        return NAN
    if x.is_zero():
        return x
    if x.is_infinite():
        return ONE.copy_sign(x)
    if x.adjusted() < -(context.digits // 2):
        tiny = _erf_tiny(x, context)
        if tiny is not None:
            return tiny
    if _erf_saturates(x, context):
        return ONE.copy_sign(x)
    return _erf_series(x, context)
