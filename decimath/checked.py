"""Explicit error values for callers that prefer Result over NaN/Infinity.

    checked(sqrt, Decimal(-1))   -> Err(DomainError(...))
    checked(atanh, Decimal(1))   -> Err(PoleError(...))
    checked(exp, Decimal(1))     -> Ok(Decimal('2.718...'))

The math functions themselves never raise for numeric conditions; this
adaptor only classifies the value they return. An infinite result that
comes with the overflow flag is a legitimate (saturated) value, not a pole.
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal

from decimath.core.context import PrecisionContext, Status, get_context
from decimath.core.errors import DomainError, MathError, PoleError
from decimath.core.result import Err, Ok


def checked(
    fn: Callable[..., Decimal],
    *args: Decimal,
    context: PrecisionContext | None = None,
) -> Ok[Decimal] | Err[MathError]:
    """Call fn(*args, context=context) and classify the result.

    The context's sticky flags are preserved: flags raised by the call are
    added to those already set.
    """
    context = context or get_context()
    saved = context.status()
    context.clear_status()
    try:
        value = fn(*args, context=context)
    finally:
        raised = context.status()
        context.set_status(saved | raised)

    source = f"{fn.__module__}.{fn.__qualname__}"
    argument = ", ".join(str(a) for a in args)
    if value.is_nan() and not any(a.is_nan() for a in args):
        return Err(DomainError(
            message=f"{fn.__name__}({argument}) is undefined",
            code="DOMAIN", source=source, argument=argument,
        ))
    if value.is_infinite() and all(a.is_finite() for a in args) and Status.OVERFLOW not in raised:
        return Err(PoleError(
            message=f"{fn.__name__}({argument}) is a pole",
            code="POLE", source=source, argument=argument,
            sign=-1 if value.is_signed() else 1,
        ))
    return Ok(value)
