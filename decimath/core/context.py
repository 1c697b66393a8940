"""Precision contexts: one shared, mutable decimal context per number family.

Every math function reads the working digit count from a PrecisionContext,
may raise it for guard digits inside `working()`/`extended()`, and always
restores it on exit. Kernel signals are never trapped: special values flow
through results, and the signals accumulate as sticky Status flags.

A context is shared mutable state. Use one context per thread, or guard a
shared one externally.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass
from decimal import (
    MAX_PREC,
    ROUND_05UP,
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
    Clamped,
    Context,
    Decimal,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
    Rounded,
    Subnormal,
    Underflow,
    getcontext,
    setcontext,
)
from enum import Enum
from typing import final

from decimath.core.errors import ContextError
from decimath.core.result import Err, Ok

logger = logging.getLogger(__name__)

MAX_DIGITS = 1000


# ---------------------------------------------------------------------------
# Families, rounding modes, status flags, angular units
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class FamilyLayout:
    """Digit count and exponent range of a decimal family."""

    default_digits: int
    max_digits: int
    emax: int
    emin: int
    adjustable: bool  # fixed-width families ignore digit requests


class DecimalFamily(Enum):
    """Decimal number families sharing the same algorithms."""

    ARBITRARY = "arbitrary"
    DECIMAL32 = "decimal32"
    DECIMAL64 = "decimal64"
    DECIMAL128 = "decimal128"

    @property
    def layout(self) -> FamilyLayout:
        return _LAYOUTS[self]


_LAYOUTS: dict[DecimalFamily, FamilyLayout] = {
    DecimalFamily.ARBITRARY: FamilyLayout(34, MAX_DIGITS, 999999999, -999999999, True),
    DecimalFamily.DECIMAL32: FamilyLayout(7, 7, 96, -95, False),
    DecimalFamily.DECIMAL64: FamilyLayout(16, 16, 384, -383, False),
    DecimalFamily.DECIMAL128: FamilyLayout(34, 34, 6144, -6143, False),
}


class RoundingMode(Enum):
    """Rounding modes, valued by their decimal-module names."""

    CEILING = ROUND_CEILING        # towards +infinity
    UP = ROUND_UP                  # away from zero
    HALF_UP = ROUND_HALF_UP
    HALF_EVEN = ROUND_HALF_EVEN
    HALF_DOWN = ROUND_HALF_DOWN
    DOWN = ROUND_DOWN              # towards zero (truncate)
    FLOOR = ROUND_FLOOR            # towards -infinity
    ROUND_05UP = ROUND_05UP        # for re-rounding


class Status(Enum):
    """Sticky status flags raised by the kernel."""

    INEXACT = "inexact"
    ROUNDED = "rounded"
    SUBNORMAL = "subnormal"
    UNDERFLOW = "underflow"
    OVERFLOW = "overflow"
    CLAMPED = "clamped"
    DIVISION_BY_ZERO = "division_by_zero"
    INVALID_OPERATION = "invalid_operation"


_SIGNALS = {
    Status.INEXACT: Inexact,
    Status.ROUNDED: Rounded,
    Status.SUBNORMAL: Subnormal,
    Status.UNDERFLOW: Underflow,
    Status.OVERFLOW: Overflow,
    Status.CLAMPED: Clamped,
    Status.DIVISION_BY_ZERO: DivisionByZero,
    Status.INVALID_OPERATION: InvalidOperation,
}


class AngularUnit(Enum):
    """Unit in which trigonometric arguments and results are expressed."""

    RADIANS = "radians"
    DEGREES = "degrees"
    GRADIANS = "gradians"

    @property
    def circle(self) -> Decimal | None:
        """Full circle in this unit; None for radians (2*pi is not exact)."""
        return _CIRCLES[self]

    @property
    def right_angle(self) -> Decimal | None:
        circle = _CIRCLES[self]
        return None if circle is None else circle / 4


_CIRCLES: dict[AngularUnit, Decimal | None] = {
    AngularUnit.RADIANS: None,
    AngularUnit.DEGREES: Decimal(360),
    AngularUnit.GRADIANS: Decimal(400),
}


def validate_digits(family: DecimalFamily, digits: int) -> Ok[int] | Err[ContextError]:
    """Check a digits request against the family's supported range."""
    layout = family.layout
    source = "decimath.core.context.validate_digits"
    if not layout.adjustable:
        return Err(ContextError(
            message=f"{family.value} has a fixed width of {layout.default_digits} digits",
            code="FIXED_WIDTH", source=source, requested=digits,
        ))
    if not 0 < digits <= layout.max_digits:
        return Err(ContextError(
            message=f"digits must be in 1..{layout.max_digits}, got {digits}",
            code="DIGITS_RANGE", source=source, requested=digits,
        ))
    return Ok(digits)


# ---------------------------------------------------------------------------
# PrecisionContext
# ---------------------------------------------------------------------------


class PrecisionContext:
    """Working precision, rounding mode, angular unit and status of one family."""

    __slots__ = ("_angular_unit", "_ctx", "_family")

    def __init__(
        self,
        family: DecimalFamily = DecimalFamily.ARBITRARY,
        angular_unit: AngularUnit = AngularUnit.RADIANS,
    ) -> None:
        layout = family.layout
        self._family = family
        self._angular_unit = angular_unit
        self._ctx = Context(
            prec=layout.default_digits,
            rounding=ROUND_HALF_EVEN,
            Emin=layout.emin,
            Emax=layout.emax,
            capitals=1,
            clamp=0 if layout.adjustable else 1,
            flags=[],
            traps=[],
        )

    def __repr__(self) -> str:
        return (
            f"PrecisionContext(family={self._family.value}, digits={self.digits}, "
            f"rounding={self.rounding.name}, angular_unit={self._angular_unit.value})"
        )

    @property
    def family(self) -> DecimalFamily:
        return self._family

    @property
    def digits(self) -> int:
        return self._ctx.prec

    @digits.setter
    def digits(self, value: int) -> None:
        # Requests outside the family's range are ignored, never raised.
        match validate_digits(self._family, value):
            case Ok(value=checked):
                self._ctx.prec = checked
            case Err(error=error):
                logger.debug("ignoring digits request: %s", error.message)

    @property
    def rounding(self) -> RoundingMode:
        return RoundingMode(self._ctx.rounding)

    @rounding.setter
    def rounding(self, mode: RoundingMode) -> None:
        self._ctx.rounding = mode.value

    @property
    def angular_unit(self) -> AngularUnit:
        return self._angular_unit

    @angular_unit.setter
    def angular_unit(self, unit: AngularUnit) -> None:
        self._angular_unit = unit

    @property
    def emax(self) -> int:
        return self._ctx.Emax

    @property
    def emin(self) -> int:
        return self._ctx.Emin

    # --- status flags ---

    def status(self) -> frozenset[Status]:
        """Sticky flags raised since the last clear."""
        return frozenset(s for s, signal in _SIGNALS.items() if self._ctx.flags[signal])

    def clear_status(self) -> None:
        self._ctx.clear_flags()

    def set_status(self, flags: Iterable[Status]) -> None:
        """Replace the sticky flags with exactly `flags`."""
        self._ctx.clear_flags()
        for flag in flags:
            self._ctx.flags[_SIGNALS[flag]] = True

    def raise_flag(self, flag: Status) -> None:
        """Record a signal for a result produced without a kernel operation."""
        self._ctx.flags[_SIGNALS[flag]] = True

    # --- scoped precision ---

    @contextmanager
    def activate(self) -> Iterator[Context]:
        """Make this family's context the thread's active decimal context."""
        previous = getcontext()
        setcontext(self._ctx)
        try:
            yield self._ctx
        finally:
            setcontext(previous)

    @contextmanager
    def working(self, digits: int) -> Iterator[Context]:
        """Run a block at `digits` working digits, restoring the setting on exit.

        Internal guard digits may exceed the family's public maximum.
        """
        saved = self._ctx.prec
        self._ctx.prec = max(1, min(digits, MAX_PREC))
        try:
            with self.activate() as ctx:
                yield ctx
        finally:
            self._ctx.prec = saved

    def extended(self, extra: int) -> AbstractContextManager[Context]:
        """Run a block with `extra` guard digits above the current setting."""
        return self.working(self._ctx.prec + extra)

    def round(self, value: Decimal) -> Decimal:
        """Round `value` to the current digits and exponent range.

        Sign of zero is preserved; flags raised by the rounding are recorded.
        """
        return self._ctx.create_decimal(value)


# ---------------------------------------------------------------------------
# Process-wide contexts, one per family
# ---------------------------------------------------------------------------

_CONTEXTS: dict[DecimalFamily, PrecisionContext] = {}


def get_context(family: DecimalFamily = DecimalFamily.ARBITRARY) -> PrecisionContext:
    """Return the shared context for `family`, creating it with defaults."""
    context = _CONTEXTS.get(family)
    if context is None:
        context = PrecisionContext(family)
        _CONTEXTS[family] = context
    return context


def reset_contexts() -> None:
    """Discard all shared contexts; the next get_context() starts from defaults."""
    _CONTEXTS.clear()
