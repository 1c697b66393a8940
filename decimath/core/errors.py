"""Error value hierarchy -- no math function raises for numeric conditions.

Every error is a frozen dataclass value that can be pattern-matched and
serialized. Base class MathError, four @final subclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import final


@dataclass(frozen=True, slots=True)
class MathError:
    """Base error value. NOT @final -- has subclasses."""

    message: str
    code: str
    source: str  # "module.function" that produced this error

    def with_context(self, context: str) -> MathError:
        """Return a copy with context prepended to message."""
        return replace(self, message=f"{context}: {self.message}")

    def to_dict(self) -> dict[str, object]:
        return {
            "message": self.message,
            "code": self.code,
            "source": self.source,
        }


@final
@dataclass(frozen=True, slots=True)
class DomainError(MathError):
    """Argument outside the function's domain; the value result is NaN."""

    argument: str

    def to_dict(self) -> dict[str, object]:
        return {**MathError.to_dict(self), "argument": self.argument}


@final
@dataclass(frozen=True, slots=True)
class PoleError(MathError):
    """Finite argument at a singularity; the value result is signed Infinity."""

    argument: str
    sign: int  # +1 or -1

    def to_dict(self) -> dict[str, object]:
        return {**MathError.to_dict(self), "argument": self.argument, "sign": self.sign}


@final
@dataclass(frozen=True, slots=True)
class ConvergenceError(MathError):
    """An iteration hit its cap before two successive estimates agreed."""

    iterations: int
    estimate: Decimal  # last computed iterate, returned to the caller

    def to_dict(self) -> dict[str, object]:
        return {
            **MathError.to_dict(self),
            "iterations": self.iterations,
            "estimate": str(self.estimate),
        }


@final
@dataclass(frozen=True, slots=True)
class ContextError(MathError):
    """A precision context request was rejected."""

    requested: int

    def to_dict(self) -> dict[str, object]:
        return {**MathError.to_dict(self), "requested": self.requested}
