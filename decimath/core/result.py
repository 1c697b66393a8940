"""Result[T, E] -- explicit error values for decimath.

Numeric conditions never raise: they come back as NaN or Infinity. The
`checked` adaptor, the iteration helpers and the context validators use
Ok/Err to hand an explicit error value to callers that prefer one, and
unpack them with structural pattern matching.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import final


@final
@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Success variant of Result."""

    value: T


@final
@dataclass(frozen=True, slots=True)
class Err[E]:
    """Error variant of Result."""

    error: E


type Result[T, E] = Ok[T] | Err[E]
