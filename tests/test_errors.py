"""Tests for decimath.core.errors -- error value hierarchy."""

from __future__ import annotations

import dataclasses
import json
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from decimath.core.errors import (
    ContextError,
    ConvergenceError,
    DomainError,
    MathError,
    PoleError,
)


def _base() -> MathError:
    return MathError(message="base error", code="E001", source="test.fn")


# ---------------------------------------------------------------------------
# MathError base
# ---------------------------------------------------------------------------


class TestMathError:
    def test_is_frozen(self) -> None:
        err = _base()
        with pytest.raises(dataclasses.FrozenInstanceError):
            err.message = "changed"  # type: ignore[misc]

    def test_to_dict_keys(self) -> None:
        assert set(_base().to_dict().keys()) == {"message", "code", "source"}

    def test_to_dict_json_serializable(self) -> None:
        json.dumps(_base().to_dict())

    def test_with_context_prepends(self) -> None:
        err = _base().with_context("gamma")
        assert err.message == "gamma: base error"
        assert err.code == "E001"

    def test_with_context_keeps_subclass(self) -> None:
        err = DomainError(message="undefined", code="DOMAIN", source="s", argument="-1")
        wrapped = err.with_context("sqrt")
        assert isinstance(wrapped, DomainError)
        assert wrapped.argument == "-1"


# ---------------------------------------------------------------------------
# Subclasses
# ---------------------------------------------------------------------------


class TestDomainError:
    def test_to_dict_has_argument(self) -> None:
        err = DomainError(message="undefined", code="DOMAIN", source="decimath.roots.sqrt", argument="-4")
        d = err.to_dict()
        assert d["argument"] == "-4"
        assert d["source"] == "decimath.roots.sqrt"

    def test_is_math_error(self) -> None:
        err = DomainError(message="m", code="DOMAIN", source="s", argument="x")
        assert isinstance(err, MathError)


class TestPoleError:
    def test_to_dict_has_sign(self) -> None:
        err = PoleError(message="pole", code="POLE", source="s", argument="1", sign=-1)
        d = err.to_dict()
        assert d["sign"] == -1
        assert d["argument"] == "1"
        json.dumps(d)


class TestConvergenceError:
    def test_estimate_serialized_as_string(self) -> None:
        err = ConvergenceError(
            message="no stable value", code="ITERATION_LIMIT", source="s",
            iterations=1000, estimate=Decimal("1.41421356"),
        )
        d = err.to_dict()
        assert d["estimate"] == "1.41421356"
        assert d["iterations"] == 1000
        json.dumps(d)


class TestContextError:
    def test_to_dict_has_requested(self) -> None:
        err = ContextError(message="range", code="DIGITS_RANGE", source="s", requested=5000)
        assert err.to_dict()["requested"] == 5000


class TestPatternMatching:
    @pytest.mark.parametrize("err, expected", [
        (DomainError(message="m", code="c", source="s", argument="a"), "domain"),
        (PoleError(message="m", code="c", source="s", argument="a", sign=1), "pole"),
        (ContextError(message="m", code="c", source="s", requested=0), "context"),
    ])
    def test_match_by_class(self, err: MathError, expected: str) -> None:
        match err:
            case DomainError():
                kind = "domain"
            case PoleError():
                kind = "pole"
            case ContextError():
                kind = "context"
            case _:
                kind = "other"
        assert kind == expected


class TestProperties:
    @given(st.text(), st.text())
    def test_with_context_never_loses_message(self, message: str, prefix: str) -> None:
        err = MathError(message=message, code="c", source="s").with_context(prefix)
        assert err.message.endswith(message)
        assert err.message.startswith(prefix)
