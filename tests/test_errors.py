"""Tests for boardcore.errors - the exception hierarchy."""

import pytest

from boardcore.errors import (
    BoardCoreError,
    FailsafeError,
    GameOverError,
    InvariantViolation,
    NotFoundError,
    StateError,
    StructuralError,
    ValidationFailure,
)


class TestErrorHierarchy:
    """Test inheritance and error codes."""

    @pytest.mark.parametrize(
        "cls,code",
        [
            (StructuralError, "STRUCTURAL_ERROR"),
            (NotFoundError, "NOT_FOUND"),
            (StateError, "INVALID_STATE"),
            (GameOverError, "MOVES_GAMEOVER"),
            (ValidationFailure, "VALIDATION_GENERAL"),
            (FailsafeError, "VALIDATION_FAILSAFE"),
            (InvariantViolation, "INVARIANT_VIOLATION"),
        ],
    )
    def test_codes(self, cls, code):
        err = cls("boom")
        assert err.code == code
        assert isinstance(err, BoardCoreError)

    def test_not_found_is_structural(self):
        assert issubclass(NotFoundError, StructuralError)

    def test_failsafe_is_both_validation_and_state(self):
        err = FailsafeError("not legal", move="a1")
        assert isinstance(err, ValidationFailure)
        assert isinstance(err, StateError)
        assert err.move == "a1"

    def test_game_over_is_state_error(self):
        assert issubclass(GameOverError, StateError)


class TestErrorFormatting:
    """Test message rendering and serialization."""

    def test_str_without_context(self):
        assert str(StateError("nope")) == "[INVALID_STATE] nope"

    def test_str_with_context(self):
        err = StructuralError("bad cell", cell="z9")
        assert str(err) == "[STRUCTURAL_ERROR] bad cell (cell=z9)"

    def test_validation_failure_fields(self):
        err = ValidationFailure("bad", move="a1=b1", completeness=-1)
        assert err.completeness == -1
        assert err.context == {"move": "a1=b1"}

    def test_to_dict(self):
        err = NotFoundError("gone", cell="b2")
        assert err.to_dict() == {
            "code": "NOT_FOUND",
            "message": "gone",
            "context": {"cell": "b2"},
        }

    def test_custom_code(self):
        assert BoardCoreError("x", code="CUSTOM").code == "CUSTOM"
