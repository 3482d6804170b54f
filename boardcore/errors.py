"""
boardcore Error Hierarchy

Unified exception hierarchy for the topology engine, the serialization layer
and the game-state pipeline. All custom exceptions inherit from
BoardCoreError for easy catching and filtering.

Usage:
    from boardcore.errors import ValidationFailure, StructuralError

    try:
        game.move("a1=b1+a2")
    except ValidationFailure as e:
        logger.info(f"Rejected move: {e.message}")
"""

from typing import Any

__all__ = [
    # Base error
    "BoardCoreError",
    # Topology errors
    "StructuralError",
    "NotFoundError",
    # State machine errors
    "StateError",
    "GameOverError",
    # Move validation errors
    "ValidationFailure",
    "FailsafeError",
    # Internal consistency
    "InvariantViolation",
]


class BoardCoreError(Exception):
    """Base exception for all boardcore errors.

    Attributes:
        code: Machine-readable error code for categorization
        message: Human-readable error description
        context: Additional context for debugging
    """
    code: str = "BOARDCORE_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"[{self.code}] {self.message} ({ctx})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


# =============================================================================
# Topology Errors
# =============================================================================


class StructuralError(BoardCoreError):
    """Malformed or out-of-domain input to the topology engine.

    Raised for unparsable labels, out-of-bounds coordinates, directions a
    topology does not support, and impossible board dimensions.
    """
    code: str = "STRUCTURAL_ERROR"

    def __init__(
        self,
        message: str,
        cell: str | None = None,
        coords: tuple[int, int] | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        if cell is not None:
            self.context["cell"] = cell
        if coords is not None:
            self.context["coords"] = coords


class NotFoundError(StructuralError):
    """Query against a vertex that is not (or no longer) in the graph."""
    code: str = "NOT_FOUND"


# =============================================================================
# State Machine Errors
# =============================================================================


class StateError(BoardCoreError):
    """Operation attempted in an invalid machine state.

    Raised when loading a stack index that does not exist, when a serialized
    record belongs to a different game, or when moving from a historical view.
    """
    code: str = "INVALID_STATE"


class GameOverError(StateError):
    """Move or resignation attempted after the game has ended."""
    code: str = "MOVES_GAMEOVER"


# =============================================================================
# Move Validation Errors
# =============================================================================


class ValidationFailure(BoardCoreError):
    """Expected, user-facing rejection of move input.

    ``validate_move`` never raises this; it returns a verdict instead. Only
    ``move`` raises it, when untrusted input fails validation.

    Attributes:
        move: The normalised move string that was rejected
        completeness: The completeness indicator of the failing verdict
    """
    code: str = "VALIDATION_GENERAL"

    def __init__(
        self,
        message: str,
        move: str | None = None,
        completeness: int | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        self.move = move
        self.completeness = completeness
        if move is not None:
            self.context["move"] = move


class FailsafeError(ValidationFailure, StateError):
    """Input passed validation but is absent from the legal-move list.

    This is a failsafe against validators that are more permissive than the
    move generator, so it is both a ValidationFailure and a StateError.
    """
    code: str = "VALIDATION_FAILSAFE"


# =============================================================================
# Internal Consistency
# =============================================================================


class InvariantViolation(BoardCoreError):
    """Internal consistency failure that correct game logic cannot reach.

    Fatal and not user-facing, e.g. a tie arising in a game defined as
    draw-free.
    """
    code: str = "INVARIANT_VIOLATION"
