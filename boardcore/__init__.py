"""boardcore: board topologies and a game-state stack for abstract strategy games."""

__version__ = "0.1.0"

from .errors import (
    BoardCoreError,
    FailsafeError,
    GameOverError,
    InvariantViolation,
    NotFoundError,
    StateError,
    StructuralError,
    ValidationFailure,
)
from .game_base import GameBase
from .graphs import BoardType, build_graph
from .logging_config import get_logger, setup_logging

__all__ = [
    "BoardCoreError",
    "BoardType",
    "FailsafeError",
    "GameBase",
    "GameOverError",
    "InvariantViolation",
    "NotFoundError",
    "StateError",
    "StructuralError",
    "ValidationFailure",
    "__version__",
    "build_graph",
    "get_logger",
    "setup_logging",
]
