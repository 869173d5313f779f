"""Game logic."""

from .engine import ActionResult, GameEngine, IllegalTransitionError
from .finder import (
    LayoffTarget,
    find_all_potential_melds,
    find_all_runs,
    find_all_sets,
    find_valid_layoffs,
)
from .scoring import ScoreBreakdown
from .validator import ErrorKind, MoveValidator, ValidationResult

__all__ = [
    "ActionResult",
    "ErrorKind",
    "GameEngine",
    "IllegalTransitionError",
    "LayoffTarget",
    "MoveValidator",
    "ScoreBreakdown",
    "ValidationResult",
    "find_all_potential_melds",
    "find_all_runs",
    "find_all_sets",
    "find_valid_layoffs",
]
