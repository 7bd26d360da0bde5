"""Deduction engine, puzzle model, and helpers for the 6x6 two-symbol grid puzzle."""

from .model import (
    BOARD_SIZE,
    Cell,
    ContradictionError,
    MalformedPuzzleError,
    PuzzleState,
    Relation,
    RelationKind,
)
from .engine import DeductionEngine, Deduction, SolveResult, SolveStatus
from .parser import parse_puzzle, puzzle_to_dict
from .validation import find_violations, is_valid

__all__ = [
    "BOARD_SIZE",
    "Cell",
    "ContradictionError",
    "MalformedPuzzleError",
    "PuzzleState",
    "Relation",
    "RelationKind",
    "DeductionEngine",
    "Deduction",
    "SolveResult",
    "SolveStatus",
    "parse_puzzle",
    "puzzle_to_dict",
    "find_violations",
    "is_valid",
]
