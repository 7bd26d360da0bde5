"""Top-level solve interface.

Expose `solve_puzzle(puzzle)` that accepts either a PuzzleState or a raw
puzzle dictionary compatible with `src.tango.parser.parse_puzzle`.
"""

from typing import Any

from src.tango.engine import DeductionEngine, SolveResult
from src.tango.model import PuzzleState
from src.tango.parser import parse_puzzle


def solve_puzzle(puzzle: Any) -> SolveResult:
    """
    Run the deduction engine to a fixpoint and return its SolveResult.
    Accepts:
      - PuzzleState instances (copied by the engine, never mutated)
      - Raw puzzle dictionaries (parsed via `parse_puzzle`)
    """
    if isinstance(puzzle, PuzzleState):
        state = puzzle
    elif isinstance(puzzle, dict):
        state = parse_puzzle(puzzle)
    else:
        raise TypeError("solve_puzzle expects a PuzzleState or puzzle dictionary")

    return DeductionEngine(state).solve()


__all__ = ["solve_puzzle"]
