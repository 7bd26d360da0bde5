"""Whole-grid validity checks (relations, balance, no three in a row)."""

from dataclasses import dataclass
from typing import List

from .lines import Line, lines
from .model import BOARD_SIZE, LINE_QUOTA, SYMBOLS, Cell, Position, PuzzleState


@dataclass
class Violation:
    """A broken puzzle rule and the cells involved."""

    type: str  # 'relation', 'balance', 'adjacency'
    cells: List[Position]
    detail: str

    def __str__(self) -> str:
        return f"{self.type}: {self.detail}"


def _balance_violations(line: Line) -> List[Violation]:
    found = []
    for symbol in SYMBOLS:
        count = line.count(symbol)
        if count > LINE_QUOTA:
            cells = [line.position(k) for k in range(BOARD_SIZE) if line[k] == symbol]
            found.append(Violation(
                type="balance",
                cells=cells,
                detail=f"{line} holds {count} {symbol.char}",
            ))
    return found


def _adjacency_violations(line: Line) -> List[Violation]:
    found = []
    for k in range(BOARD_SIZE - 2):
        value = line[k]
        if value is not Cell.EMPTY and line[k + 1] == value and line[k + 2] == value:
            found.append(Violation(
                type="adjacency",
                cells=[line.position(k + i) for i in range(3)],
                detail=f"three {value.char} in a row in {line} at {k}",
            ))
    return found


def find_runs(state: PuzzleState) -> List[Violation]:
    """Runs of three equal symbols in any row or column."""
    runs: List[Violation] = []
    for line in lines(state):
        runs.extend(_adjacency_violations(line))
    return runs


def find_violations(state: PuzzleState) -> List[Violation]:
    """Every rule the (possibly partial) grid currently breaks. Empty cells never violate."""
    violations: List[Violation] = []

    for line in lines(state):
        violations.extend(_balance_violations(line))
        violations.extend(_adjacency_violations(line))

    for relation in state.relations:
        a, b = (state.cell(pos) for pos in relation.cells)
        if not relation.holds(a, b):
            violations.append(Violation(
                type="relation",
                cells=list(relation.cells),
                detail=f"{relation.kind.value} relation {relation} broken",
            ))

    return violations


def is_valid(state: PuzzleState) -> bool:
    return not find_violations(state)


def is_solution(state: PuzzleState) -> bool:
    """A complete grid that breaks no rule."""
    return state.is_complete() and is_valid(state)
