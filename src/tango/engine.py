"""Propagation driver and solve loop for the deduction engine.

The driver (`make_deduction`) tries the rules in `rules.RULES` order and stops
at the first one that changes the grid. `solve` repeats it until the grid is
complete, a contradiction shows up, or no rule makes progress. A step that
leaves three equal symbols in a row is a contradiction like any other.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from .lines import lines
from .model import (
    BOARD_SIZE,
    Cell,
    ContradictionError,
    Grid,
    Position,
    PuzzleState,
)
from .rules import RULES, Rule, Scope
from .validation import find_runs, find_violations
from src.utils.trace import Tracer, get_tracer

MAX_STEPS = BOARD_SIZE * BOARD_SIZE

Assignment = Tuple[Position, Cell]


class SolveStatus(str, Enum):
    SOLVED = "solved"
    STUCK = "stuck"
    CONTRADICTION = "contradiction"


@dataclass
class Deduction:
    rule: str
    cells: List[Assignment]

    def describe(self) -> str:
        return " ".join(f"{pos}={value.char}" for pos, value in self.cells)


@dataclass
class SolveResult:
    status: SolveStatus
    grid: Optional[Grid]
    steps: int
    message: str = ""
    history: List[Deduction] = field(default_factory=list)

    @property
    def solved(self) -> bool:
        return self.status is SolveStatus.SOLVED


class DeductionEngine:
    """
    Owns a private copy of a puzzle and fills it by pure deduction.
    No guessing: a puzzle that needs search ends up STUCK.
    """

    def __init__(self, puzzle: PuzzleState, tracer: Optional[Tracer] = None) -> None:
        if not isinstance(puzzle, PuzzleState):
            raise TypeError("DeductionEngine expects a PuzzleState")
        self._state = puzzle.copy()
        self.tracer = tracer or get_tracer()
        self.history: List[Deduction] = []
        self.contradiction: Optional[str] = None

        violations = find_violations(self._state)
        if violations:
            self._fail("; ".join(str(v) for v in violations))

    @property
    def grid(self) -> Tuple[Tuple[Cell, ...], ...]:
        """Current grid. A step that ends in a contradiction leaves no writes behind."""
        return tuple(tuple(row) for row in self._state.grid)

    @property
    def state(self) -> PuzzleState:
        return self._state.copy()

    def make_deduction(self) -> bool:
        """Apply at most one rule. Returns True if the grid changed."""
        if self.contradiction is not None:
            return False

        before = [list(row) for row in self._state.grid]
        try:
            rule = self._apply_first_rule()
        except ContradictionError as exc:
            self._restore(before)
            self._fail(str(exc), rule=exc.rule)
            return False
        if rule is None:
            return False

        runs = find_runs(self._state)
        if runs:
            self._restore(before)
            self._fail("; ".join(str(v) for v in runs), rule=rule.name)
            return False

        deduction = Deduction(rule=rule.name, cells=self._changes_since(before))
        self.history.append(deduction)
        self.tracer.log_deduction(
            rule=rule.name,
            cells=deduction.describe(),
            filled_cells=self._state.filled_count(),
        )
        return True

    def solve(self) -> SolveResult:
        for _ in range(MAX_STEPS + 1):
            if self.contradiction is not None or self._state.is_complete():
                break
            if not self.make_deduction():
                break

        if self.contradiction is None and self._state.is_complete():
            # Every step was checked, so this only guards against bad rules.
            violations = find_violations(self._state)
            if violations:
                self._fail("; ".join(str(v) for v in violations))

        steps = len(self.history)
        if self.contradiction is not None:
            return SolveResult(
                status=SolveStatus.CONTRADICTION,
                grid=None,
                steps=steps,
                message=f"Contradiction: {self.contradiction}",
                history=list(self.history),
            )
        if self._state.is_complete():
            self.tracer.log_solved(filled_cells=self._state.filled_count())
            return SolveResult(
                status=SolveStatus.SOLVED,
                grid=[list(row) for row in self._state.grid],
                steps=steps,
                message="Solved by propagation.",
                history=list(self.history),
            )
        filled = self._state.filled_count()
        self.tracer.log_stuck(filled_cells=filled)
        return SolveResult(
            status=SolveStatus.STUCK,
            grid=None,
            steps=steps,
            message=f"No rule makes progress; {filled}/{MAX_STEPS} cells filled.",
            history=list(self.history),
        )

    def _targets(self, rule: Rule) -> Iterable:
        if rule.scope is Scope.RELATION:
            return self._state.relations
        return lines(self._state)

    def _apply_first_rule(self) -> Optional[Rule]:
        for rule in RULES:
            for target in self._targets(rule):
                try:
                    if rule.scope is Scope.RELATION:
                        changed = rule.apply(self._state, target)
                    else:
                        changed = rule.apply(target)
                except ContradictionError as exc:
                    exc.rule = rule.name
                    raise
                if changed:
                    return rule
        return None

    def _changes_since(self, before: Grid) -> List[Assignment]:
        changes = []
        for r, row in enumerate(self._state.grid):
            for c, value in enumerate(row):
                if before[r][c] != value:
                    changes.append(((r, c), value))
        return changes

    def _restore(self, before: Grid) -> None:
        for r, row in enumerate(before):
            self._state.grid[r][:] = row

    def _fail(self, reason: str, rule: Optional[str] = None) -> None:
        self.contradiction = reason
        self.tracer.log_contradiction(
            reason=reason, rule=rule, filled_cells=self._state.filled_count()
        )
