"""Grid, relation and puzzle-state data structures."""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, List, Optional, Sequence, Tuple

BOARD_SIZE = 6
LINE_QUOTA = BOARD_SIZE // 2

Position = Tuple[int, int]


class MalformedPuzzleError(ValueError):
    """Raised when a puzzle is structurally invalid (bad grid or relation)."""


class ContradictionError(Exception):
    """A forced value conflicts with the current grid or breaks a puzzle rule."""

    def __init__(self, position: Position, symbol: "Cell", reason: str) -> None:
        super().__init__(f"cannot place {symbol.char} at {position}: {reason}")
        self.position = position
        self.symbol = symbol
        self.reason = reason
        self.rule: Optional[str] = None


class Cell(IntEnum):
    EMPTY = 0
    A = 1
    B = 2

    @property
    def opposite(self) -> "Cell":
        if self is Cell.EMPTY:
            raise ValueError("EMPTY has no opposite symbol")
        return Cell.B if self is Cell.A else Cell.A

    @property
    def char(self) -> str:
        return "." if self is Cell.EMPTY else self.name


SYMBOLS: Tuple[Cell, Cell] = (Cell.A, Cell.B)

Grid = List[List[Cell]]


class RelationKind(str, Enum):
    EQUAL = "EQUAL"
    OPPOSITE = "OPPOSITE"


def _in_range(position: Position) -> bool:
    return all(0 <= coord < BOARD_SIZE for coord in position)


@dataclass(frozen=True)
class Relation:
    """
    An EQUAL/OPPOSITE constraint between two orthogonally adjacent cells.
    The order of `first` and `second` carries no meaning.
    """

    first: Position
    second: Position
    kind: RelationKind

    def __post_init__(self) -> None:
        # Accept lists (e.g. from JSON) but store hashable tuples.
        object.__setattr__(self, "first", tuple(self.first))
        object.__setattr__(self, "second", tuple(self.second))
        object.__setattr__(self, "kind", RelationKind(self.kind))

        if len(self.first) != 2 or len(self.second) != 2:
            raise MalformedPuzzleError(f"Relation positions must be (row, col) pairs: {self}")
        if not (_in_range(self.first) and _in_range(self.second)):
            raise MalformedPuzzleError(f"Relation references a cell outside the grid: {self}")
        (r1, c1), (r2, c2) = self.first, self.second
        if abs(r1 - r2) + abs(c1 - c2) != 1:
            raise MalformedPuzzleError(
                f"Relation cells must be adjacent in a shared row or column: {self}"
            )

    @property
    def cells(self) -> Tuple[Position, Position]:
        return self.first, self.second

    @property
    def is_horizontal(self) -> bool:
        return self.first[0] == self.second[0]

    @property
    def line_index(self) -> int:
        """Row index for horizontal relations, column index for vertical ones."""
        return self.first[0] if self.is_horizontal else self.first[1]

    @property
    def span(self) -> Tuple[int, int]:
        """Lower and upper index of the relation along its line."""
        axis = 1 if self.is_horizontal else 0
        a, b = self.first[axis], self.second[axis]
        return min(a, b), max(a, b)

    def other(self, position: Position) -> Position:
        if position == self.first:
            return self.second
        if position == self.second:
            return self.first
        raise ValueError(f"{position} is not part of {self}")

    def holds(self, a: Cell, b: Cell) -> bool:
        """True unless both cells are filled and disagree with the relation kind."""
        if a is Cell.EMPTY or b is Cell.EMPTY:
            return True
        if self.kind is RelationKind.EQUAL:
            return a == b
        return a != b

    def __str__(self) -> str:
        op = "=" if self.kind is RelationKind.EQUAL else "x"
        return f"{self.first}{op}{self.second}"


def _coerce_grid(rows: Sequence[Sequence[int]]) -> Grid:
    if len(rows) != BOARD_SIZE:
        raise MalformedPuzzleError(f"Grid must have {BOARD_SIZE} rows, got {len(rows)}")
    grid: Grid = []
    for r, row in enumerate(rows):
        if len(row) != BOARD_SIZE:
            raise MalformedPuzzleError(
                f"Row {r} must have {BOARD_SIZE} cells, got {len(row)}"
            )
        try:
            grid.append([Cell(value) for value in row])
        except ValueError as exc:
            raise MalformedPuzzleError(f"Row {r} holds an invalid cell value: {list(row)}") from exc
    return grid


@dataclass
class PuzzleState:
    grid: Grid
    relations: List[Relation] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.grid = _coerce_grid(self.grid)
        self.relations = list(self.relations)

        seen = set()
        for relation in self.relations:
            key = frozenset(relation.cells)
            if key in seen:
                raise MalformedPuzzleError(f"Duplicate relation between {relation.first} and {relation.second}")
            seen.add(key)

        # Map each cell to the relations that mention it.
        self.relations_by_cell: Dict[Position, List[Relation]] = {}
        for relation in self.relations:
            for position in relation.cells:
                self.relations_by_cell.setdefault(position, []).append(relation)

    @classmethod
    def empty(cls, relations: Optional[List[Relation]] = None) -> "PuzzleState":
        grid = [[Cell.EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        return cls(grid=grid, relations=list(relations or []))

    def cell(self, position: Position) -> Cell:
        row, col = position
        return self.grid[row][col]

    def set_cell(self, position: Position, value: Cell) -> None:
        row, col = position
        self.grid[row][col] = Cell(value)

    def relations_for(self, position: Position) -> List[Relation]:
        return self.relations_by_cell.get(tuple(position), [])

    def filled_count(self) -> int:
        return sum(1 for row in self.grid for value in row if value is not Cell.EMPTY)

    def is_complete(self) -> bool:
        return self.filled_count() == BOARD_SIZE * BOARD_SIZE

    def copy(self) -> "PuzzleState":
        # Relations are frozen, so sharing them is safe; rows are cloned.
        return PuzzleState(
            grid=[list(row) for row in self.grid],
            relations=list(self.relations),
        )

    def rows_as_text(self) -> List[str]:
        return ["".join(value.char for value in row) for row in self.grid]
