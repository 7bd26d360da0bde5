"""Uniform read/write view over a single row or column of a puzzle grid."""

from enum import Enum
from typing import Iterator, List, Optional, Tuple

from .model import (
    BOARD_SIZE,
    LINE_QUOTA,
    Cell,
    ContradictionError,
    Position,
    PuzzleState,
    Relation,
)


class Axis(Enum):
    ROW = "row"
    COLUMN = "column"


class Line:
    """
    A live view of row `index` (axis ROW) or column `index` (axis COLUMN).

    Reads always reflect the grid at call time and writes go straight to the
    backing grid, so rules can treat rows and columns identically.
    """

    __slots__ = ("state", "axis", "index")

    def __init__(self, state: PuzzleState, axis: Axis, index: int) -> None:
        if not 0 <= index < BOARD_SIZE:
            raise IndexError(f"{axis.value} index out of range: {index}")
        self.state = state
        self.axis = axis
        self.index = index

    def position(self, k: int) -> Position:
        if not 0 <= k < BOARD_SIZE:
            raise IndexError(f"line index out of range: {k}")
        if self.axis is Axis.ROW:
            return (self.index, k)
        return (k, self.index)

    def index_of(self, position: Position) -> Optional[int]:
        """Index of `position` along this line, or None if it lies elsewhere."""
        row, col = position
        if self.axis is Axis.ROW:
            return col if row == self.index else None
        return row if col == self.index else None

    def __len__(self) -> int:
        return BOARD_SIZE

    def __getitem__(self, k: int) -> Cell:
        return self.state.cell(self.position(k))

    def __setitem__(self, k: int, value: Cell) -> None:
        self.state.set_cell(self.position(k), value)

    def __iter__(self) -> Iterator[Cell]:
        for k in range(BOARD_SIZE):
            yield self[k]

    def values(self) -> List[Cell]:
        return list(self)

    def count(self, symbol: Cell) -> int:
        return sum(1 for value in self if value == symbol)

    def empty_indices(self) -> List[int]:
        return [k for k in range(BOARD_SIZE) if self[k] is Cell.EMPTY]

    def contains(self, relation: Relation) -> bool:
        return all(self.index_of(pos) is not None for pos in relation.cells)

    def assign(self, k: int, symbol: Cell) -> bool:
        """
        Checked write used by the deduction rules.
        Returns False when the cell already holds `symbol`, True after writing
        into an EMPTY cell, and raises ContradictionError for any conflict.
        """
        position = self.position(k)
        current = self.state.cell(position)
        if current == symbol:
            return False
        if current is not Cell.EMPTY:
            raise ContradictionError(position, symbol, f"cell already holds {current.char}")

        for line in crossing_lines(self.state, position):
            if line.count(symbol) >= LINE_QUOTA:
                raise ContradictionError(
                    position, symbol, f"{line} already holds {LINE_QUOTA} {symbol.char}"
                )

        for relation in self.state.relations_for(position):
            partner = self.state.cell(relation.other(position))
            if not relation.holds(symbol, partner):
                raise ContradictionError(position, symbol, f"breaks relation {relation}")

        self[k] = symbol
        return True

    def __repr__(self) -> str:
        return f"Line({self.axis.value}={self.index}, {''.join(v.char for v in self)})"

    def __str__(self) -> str:
        return f"{self.axis.value} {self.index}"


def row(state: PuzzleState, i: int) -> Line:
    return Line(state, Axis.ROW, i)


def column(state: PuzzleState, j: int) -> Line:
    return Line(state, Axis.COLUMN, j)


def lines(state: PuzzleState) -> Iterator[Line]:
    """Every line, interleaved: row 0, column 0, row 1, column 1, ..."""
    for i in range(BOARD_SIZE):
        yield row(state, i)
        yield column(state, i)


def crossing_lines(state: PuzzleState, position: Position) -> Tuple[Line, Line]:
    r, c = position
    return row(state, r), column(state, c)


def line_of(state: PuzzleState, relation: Relation) -> Line:
    if relation.is_horizontal:
        return row(state, relation.line_index)
    return column(state, relation.line_index)
