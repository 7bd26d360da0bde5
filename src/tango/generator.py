"""Random puzzle generation: complete grids, relation templates, and carving.

A complete grid is built row by row from shuffled balanced rows, keeping a
row only while the partial grid stays valid. Relations are laid over one of a
few fixed position templates and take their kind from the finished grid.
`carve_puzzle` then blanks cells for as long as the deduction engine can
still recover them.
"""

import random
from itertools import combinations
from typing import List, Optional, Sequence

from .engine import DeductionEngine
from .model import (
    BOARD_SIZE,
    LINE_QUOTA,
    Cell,
    Grid,
    Position,
    PuzzleState,
    Relation,
    RelationKind,
)
from .validation import is_valid
from src.utils.trace import Tracer

RelationTemplate = List[List[Position]]


class GenerationError(RuntimeError):
    """No grid or puzzle could be produced."""


RELATION_TEMPLATES: List[RelationTemplate] = [
    [
        [(2, 0), (1, 0)],
        [(1, 0), (0, 0)],
        [(0, 0), (0, 1)],
        [(5, 3), (5, 4)],
        [(5, 4), (5, 5)],
        [(5, 5), (4, 5)],
        [(0, 4), (1, 4)],
        [(4, 0), (4, 1)],
    ],
    [
        [(2, 2), (2, 3)],
        [(2, 3), (3, 3)],
        [(3, 3), (3, 2)],
        [(3, 2), (2, 2)],
        [(0, 1), (0, 2)],
        [(0, 2), (0, 3)],
        [(0, 3), (0, 4)],
        [(5, 1), (5, 2)],
        [(5, 2), (5, 3)],
        [(5, 3), (5, 4)],
    ],
    [
        [(0, 0), (1, 0)],
        [(1, 0), (2, 0)],
        [(2, 0), (2, 1)],
        [(2, 1), (3, 1)],
        [(0, 5), (1, 5)],
        [(1, 5), (2, 5)],
        [(2, 5), (2, 4)],
        [(2, 4), (3, 4)],
        [(4, 2), (4, 3)],
        [(5, 2), (5, 3)],
    ],
]


def balanced_rows() -> List[List[Cell]]:
    """Every row with three of each symbol (adjacency is not checked here)."""
    rows = []
    for a_slots in combinations(range(BOARD_SIZE), LINE_QUOTA):
        rows.append([Cell.A if k in a_slots else Cell.B for k in range(BOARD_SIZE)])
    return rows


def generate_complete_grid(rng: Optional[random.Random] = None) -> Grid:
    rng = rng or random.Random()
    candidates = balanced_rows()
    state = PuzzleState.empty()

    def _fill(r: int) -> bool:
        if r == BOARD_SIZE:
            return True
        order = list(candidates)
        rng.shuffle(order)
        for row in order:
            state.grid[r] = list(row)
            if is_valid(state) and _fill(r + 1):
                return True
        state.grid[r] = [Cell.EMPTY] * BOARD_SIZE
        return False

    if not _fill(0):
        raise GenerationError("Failed to generate grid")
    return [list(row) for row in state.grid]


def derive_relations(grid: Grid, template: Sequence[Sequence[Position]]) -> List[Relation]:
    """Give each templated cell pair the kind that holds in `grid`."""
    relations = []
    for first, second in template:
        a = grid[first[0]][first[1]]
        b = grid[second[0]][second[1]]
        kind = RelationKind.EQUAL if a == b else RelationKind.OPPOSITE
        relations.append(Relation(first=first, second=second, kind=kind))
    return relations


def generate_complete_puzzle(rng: Optional[random.Random] = None) -> PuzzleState:
    rng = rng or random.Random()
    grid = generate_complete_grid(rng)
    template = rng.choice(RELATION_TEMPLATES)
    return PuzzleState(grid=grid, relations=derive_relations(grid, template))


def carve_puzzle(solution: PuzzleState, rng: Optional[random.Random] = None) -> PuzzleState:
    """
    Blank cells of a complete puzzle in random order, keeping each blank only
    if the engine still solves the result without guessing.
    """
    if not solution.is_complete() or not is_valid(solution):
        raise GenerationError("carve_puzzle needs a complete, valid grid")
    rng = rng or random.Random()
    puzzle = solution.copy()
    positions = [(r, c) for r in range(BOARD_SIZE) for c in range(BOARD_SIZE)]
    rng.shuffle(positions)

    quiet = Tracer(enabled=False)
    for position in positions:
        value = puzzle.cell(position)
        puzzle.set_cell(position, Cell.EMPTY)
        if not DeductionEngine(puzzle, tracer=quiet).solve().solved:
            puzzle.set_cell(position, value)
    return puzzle


def generate_puzzle(rng: Optional[random.Random] = None) -> PuzzleState:
    rng = rng or random.Random()
    return carve_puzzle(generate_complete_puzzle(rng), rng)
