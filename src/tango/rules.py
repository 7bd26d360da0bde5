"""Deduction rules for the 6x6 two-symbol grid puzzle.

Every rule either performs one forced assignment (possibly touching several
cells) and returns True, or leaves the grid untouched and returns False.
Writes go through `Line.assign`, which raises ContradictionError instead of
overwriting a filled cell or breaking a puzzle rule. A rule that raises
partway may leave its earlier writes on the grid; the engine rolls the whole
step back.

Rules are scoped to a single relation or to a single line. `RULES` lists them
in the order the engine tries them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from .lines import Line, line_of
from .model import (
    BOARD_SIZE,
    LINE_QUOTA,
    SYMBOLS,
    Cell,
    PuzzleState,
    Relation,
    RelationKind,
)

LAST = BOARD_SIZE - 1


def _is_blank(line: Line, relation: Relation) -> bool:
    lo, hi = relation.span
    return line[lo] is Cell.EMPTY and line[hi] is Cell.EMPTY


def _force_pair(line: Line, lo: int, hi: int, symbol: Cell) -> bool:
    # Evaluate both writes; `or` would skip the second one.
    first = line.assign(lo, symbol)
    second = line.assign(hi, symbol)
    return first or second


def _pair_symbol(line: Line, k: int) -> Optional[Cell]:
    """Symbol shared by cells k and k+1, if both are filled and equal."""
    value = line[k]
    if value is not Cell.EMPTY and line[k + 1] == value:
        return value
    return None


# --- relation rules ---------------------------------------------------------


def basic_relation(state: PuzzleState, relation: Relation) -> bool:
    """One known cell of a relation forces the other one."""
    line = line_of(state, relation)
    lo, hi = relation.span
    a, b = line[lo], line[hi]
    if (a is Cell.EMPTY) == (b is Cell.EMPTY):
        return False
    known, target = (a, hi) if a is not Cell.EMPTY else (b, lo)
    value = known if relation.kind is RelationKind.EQUAL else known.opposite
    return line.assign(target, value)


def equal_vs_count(state: PuzzleState, relation: Relation) -> bool:
    """
    A blank EQUAL pair cannot take a symbol the line already holds twice,
    since that would make four.
    """
    if relation.kind is not RelationKind.EQUAL:
        return False
    line = line_of(state, relation)
    if not _is_blank(line, relation):
        return False
    lo, hi = relation.span
    for symbol in SYMBOLS:
        if line.count(symbol) >= LINE_QUOTA - 1:
            return _force_pair(line, lo, hi, symbol.opposite)
    return False


def opposite_chain(state: PuzzleState, relation: Relation) -> bool:
    """
    Two blank OPPOSITE relations chained over cells k-1, k, k+1 put the same
    symbol on both outer cells. With a symbol already twice in the line the
    outer cells must take the other one and the middle cell takes that symbol.
    """
    if relation.kind is not RelationKind.OPPOSITE:
        return False
    line = line_of(state, relation)
    if not _is_blank(line, relation):
        return False
    lo, mid = relation.span
    if mid == LAST:
        return False
    follower = None
    for candidate in state.relations_for(line.position(mid)):
        if (
            candidate is not relation
            and candidate.kind is RelationKind.OPPOSITE
            and line.contains(candidate)
            and candidate.span == (mid, mid + 1)
        ):
            follower = candidate
            break
    if follower is None or line[mid + 1] is not Cell.EMPTY:
        return False
    for symbol in SYMBOLS:
        if line.count(symbol) == LINE_QUOTA - 1:
            outer = symbol.opposite
            changed = line.assign(lo, outer)
            changed = line.assign(mid + 1, outer) or changed
            changed = line.assign(mid, symbol) or changed
            return changed
    return False


def opposite_overflow(state: PuzzleState, relation: Relation) -> bool:
    """
    A blank OPPOSITE pair always adds one of each symbol. If exactly one symbol
    is already twice in the line, every other blank cell takes the other symbol.
    """
    if relation.kind is not RelationKind.OPPOSITE:
        return False
    line = line_of(state, relation)
    if not _is_blank(line, relation):
        return False
    crowded = [s for s in SYMBOLS if line.count(s) == LINE_QUOTA - 1]
    if len(crowded) != 1:
        return False
    fill = crowded[0].opposite
    pair = set(relation.span)
    changed = False
    for k in line.empty_indices():
        if k in pair:
            continue
        changed = line.assign(k, fill) or changed
    return changed


def equal_neighbour(state: PuzzleState, relation: Relation) -> bool:
    """A blank EQUAL pair cannot match the filled cell right before or after it."""
    if relation.kind is not RelationKind.EQUAL:
        return False
    line = line_of(state, relation)
    if not _is_blank(line, relation):
        return False
    lo, hi = relation.span
    if lo > 0 and line[lo - 1] is not Cell.EMPTY:
        return _force_pair(line, lo, hi, line[lo - 1].opposite)
    if hi < LAST and line[hi + 1] is not Cell.EMPTY:
        return _force_pair(line, lo, hi, line[hi + 1].opposite)
    return False


def equal_edge(state: PuzzleState, relation: Relation) -> bool:
    """A blank EQUAL pair at one end of a line cannot match the far end cell."""
    if relation.kind is not RelationKind.EQUAL:
        return False
    line = line_of(state, relation)
    if not _is_blank(line, relation):
        return False
    lo, hi = relation.span
    if lo == 0 and line[LAST] is not Cell.EMPTY:
        return _force_pair(line, lo, hi, line[LAST].opposite)
    if hi == LAST and line[0] is not Cell.EMPTY:
        return _force_pair(line, lo, hi, line[0].opposite)
    return False


# --- line rules -------------------------------------------------------------


def full_allocation(line: Line) -> bool:
    """Three of one symbol in a line means every blank takes the other."""
    for symbol in SYMBOLS:
        if line.count(symbol) != LINE_QUOTA:
            continue
        changed = False
        for k in line.empty_indices():
            changed = line.assign(k, symbol.opposite) or changed
        if changed:
            return True
    return False


def adjacent_pair(line: Line) -> bool:
    """
    Two equal neighbours force the opposite symbol next to them.
    Only one side is written per call, the earlier index first.
    """
    for k in range(BOARD_SIZE - 1):
        symbol = _pair_symbol(line, k)
        if symbol is None:
            continue
        if k > 0 and line[k - 1] is Cell.EMPTY:
            return line.assign(k - 1, symbol.opposite)
        if k + 1 < LAST and line[k + 2] is Cell.EMPTY:
            return line.assign(k + 2, symbol.opposite)
    return False


def separated_pair(line: Line) -> bool:
    """X . X forces the gap to the opposite of X."""
    for k in range(BOARD_SIZE - 2):
        value = line[k]
        if value is Cell.EMPTY or line[k + 2] != value:
            continue
        if line[k + 1] is Cell.EMPTY:
            return line.assign(k + 1, value.opposite)
    return False


def edge_pair(line: Line) -> bool:
    """A pair at one end of the line forces the far end to the opposite symbol."""
    head = _pair_symbol(line, 0)
    if head is not None and line[LAST] is Cell.EMPTY:
        return line.assign(LAST, head.opposite)
    tail = _pair_symbol(line, LAST - 1)
    if tail is not None and line[0] is Cell.EMPTY:
        return line.assign(0, tail.opposite)
    return False


def outer_match(line: Line) -> bool:
    """Equal end cells force both inner neighbours of the ends to the opposite."""
    value = line[0]
    if value is Cell.EMPTY or line[LAST] != value:
        return False
    if line[1] is not Cell.EMPTY and line[LAST - 1] is not Cell.EMPTY:
        return False
    changed = line.assign(1, value.opposite)
    changed = line.assign(LAST - 1, value.opposite) or changed
    return changed


def outer_interior_match(line: Line) -> bool:
    """
    The first cell matching the second-to-last forces the last cell; the
    second cell matching the last forces the first.
    """
    value = line[0]
    if value is not Cell.EMPTY and line[LAST - 1] == value and line[LAST] is Cell.EMPTY:
        return line.assign(LAST, value.opposite)
    value = line[LAST]
    if value is not Cell.EMPTY and line[1] == value and line[0] is Cell.EMPTY:
        return line.assign(0, value.opposite)
    return False


# --- registry ---------------------------------------------------------------


class Scope(Enum):
    RELATION = "relation"
    LINE = "line"


@dataclass(frozen=True)
class Rule:
    name: str
    scope: Scope
    apply: Callable[..., bool]


RULES: List[Rule] = [
    Rule("basic_relation", Scope.RELATION, basic_relation),
    Rule("equal_vs_count", Scope.RELATION, equal_vs_count),
    Rule("opposite_chain", Scope.RELATION, opposite_chain),
    Rule("opposite_overflow", Scope.RELATION, opposite_overflow),
    Rule("full_allocation", Scope.LINE, full_allocation),
    Rule("adjacent_pair", Scope.LINE, adjacent_pair),
    Rule("separated_pair", Scope.LINE, separated_pair),
    Rule("edge_pair", Scope.LINE, edge_pair),
    Rule("outer_match", Scope.LINE, outer_match),
    Rule("outer_interior_match", Scope.LINE, outer_interior_match),
    Rule("equal_neighbour", Scope.RELATION, equal_neighbour),
    Rule("equal_edge", Scope.RELATION, equal_edge),
]

RULES_BY_NAME = {rule.name: rule for rule in RULES}
