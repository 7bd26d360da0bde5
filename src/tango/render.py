"""Plain-text rendering of a puzzle grid with its relation markers."""

from typing import Dict, FrozenSet, List, Optional

from .model import BOARD_SIZE, Position, PuzzleState, RelationKind

MARKERS = {RelationKind.EQUAL: "=", RelationKind.OPPOSITE: "x"}


def _marker_index(state: PuzzleState) -> Dict[FrozenSet[Position], str]:
    return {frozenset(r.cells): MARKERS[r.kind] for r in state.relations}


def render_grid(state: PuzzleState, title: Optional[str] = None) -> str:
    """
    Render e.g.

        A = A   B
                x
        .   B   A
    """
    markers = _marker_index(state)
    out: List[str] = []
    if title:
        out.append(title)
    for r in range(BOARD_SIZE):
        parts = []
        for c in range(BOARD_SIZE):
            parts.append(state.cell((r, c)).char)
            if c < BOARD_SIZE - 1:
                mark = markers.get(frozenset({(r, c), (r, c + 1)}), " ")
                parts.append(f" {mark} ")
        out.append("".join(parts).rstrip())
        if r < BOARD_SIZE - 1:
            below = [markers.get(frozenset({(r, c), (r + 1, c)}), " ") for c in range(BOARD_SIZE)]
            out.append("   ".join(below).rstrip())
    return "\n".join(out)
