"""Puzzle parser: convert raw puzzle records into PuzzleState objects.

Accepted record layout:

    {
        "id": "puzzle-1",
        "grid": ["..BA..", ...] | [[0, 0, 2, 1, 0, 0], ...],
        "relations": [{"kind": "EQUAL", "cells": [[3, 0], [3, 1]]}, ...],
    }

Cells may be 0/1/2, "A"/"B", or "."/"0"/"" for empty. The keys "constraints"
(for relations) and "type" (for kind) are accepted as aliases.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from .model import Cell, MalformedPuzzleError, PuzzleState, Relation, RelationKind

_CHAR_CELLS = {
    "": Cell.EMPTY,
    ".": Cell.EMPTY,
    "0": Cell.EMPTY,
    "_": Cell.EMPTY,
    "A": Cell.A,
    "1": Cell.A,
    "B": Cell.B,
    "2": Cell.B,
}


def _parse_cell(raw: Any) -> Cell:
    if isinstance(raw, Cell):
        return raw
    if isinstance(raw, bool):
        raise MalformedPuzzleError(f"Invalid cell value: {raw!r}")
    if isinstance(raw, int):
        try:
            return Cell(raw)
        except ValueError as exc:
            raise MalformedPuzzleError(f"Invalid cell value: {raw!r}") from exc
    if isinstance(raw, str) and raw.strip().upper() in _CHAR_CELLS:
        return _CHAR_CELLS[raw.strip().upper()]
    raise MalformedPuzzleError(f"Invalid cell value: {raw!r}")


def _parse_row(raw: Any) -> List[Cell]:
    if isinstance(raw, str):
        return [_parse_cell(ch) for ch in raw.strip()]
    if hasattr(raw, "tolist"):
        # numpy arrays coming out of pandas/parquet
        raw = raw.tolist()
    if isinstance(raw, (list, tuple)):
        return [_parse_cell(value) for value in raw]
    raise MalformedPuzzleError(f"Invalid grid row: {raw!r}")


def _parse_grid(raw: Any) -> List[List[Cell]]:
    if isinstance(raw, str):
        text = raw.strip()
        if text.startswith("["):
            raw = json.loads(text)
        else:
            raw = [part for part in text.replace("/", "\n").splitlines() if part.strip()]
    if hasattr(raw, "tolist"):
        raw = raw.tolist()
    if not isinstance(raw, (list, tuple)):
        raise MalformedPuzzleError(f"Grid must be a list of rows, got {type(raw).__name__}")
    return [_parse_row(row) for row in raw]


def _parse_position(raw: Any) -> tuple:
    if hasattr(raw, "tolist"):
        raw = raw.tolist()
    try:
        row, col = raw
        return int(row), int(col)
    except (TypeError, ValueError) as exc:
        raise MalformedPuzzleError(f"Invalid cell position: {raw!r}") from exc


def _parse_relation(raw: Dict[str, Any]) -> Relation:
    if not isinstance(raw, dict):
        raise MalformedPuzzleError(f"Relation must be an object, got {raw!r}")
    kind = raw.get("kind", raw.get("type"))
    cells = raw.get("cells")
    if hasattr(cells, "tolist"):
        cells = cells.tolist()
    if kind is None or cells is None or len(cells) != 2:
        raise MalformedPuzzleError(f"Relation needs a kind and two cells: {raw!r}")
    if not isinstance(kind, RelationKind):
        kind = str(kind).strip().upper()
    try:
        return Relation(
            first=_parse_position(cells[0]),
            second=_parse_position(cells[1]),
            kind=kind,
        )
    except ValueError as exc:
        if isinstance(exc, MalformedPuzzleError):
            raise
        raise MalformedPuzzleError(f"Unknown relation kind: {kind!r}") from exc


def parse_puzzle(puzzle_json: Dict[str, Any]) -> PuzzleState:
    if "grid" not in puzzle_json:
        raise MalformedPuzzleError(f"Puzzle {puzzle_json.get('id', '?')} has no grid")
    grid = _parse_grid(puzzle_json["grid"])

    raw_relations = puzzle_json.get("relations")
    if raw_relations is None:
        raw_relations = puzzle_json.get("constraints")
    if isinstance(raw_relations, str):
        raw_relations = json.loads(raw_relations) if raw_relations.strip() else []
    if hasattr(raw_relations, "tolist"):
        raw_relations = raw_relations.tolist()
    relations = [_parse_relation(r) for r in (raw_relations or [])]

    return PuzzleState(grid=grid, relations=relations)


def puzzle_to_dict(state: PuzzleState, puzzle_id: Optional[str] = None) -> Dict[str, Any]:
    """Serialize a PuzzleState into the record layout `parse_puzzle` reads."""
    record: Dict[str, Any] = {}
    if puzzle_id is not None:
        record["id"] = puzzle_id
    record["grid"] = state.rows_as_text()
    record["relations"] = [
        {"kind": r.kind.value, "cells": [list(r.first), list(r.second)]}
        for r in state.relations
    ]
    return record
