"""Hand-made starting positions, in the record layout read by `parse_puzzle`."""

from typing import Any, Dict, List

from .model import PuzzleState
from .parser import parse_puzzle


def _rel(kind: str, a, b) -> Dict[str, Any]:
    return {"kind": kind, "cells": [list(a), list(b)]}


INITIAL_STATES: List[Dict[str, Any]] = [
    {
        "id": "initial-1",
        "grid": [
            "...B.A",
            "...A.A",
            "...AAB",
            "......",
            "......",
            "......",
        ],
        "relations": [
            _rel("EQUAL", (3, 0), (3, 1)),
            _rel("OPPOSITE", (3, 1), (3, 2)),
            _rel("OPPOSITE", (3, 0), (4, 0)),
            _rel("EQUAL", (3, 2), (4, 2)),
            _rel("EQUAL", (4, 0), (5, 0)),
            _rel("OPPOSITE", (4, 2), (5, 2)),
        ],
    },
    {
        "id": "initial-2",
        "grid": [
            "......",
            "......",
            "..BB..",
            "......",
            ".A..B.",
            "..AA..",
        ],
        "relations": [
            _rel("EQUAL", (0, 1), (0, 2)),
            _rel("EQUAL", (0, 3), (0, 4)),
            _rel("OPPOSITE", (1, 0), (2, 0)),
            _rel("EQUAL", (2, 0), (3, 0)),
            _rel("OPPOSITE", (1, 5), (2, 5)),
            _rel("EQUAL", (2, 5), (3, 5)),
        ],
    },
    {
        "id": "initial-3",
        "grid": [
            "..BA..",
            ".A..A.",
            ".B..B.",
            "......",
            "..AA..",
            "......",
        ],
        "relations": [
            _rel("OPPOSITE", (3, 1), (3, 2)),
            _rel("EQUAL", (3, 3), (3, 4)),
            _rel("OPPOSITE", (4, 1), (5, 1)),
            _rel("EQUAL", (4, 4), (5, 4)),
        ],
    },
    {
        "id": "initial-4",
        "grid": [
            "......",
            ".....B",
            "......",
            "......",
            "A.....",
            "......",
        ],
        "relations": [
            _rel("EQUAL", (2, 0), (3, 0)),
            _rel("OPPOSITE", (1, 0), (2, 0)),
            _rel("EQUAL", (1, 0), (1, 1)),
            _rel("OPPOSITE", (1, 1), (1, 2)),
            _rel("OPPOSITE", (1, 2), (1, 3)),
            _rel("EQUAL", (0, 3), (1, 3)),
            _rel("OPPOSITE", (4, 2), (5, 2)),
            _rel("OPPOSITE", (4, 2), (4, 3)),
            _rel("OPPOSITE", (4, 3), (4, 4)),
            _rel("EQUAL", (4, 4), (4, 5)),
            _rel("OPPOSITE", (3, 5), (4, 5)),
            _rel("OPPOSITE", (2, 5), (3, 5)),
        ],
    },
    {
        "id": "initial-5",
        "grid": [
            ".B..B.",
            "......",
            "......",
            "......",
            ".A..B.",
            "......",
        ],
        "relations": [
            _rel("EQUAL", (1, 0), (2, 0)),
            _rel("OPPOSITE", (2, 0), (3, 0)),
            _rel("EQUAL", (3, 0), (3, 1)),
            _rel("EQUAL", (1, 2), (2, 2)),
            _rel("EQUAL", (1, 2), (1, 3)),
            _rel("OPPOSITE", (1, 3), (2, 3)),
            _rel("OPPOSITE", (2, 2), (2, 3)),
            _rel("EQUAL", (1, 5), (2, 5)),
            _rel("OPPOSITE", (2, 5), (3, 5)),
            _rel("OPPOSITE", (3, 4), (3, 5)),
            _rel("EQUAL", (5, 2), (5, 3)),
        ],
    },
]


def initial_states() -> List[PuzzleState]:
    return [parse_puzzle(record) for record in INITIAL_STATES]
