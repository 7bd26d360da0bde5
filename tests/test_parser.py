import pytest

from src.tango.model import Cell, MalformedPuzzleError, RelationKind
from src.tango.parser import parse_puzzle, puzzle_to_dict


def test_parse_string_rows_and_relations():
    state = parse_puzzle({
        "id": "p1",
        "grid": ["A.....", "......", "......", "......", "......", ".....B"],
        "relations": [{"kind": "equal", "cells": [[0, 0], [0, 1]]}],
    })
    assert state.cell((0, 0)) is Cell.A
    assert state.cell((5, 5)) is Cell.B
    assert state.relations[0].kind is RelationKind.EQUAL


def test_parse_integer_grid_with_aliases():
    grid = [[0] * 6 for _ in range(6)]
    grid[2][3] = 2
    state = parse_puzzle({
        "grid": grid,
        "constraints": [{"type": "OPPOSITE", "cells": [[2, 3], [3, 3]]}],
    })
    assert state.cell((2, 3)) is Cell.B
    assert state.relations[0].kind is RelationKind.OPPOSITE


def test_parse_grid_from_text():
    state = parse_puzzle({"grid": "A...../....../....../....../....../_____B"})
    assert state.filled_count() == 2
    state = parse_puzzle({"grid": '[[1,0,0,0,0,0],[0,0,0,0,0,0],[0,0,0,0,0,0],'
                                  '[0,0,0,0,0,0],[0,0,0,0,0,0],[0,0,0,0,0,0]]'})
    assert state.cell((0, 0)) is Cell.A


def test_relations_as_json_text():
    state = parse_puzzle({
        "grid": ["......"] * 6,
        "relations": '[{"kind": "EQUAL", "cells": [[4, 4], [4, 5]]}]',
    })
    assert len(state.relations) == 1


@pytest.mark.parametrize("record", [
    {},
    {"grid": ["......"] * 5},
    {"grid": ["......"] * 5 + ["....."]},
    {"grid": ["C....."] + ["......"] * 5},
    {"grid": [[3, 0, 0, 0, 0, 0]] + [[0] * 6] * 5},
    {"grid": ["......"] * 6, "relations": [{"kind": "LESS", "cells": [[0, 0], [0, 1]]}]},
    {"grid": ["......"] * 6, "relations": [{"kind": "EQUAL", "cells": [[0, 0], [1, 1]]}]},
    {"grid": ["......"] * 6, "relations": [{"kind": "EQUAL", "cells": [[0, 5], [0, 6]]}]},
    {"grid": ["......"] * 6, "relations": [{"kind": "EQUAL", "cells": [[0, 0]]}]},
    {"grid": ["......"] * 6, "relations": [{"cells": [[0, 0], [0, 1]]}]},
])
def test_malformed_records(record):
    with pytest.raises(MalformedPuzzleError):
        parse_puzzle(record)


def test_puzzle_to_dict_is_readable_by_parser():
    record = {
        "grid": ["AB....", "......", "......", "......", "......", "......"],
        "relations": [{"kind": "OPPOSITE", "cells": [[0, 0], [0, 1]]}],
    }
    state = parse_puzzle(record)
    out = puzzle_to_dict(state, puzzle_id="x")
    assert out["id"] == "x"
    assert out["grid"][0] == "AB...."
    assert out["relations"] == [{"kind": "OPPOSITE", "cells": [[0, 0], [0, 1]]}]
    assert parse_puzzle(out).grid == state.grid
