"""Unit tests for the individual deduction rules."""

import pytest

from src.tango import rules
from src.tango.lines import column, row
from src.tango.model import ContradictionError
from src.tango.parser import parse_puzzle


def _state(rows, relations=()):
    grid = list(rows) + ["......"] * (6 - len(rows))
    return parse_puzzle({"grid": grid, "relations": list(relations)})


def _rel(kind, a, b):
    return {"kind": kind, "cells": [list(a), list(b)]}


def _row_text(state, i=0):
    return state.rows_as_text()[i]


# --- relation rules ---


def test_basic_relation_equal_copies_symbol():
    state = _state(["A....."], [_rel("EQUAL", (0, 0), (0, 1))])
    assert rules.basic_relation(state, state.relations[0])
    assert _row_text(state) == "AA...."


def test_basic_relation_opposite_flips_symbol_from_second_cell():
    state = _state(["......", "B....."], [_rel("OPPOSITE", (0, 0), (1, 0))])
    assert rules.basic_relation(state, state.relations[0])
    assert _row_text(state) == "A....."


def test_basic_relation_noop_when_both_empty_or_both_filled():
    state = _state(["......"], [_rel("EQUAL", (0, 0), (0, 1))])
    assert not rules.basic_relation(state, state.relations[0])
    state = _state(["AA...."], [_rel("EQUAL", (0, 0), (0, 1))])
    assert not rules.basic_relation(state, state.relations[0])


def test_equal_vs_count_fills_pair_with_other_symbol():
    state = _state(["AA...."], [_rel("EQUAL", (0, 3), (0, 4))])
    assert rules.equal_vs_count(state, state.relations[0])
    assert _row_text(state) == "AA.BB."


def test_equal_vs_count_vertical():
    state = _state([".....B", ".....B"], [_rel("EQUAL", (3, 5), (4, 5))])
    assert rules.equal_vs_count(state, state.relations[0])
    assert state.rows_as_text()[3] == ".....A"
    assert state.rows_as_text()[4] == ".....A"


def test_equal_vs_count_ignores_opposite_and_partial_pairs():
    state = _state(["AA...."], [_rel("OPPOSITE", (0, 3), (0, 4))])
    assert not rules.equal_vs_count(state, state.relations[0])
    state = _state(["A....."], [_rel("EQUAL", (0, 3), (0, 4))])
    assert not rules.equal_vs_count(state, state.relations[0])


def test_equal_vs_count_with_both_symbols_twice_is_a_contradiction():
    state = _state(["AABB.."], [_rel("EQUAL", (0, 4), (0, 5))])
    with pytest.raises(ContradictionError):
        rules.equal_vs_count(state, state.relations[0])


def test_opposite_overflow_fills_remaining_cells():
    state = _state(["A..A.."], [_rel("OPPOSITE", (0, 1), (0, 2))])
    assert rules.opposite_overflow(state, state.relations[0])
    assert _row_text(state) == "A..ABB"


def test_opposite_overflow_needs_exactly_one_crowded_symbol():
    state = _state(["ABAB.."], [_rel("OPPOSITE", (0, 4), (0, 5))])
    assert not rules.opposite_overflow(state, state.relations[0])
    state = _state(["A....."], [_rel("OPPOSITE", (0, 1), (0, 2))])
    assert not rules.opposite_overflow(state, state.relations[0])


def test_opposite_chain_sets_all_three_cells():
    relations = [_rel("OPPOSITE", (0, 1), (0, 2)), _rel("OPPOSITE", (0, 2), (0, 3))]
    state = _state(["A...A."], relations)
    assert rules.opposite_chain(state, state.relations[0])
    assert _row_text(state) == "ABABA."


def test_opposite_chain_only_fires_from_the_leading_relation():
    relations = [_rel("OPPOSITE", (0, 1), (0, 2)), _rel("OPPOSITE", (0, 2), (0, 3))]
    state = _state(["A...A."], relations)
    assert not rules.opposite_chain(state, state.relations[1])
    assert _row_text(state) == "A...A."


def test_equal_neighbour_uses_cell_before_pair():
    state = _state(["A....."], [_rel("EQUAL", (0, 1), (0, 2))])
    assert rules.equal_neighbour(state, state.relations[0])
    assert _row_text(state) == "ABB..."


def test_equal_neighbour_uses_cell_after_pair_in_column():
    state = _state(["......", "......", "......", "B....."], [_rel("EQUAL", (1, 0), (2, 0))])
    assert rules.equal_neighbour(state, state.relations[0])
    assert [r[0] for r in state.rows_as_text()[:4]] == [".", "A", "A", "B"]


def test_equal_neighbour_noop_without_filled_neighbour():
    state = _state(["....A."], [_rel("EQUAL", (0, 1), (0, 2))])
    assert not rules.equal_neighbour(state, state.relations[0])


def test_equal_edge_looks_at_far_end():
    state = _state(["A....."], [_rel("EQUAL", (0, 4), (0, 5))])
    assert rules.equal_edge(state, state.relations[0])
    assert _row_text(state) == "A...BB"

    state = _state([".....B"], [_rel("EQUAL", (0, 0), (0, 1))])
    assert rules.equal_edge(state, state.relations[0])
    assert _row_text(state) == "AA...B"


def test_equal_edge_ignores_interior_pairs():
    state = _state(["A....."], [_rel("EQUAL", (0, 2), (0, 3))])
    assert not rules.equal_edge(state, state.relations[0])


# --- line rules ---


def test_full_allocation():
    state = _state(["AAA..."])
    assert rules.full_allocation(row(state, 0))
    assert _row_text(state) == "AAABBB"
    assert not rules.full_allocation(row(state, 0))


def test_full_allocation_in_column():
    state = _state(["......", "B.....", "......", "B.....", "B....."])
    assert rules.full_allocation(column(state, 0))
    assert [r[0] for r in state.rows_as_text()] == ["A", "B", "A", "B", "B", "A"]


def test_adjacent_pair_prefers_earlier_side():
    state = _state([".AA..."])
    line = row(state, 0)
    assert rules.adjacent_pair(line)
    assert _row_text(state) == "BAA..."
    assert rules.adjacent_pair(line)
    assert _row_text(state) == "BAAB.."
    assert not rules.adjacent_pair(line)


def test_adjacent_pair_at_line_end():
    state = _state(["....BB"])
    assert rules.adjacent_pair(row(state, 0))
    assert _row_text(state) == "...ABB"


def test_separated_pair():
    state = _state(["..B.B."])
    assert rules.separated_pair(row(state, 0))
    assert _row_text(state) == "..BAB."
    assert not rules.separated_pair(row(state, 0))


def test_edge_pair_both_directions():
    state = _state(["AA...."])
    assert rules.edge_pair(row(state, 0))
    assert _row_text(state) == "AA...B"

    state = _state(["....BB"])
    assert rules.edge_pair(row(state, 0))
    assert _row_text(state) == "A...BB"


def test_outer_match_forces_both_inner_cells():
    state = _state(["A....A"])
    assert rules.outer_match(row(state, 0))
    assert _row_text(state) == "AB..BA"
    assert not rules.outer_match(row(state, 0))


def test_outer_match_with_one_inner_cell_filled():
    state = _state(["B...AB"])
    assert rules.outer_match(row(state, 0))
    assert _row_text(state) == "BA..AB"


def test_outer_interior_match():
    state = _state(["A...A."])
    assert rules.outer_interior_match(row(state, 0))
    assert _row_text(state) == "A...AB"

    state = _state([".B...B"])
    assert rules.outer_interior_match(row(state, 0))
    assert _row_text(state) == "AB...B"


def test_rule_registry_order():
    names = [rule.name for rule in rules.RULES]
    assert names[0] == "basic_relation"
    assert names.index("full_allocation") < names.index("adjacent_pair")
    assert names[-2:] == ["equal_neighbour", "equal_edge"]
    assert set(rules.RULES_BY_NAME) == set(names)
