import csv
import json
from pathlib import Path

import pytest

from run import DATA_PATH_ENV, format_solution, main, parse_args, write_results_csv
from src.tango.engine import DeductionEngine
from src.tango.parser import parse_puzzle
from src.utils.io import load_json
from src.utils.trace import Tracer

SOLUTION = [
    "AABBAB",
    "BBAABA",
    "ABABAB",
    "BABABA",
    "BAABBA",
    "ABBAAB",
]


def _puzzle(puzzle_id):
    rows = [r[:i] + "." + r[i + 1:] for i, r in enumerate(SOLUTION)]
    return {"id": puzzle_id, "grid": rows, "relations": []}


def _read_csv(path: Path):
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.DictReader(f))


def test_format_solution_solved():
    result = DeductionEngine(parse_puzzle(_puzzle("p")), tracer=Tracer()).solve()
    grid = format_solution(result)
    assert grid["status"] == "solved"
    assert grid["rows"] == SOLUTION


def test_format_solution_stuck_and_error():
    empty = {"grid": ["......"] * 6}
    grid = format_solution(DeductionEngine(parse_puzzle(empty), tracer=Tracer()).solve())
    assert grid == {"status": "stuck", "rows": []}
    assert format_solution(None) == {"status": "error", "rows": []}


def test_main_single_file(tmp_path):
    path = tmp_path / "puzzle1.json"
    path.write_text(json.dumps(_puzzle("puzzle1")))

    results = main([str(path)])
    assert len(results) == 1
    assert results[0]["id"] == "puzzle1"
    assert results[0]["status"] == "solved"
    assert results[0]["grid_solution"]["rows"] == SOLUTION


def test_main_directory_input(tmp_path):
    for i in range(3):
        (tmp_path / f"puzzle{i}.json").write_text(json.dumps(_puzzle(f"puzzle{i}")))
    (tmp_path / "notes.txt").write_text("ignored")

    results = main([str(tmp_path)])
    assert [r["id"] for r in results] == ["puzzle0", "puzzle1", "puzzle2"]


def test_main_malformed_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{invalid json")
    assert main([str(path)]) == []


def test_malformed_record_becomes_error_row(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([{"id": "bad", "grid": ["......"] * 5}, _puzzle("good")]))
    output = tmp_path / "out.csv"

    results = main([str(path), "--output", str(output)])
    assert [r["status"] for r in results] == ["error", "solved"]

    rows = _read_csv(output)
    assert rows[0]["id"] == "bad"
    assert rows[0]["steps"] == "-1"
    assert json.loads(rows[0]["grid_solution"]) == {"status": "error", "rows": []}


def test_csv_output_for_builtin_puzzles(tmp_path):
    output = tmp_path / "results.csv"
    main(["--builtin", "--output", str(output)])

    content = output.read_text()
    assert content.splitlines()[0] == "id,status,grid_solution,steps"
    rows = _read_csv(output)
    assert [r["id"] for r in rows] == [f"initial-{i}" for i in range(1, 6)]
    for row in rows:
        assert row["status"] in ("solved", "stuck", "contradiction")
        assert 0 <= int(row["steps"]) <= 36


def test_generate_and_save(tmp_path):
    saved = tmp_path / "gen" / "puzzles.json"
    results = main(["--generate", "2", "--seed", "4", "--save-generated", str(saved)])

    assert [r["status"] for r in results] == ["solved", "solved"]
    records = load_json(saved)
    assert [r["id"] for r in records] == ["generated-0", "generated-1"]
    assert all(len(r["grid"]) == 6 for r in records)


def test_trace_dir_gets_one_file_per_puzzle(tmp_path):
    path = tmp_path / "p.json"
    path.write_text(json.dumps(_puzzle("traced")))
    trace_dir = tmp_path / "traces"

    main([str(path), "--trace-dir", str(trace_dir), "--show"])
    rows = _read_csv(trace_dir / "traced.csv")
    assert rows[-1]["action_type"] == "solved"
    assert {r["action_type"] for r in rows[:-1]} == {"deduction"}


def test_write_results_csv(tmp_path):
    output = tmp_path / "r.csv"
    write_results_csv(
        [{"id": "x", "status": "stuck", "grid_solution": {"status": "stuck", "rows": []}, "steps": 3}],
        output,
    )
    rows = _read_csv(output)
    assert rows == [{"id": "x", "status": "stuck", "grid_solution": '{"status":"stuck","rows":[]}', "steps": "3"}]


def test_parse_args_requires_a_source(monkeypatch):
    monkeypatch.delenv(DATA_PATH_ENV, raising=False)
    with pytest.raises(SystemExit):
        parse_args([])


def test_parse_args_reads_data_path_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv(DATA_PATH_ENV, str(tmp_path))
    args = parse_args([])
    assert args.input == tmp_path
    assert parse_args(["other.json"]).input == Path("other.json")
