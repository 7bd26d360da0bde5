"""CLI entrypoint: load or generate puzzle(s), run the deduction engine, and report results."""

import argparse
import csv
import json
import os
import random
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from tqdm import tqdm

from solver import solve_puzzle
from src.tango.engine import SolveResult
from src.tango.fixtures import INITIAL_STATES
from src.tango.generator import generate_puzzle
from src.tango.loader import PUZZLE_SUFFIXES, load_puzzles
from src.tango.parser import parse_puzzle, puzzle_to_dict
from src.tango.render import render_grid
from src.utils.io import save_json
from src.utils.trace import get_tracer, reset_tracer

DATA_PATH_ENV = "TANGO_DATA_PATH"


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Run the deduction engine on 6x6 two-symbol grid puzzles")
    parser.add_argument(
        "input",
        type=Path,
        nargs="?",
        default=None,
        help=f"Path to puzzle file or directory of puzzles (default: ${DATA_PATH_ENV})",
    )
    parser.add_argument("--builtin", action="store_true", help="Solve the built-in starting positions")
    parser.add_argument("--generate", type=int, default=0, metavar="N", help="Generate and solve N random puzzles")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for --generate")
    parser.add_argument(
        "--save-generated",
        type=Path,
        default=None,
        help="Write generated puzzles to this JSON file",
    )
    parser.add_argument("--output", type=Path, default=None, help="Optional path to write results CSV")
    parser.add_argument("--trace-dir", type=Path, default=None, help="Write one trace CSV per puzzle here")
    parser.add_argument("--show", action="store_true", help="Print each puzzle and its solved grid")
    args = parser.parse_args(argv)

    if args.input is None and os.environ.get(DATA_PATH_ENV):
        args.input = Path(os.environ[DATA_PATH_ENV])
    if args.input is None and not args.builtin and args.generate <= 0:
        parser.error(f"provide an input path, --builtin, --generate N, or set {DATA_PATH_ENV}")
    return args


def collect_puzzles(args) -> List[Dict[str, Any]]:
    puzzles: List[Dict[str, Any]] = []

    if args.input is not None:
        if args.input.is_file():
            puzzles.extend(load_puzzles(str(args.input)))
        elif args.input.is_dir():
            for file_path in sorted(args.input.iterdir()):
                if file_path.suffix in PUZZLE_SUFFIXES:
                    puzzles.extend(load_puzzles(str(file_path)))
        else:
            raise ValueError(f"Input path {args.input} is neither file nor directory")

    if args.builtin:
        puzzles.extend(dict(record) for record in INITIAL_STATES)

    if args.generate > 0:
        rng = random.Random(args.seed)
        generated = [
            puzzle_to_dict(generate_puzzle(rng), puzzle_id=f"generated-{i}")
            for i in range(args.generate)
        ]
        if args.save_generated:
            save_json(args.save_generated, generated)
            print(f"Generated puzzles written to {args.save_generated}")
        puzzles.extend(generated)

    return puzzles


def format_solution(result: Optional[SolveResult]) -> Dict[str, Any]:
    if result is None:
        return {"status": "error", "rows": []}
    rows = []
    if result.grid is not None:
        rows = ["".join(cell.char for cell in row) for row in result.grid]
    return {"status": result.status.value, "rows": rows}


def write_results_csv(results, output_path: Path):
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["id", "status", "grid_solution", "steps"])

        for r in results:
            writer.writerow([
                r["id"],
                r["status"],
                json.dumps(r["grid_solution"], ensure_ascii=False, separators=(",", ":")),
                r["steps"],
            ])


def solve_record(record: Dict[str, Any]) -> Tuple[Optional[SolveResult], str]:
    """Parse and solve one record; returns (result, error message)."""
    try:
        state = parse_puzzle(record)
    except (ValueError, TypeError) as e:
        return None, str(e)
    return solve_puzzle(state), ""


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    puzzles = collect_puzzles(args)
    results = []

    for idx, puzzle in enumerate(tqdm(puzzles, desc="Solving", unit="puzzle", disable=len(puzzles) < 2)):
        puzzle_id = str(puzzle.get("id", f"row_{idx}"))
        reset_tracer()
        tracer = get_tracer()

        result, error = solve_record(puzzle)
        if result is None:
            print(f"ERROR: Failed to load puzzle {puzzle_id}: {error}")
            results.append({
                "id": puzzle_id,
                "status": "error",
                "grid_solution": format_solution(None),
                "steps": -1,
            })
            continue

        if args.show:
            print(render_grid(parse_puzzle(puzzle), title=f"== {puzzle_id}"))
            print(f"-> {result.message}")
            if result.grid is not None:
                print("\n".join("".join(c.char for c in row) for row in result.grid))
            print()

        if args.trace_dir:
            tracer.to_csv(args.trace_dir / f"{puzzle_id}.csv")

        results.append({
            "id": puzzle_id,
            "status": result.status.value,
            "grid_solution": format_solution(result),
            "steps": result.steps,
        })

    if args.output:
        write_results_csv(results, args.output)
    else:
        for r in results:
            print(f"{r['id']}: {r['status']} after {r['steps']} steps")
    return results


if __name__ == "__main__":
    main()
