import json
import os
from typing import Any, Dict, List

import pandas as pd

PUZZLE_SUFFIXES = (".json", ".jsonl", ".parquet", ".csv")


def load_puzzles(file_path: str) -> List[Dict[str, Any]]:
    """
    Reads puzzles from a file. Handles .parquet, .csv, .json and .jsonl formats.
    Returns a list of raw puzzle dictionaries (see `parser.parse_puzzle`).
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    stem = os.path.splitext(os.path.basename(file_path))[0]

    def _is_missing(value: Any) -> bool:
        if value is None:
            return True
        if isinstance(value, float) and value != value:  # NaN from pandas
            return True
        return isinstance(value, str) and value.strip() == ""

    def _normalize_record(record: Dict[str, Any], idx: int) -> Dict[str, Any]:
        record = {k: v for k, v in record.items() if not _is_missing(v)}
        if "relations" not in record and "constraints" in record:
            record["relations"] = record.pop("constraints")
        if "id" not in record:
            record["id"] = f"{stem}-{idx}"
        else:
            record["id"] = str(record["id"])
        return record

    def _from_records(records: List[Any]) -> List[Dict[str, Any]]:
        return [
            _normalize_record(dict(r), i)
            for i, r in enumerate(records)
            if isinstance(r, dict)
        ]

    # Case 1: Parquet / CSV (tabular; grid and relations stored as JSON text or arrays)
    if file_path.endswith(".parquet"):
        try:
            df = pd.read_parquet(file_path)
        except Exception as e:
            print(f"Error reading parquet: {e}")
            return []
        return _from_records(df.to_dict(orient="records"))

    if file_path.endswith(".csv"):
        try:
            df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
        except Exception as e:
            print(f"Error reading csv: {e}")
            return []
        return _from_records(df.to_dict(orient="records"))

    # Case 2: JSON File (array or object)
    if file_path.endswith(".json"):
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                payload = json.load(f)
            if isinstance(payload, list):
                return _from_records(payload)
            if isinstance(payload, dict):
                return _from_records([payload])
            return []
        except json.JSONDecodeError:
            # Some sources use ".json" but actually store JSONL; fall back to line-delimited parsing.
            pass

    # Case 3: JSONL File
    data = []
    with open(file_path, "r", encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError:
                continue
            data.append(obj)
    return _from_records(data)
