"""Reading response files and writing score results."""

import json
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

import yaml


def load_document(path: Path | str) -> dict[str, Any]:
    """Load a single JSON or YAML mapping (templates, response maps).

    Raises:
        ValueError: If the file does not hold a mapping.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping in {path}, got {type(data).__name__}")
    return data


def iter_records(path: Path | str) -> Iterator[tuple[int, dict[str, Any]]]:
    """Yield ``(line_number, record)`` for each record of a JSONL batch.

    Blank lines are skipped.

    Raises:
        ValueError: On a line that is not a JSON object.
    """
    with open(path, encoding="utf-8") as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON on line {line_num}: {e}") from e
            if not isinstance(record, dict):
                raise ValueError(f"Line {line_num} is not a JSON object")
            yield line_num, record


def write_jsonl(path: Path | str, records: Iterable[dict[str, Any]]) -> int:
    """Write records to a JSONL file and return how many were written."""
    count = 0
    with open(path, "w", encoding="utf-8") as f:
        for record in records:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")
            count += 1
    return count
