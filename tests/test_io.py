"""Tests for response and result file helpers."""

import json
from pathlib import Path

import pytest

from clinscore.io import iter_records, load_document, write_jsonl


class TestLoadDocument:
    """Tests for load_document."""

    def test_json(self, tmp_path: Path) -> None:
        path = tmp_path / "responses.json"
        path.write_text('{"q1": 2}')
        assert load_document(path) == {"q1": 2}

    def test_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "responses.yml"
        path.write_text("q1: 2\nq2: [A, B]\n")
        assert load_document(path) == {"q1": 2, "q2": ["A", "B"]}

    def test_rejects_non_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "responses.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError, match="Expected a mapping"):
            load_document(path)


class TestIterRecords:
    """Tests for iter_records."""

    def test_skips_blank_lines(self, tmp_path: Path) -> None:
        path = tmp_path / "in.jsonl"
        path.write_text('{"id": "a"}\n\n{"id": "b"}\n')
        assert list(iter_records(path)) == [(1, {"id": "a"}), (3, {"id": "b"})]

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "in.jsonl"
        path.write_text('{"id": "a"}\nnot json\n')
        with pytest.raises(ValueError, match="line 2"):
            list(iter_records(path))

    def test_non_object(self, tmp_path: Path) -> None:
        path = tmp_path / "in.jsonl"
        path.write_text("[1]\n")
        with pytest.raises(ValueError, match="Line 1 is not a JSON object"):
            list(iter_records(path))


class TestWriteJsonl:
    """Tests for write_jsonl."""

    def test_writes_one_record_per_line(self, tmp_path: Path) -> None:
        path = tmp_path / "out.jsonl"
        count = write_jsonl(path, [{"id": "a"}, {"id": "b", "note": "café"}])

        assert count == 2
        lines = path.read_text(encoding="utf-8").splitlines()
        assert [json.loads(line) for line in lines] == [
            {"id": "a"},
            {"id": "b", "note": "café"},
        ]
        assert "café" in lines[1]

    def test_consumes_generators(self, tmp_path: Path) -> None:
        path = tmp_path / "out.jsonl"
        count = write_jsonl(path, ({"n": n} for n in range(3)))

        assert count == 3
        assert path.read_text().count("\n") == 3

    def test_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "out.jsonl"
        assert write_jsonl(path, []) == 0
        assert path.read_text() == ""
