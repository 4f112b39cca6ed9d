"""
Tests for level ingestion

Covers the run-length row codec, plain-text collection parsing with
metadata, compact JSON records and loading collections from disk.

Usage:
    pytest tests/test_levels.py
"""

import json
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.levels import (
    LevelData,
    LevelFormatError,
    TUTORIAL_LEVEL,
    compress_row,
    compress_rows,
    decode_records,
    decompress_row,
    decompress_rows,
    encode_records,
    load_levels,
    normalize_rows,
    parse_collection,
)
from src.solver import Cell, solve


COLLECTION = """\
Author: Someone
URL: https://example.org

#####
#.$@#
#####
Title: First

Title: Second
######
#.$ @#
######
"""


def test_compress_row():
    assert compress_row("#####") == "5#"
    assert compress_row("#  $") == "#2 $"
    assert compress_row("#.$@#") == "#.$@#"
    assert compress_row("") == ""


def test_decompress_row():
    assert decompress_row("5#") == "#####"
    assert decompress_row("#2 $") == "#  $"
    assert decompress_row("12#") == "#" * 12
    # Trailing count without a character is dropped
    assert decompress_row("#3") == "#"


def test_compress_rows():
    rows = ["#####", "#.$@#", "#####"]
    assert compress_rows(rows) == "5#|#.$@#|5#"
    assert decompress_rows("5#|#.$@#|5#") == rows


def test_normalize_rows():
    rows = normalize_rows(["####", "#-@#", "    ", "#.$###"])
    assert rows == ["####  ", "# @#  ", "#.$###"]


def test_parse_collection():
    """Header metadata applies to every level, trailing metadata to its own."""
    levels = parse_collection(COLLECTION, collection="sample")
    assert len(levels) == 2

    first, second = levels
    assert first.rows == ("#####", "#.$@#", "#####")
    assert first.title == "First"
    assert first.author == "Someone"
    assert first.url == "https://example.org"
    assert first.collection == "sample"

    assert second.title == "Second"
    assert second.author == "Someone"
    assert second.width == 6
    assert second.height == 3


def test_parse_collection_without_metadata():
    text = "####\n#@$.#\n####\n\n\n#####\n#.$@#\n#####\n"
    levels = parse_collection(text)
    assert len(levels) == 2
    assert levels[0].title == ""
    assert levels[0].rows[0] == "#### "
    assert levels[0].display_name == "Untitled"


def test_parsed_levels_are_solvable():
    for level in parse_collection(COLLECTION):
        assert solve("bfs", level.rows).is_solved


def test_level_grid():
    grid = TUTORIAL_LEVEL.grid
    assert grid[3][1] is Cell.ACTOR
    assert TUTORIAL_LEVEL.display_name == "Tutorial"


def test_record_round_trip():
    level = LevelData(rows=("#####", "#.$@#", "#####"), title="One", author="Me")
    record = level.to_record()
    assert record == {"t": "One", "a": "Me", "e": "", "u": "", "l": "5#|#.$@#|5#"}
    assert LevelData.from_record(record) == level
    assert level.display_name == "One (Me)"


def test_record_without_level_data():
    with pytest.raises(LevelFormatError):
        LevelData.from_record({"t": "Empty"})
    with pytest.raises(LevelFormatError):
        decode_records([{"l": "5#"}, "not a record"])


def test_load_text_collection(tmp_path):
    path = tmp_path / "sample.txt"
    path.write_text(COLLECTION, encoding="utf-8")

    levels = load_levels(path)
    assert [level.title for level in levels] == ["First", "Second"]
    assert levels[0].collection == "sample"


def test_load_json_records(tmp_path):
    levels = parse_collection(COLLECTION)
    path = tmp_path / "sample.json"
    path.write_text(json.dumps(encode_records(levels)), encoding="utf-8")

    loaded = load_levels(path)
    assert [level.rows for level in loaded] == [level.rows for level in levels]
    assert loaded[1].title == "Second"


@pytest.mark.parametrize("name, content", [
    ("broken.json", "{not json"),
    ("object.json", '{"l": "5#"}'),
])
def test_load_invalid_json(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    with pytest.raises(LevelFormatError):
        load_levels(path)


def test_load_missing_file(tmp_path):
    with pytest.raises(LevelFormatError, match="Cannot read"):
        load_levels(tmp_path / "missing.txt")
