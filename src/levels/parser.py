"""
Level Parser - Reads plain-text level collections and compact JSON records.

Plain-text collections hold levels as blocks of rows drawn with the usual
characters, separated by blank lines or metadata lines:

    Author: Someone
    URL: https://example.org

    ####
    # .#
    #  ###
    #*@  #
    #  $ #
    #  ###
    ####
    Title: First

Header lines before the first level (Author, E-mail, URL) apply to every
level. Metadata lines directly after a level's rows belong to that level;
a Title or Author line on its own before a level belongs to the next one.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from .level import LevelData, LevelFormatError

logger = logging.getLogger(__name__)

# A level row: only level characters, and at least one wall
_ROW_PATTERN = re.compile(r"^[#@+$*. _-]*#[#@+$*. _-]*$")
_META_PATTERN = re.compile(r"^([A-Za-z][A-Za-z -]*):\s*(.*)$")

# Metadata keys -> LevelData field names
_META_FIELDS = {
    "title": "title",
    "author": "author",
    "e-mail": "email",
    "email": "email",
    "url": "url",
}

# Alternate floor characters normalised to a space
_FLOOR_CHARS = str.maketrans({"-": " ", "_": " "})


def normalize_rows(lines: Iterable[str]) -> List[str]:
    """
    Turn raw level lines into a rectangular row list.

    Alternate floor characters become spaces, rows are right-padded to the
    widest row, and rows with nothing but floor are dropped.

    Args:
        lines: Raw level lines

    Returns:
        Normalised rows (may be empty)
    """
    rows = [line.rstrip("\r\n").translate(_FLOOR_CHARS) for line in lines]
    width = max((len(row) for row in rows), default=0)
    return [row.ljust(width) for row in rows if row.strip()]


def parse_collection(text: str, collection: str = "") -> List[LevelData]:
    """
    Parse a plain-text level collection.

    Args:
        text: File contents
        collection: Collection name attached to each level

    Returns:
        Levels in file order (blocks that normalise to nothing are skipped)
    """
    defaults: Dict[str, str] = {}
    pending: Dict[str, str] = {}
    entries: List[Dict[str, Any]] = []
    block: List[str] = []
    open_entry: Optional[Dict[str, Any]] = None

    def close_block() -> Optional[Dict[str, Any]]:
        nonlocal block, pending
        if not block:
            return None
        entry = {"rows": block, **pending}
        entries.append(entry)
        block = []
        pending = {}
        return entry

    for raw in text.splitlines():
        line = raw.rstrip()

        if line and _ROW_PATTERN.match(raw.rstrip("\r\n")):
            block.append(raw.rstrip("\r\n"))
            continue

        # Any non-row line ends the current block
        closed = close_block()
        if closed is not None:
            open_entry = closed

        if not line:
            open_entry = None
            continue

        match = _META_PATTERN.match(line.strip())
        if not match:
            continue
        field = _META_FIELDS.get(match.group(1).strip().lower())
        if field is None:
            continue
        value = match.group(2).strip()

        if open_entry is not None and field not in open_entry:
            open_entry[field] = value
        elif not entries and field != "title":
            defaults[field] = value
        else:
            pending[field] = value

    close_block()

    levels = []
    for entry in entries:
        rows = normalize_rows(entry.pop("rows"))
        if not rows:
            continue
        fields = {**defaults, **entry}
        levels.append(LevelData(rows=tuple(rows), collection=collection, **fields))

    logger.debug(f"Parsed {len(levels)} levels from collection '{collection}'")
    return levels


def decode_records(records: Iterable[Dict[str, Any]], collection: str = "") -> List[LevelData]:
    """
    Decode compact JSON level records.

    Args:
        records: Iterable of {t, a, e, u, l} dicts
        collection: Collection name attached to each level

    Returns:
        Decoded levels

    Raises:
        LevelFormatError: If a record has no level data
    """
    return [LevelData.from_record(record, collection) for record in records]


def encode_records(levels: Iterable[LevelData]) -> List[Dict[str, str]]:
    """Encode levels as compact JSON records."""
    return [level.to_record() for level in levels]


def load_levels(path: Union[str, Path]) -> List[LevelData]:
    """
    Load a level collection from disk.

    ``.json`` files are read as compact records, anything else as a
    plain-text collection. The file stem becomes the collection name.

    Args:
        path: Collection file

    Returns:
        Levels in file order

    Raises:
        LevelFormatError: If the file cannot be read or decoded
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise LevelFormatError(f"Cannot read level file {path}: {e}") from e

    if path.suffix.lower() == ".json":
        try:
            records = json.loads(text)
        except json.JSONDecodeError as e:
            raise LevelFormatError(f"Invalid JSON in {path}: {e}") from e
        if not isinstance(records, list):
            raise LevelFormatError(f"Expected a list of level records in {path}")
        levels = decode_records(records, collection=path.stem)
    else:
        levels = parse_collection(text, collection=path.stem)

    logger.info(f"Loaded {len(levels)} levels from {path}")
    return levels
