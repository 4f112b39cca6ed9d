"""
Levels Module

Level ingestion for the solver: plain-text collections, compact JSON
records with run-length compressed rows, and a built-in tutorial level.

Usage:
    from src.levels import load_levels, TUTORIAL_LEVEL

    levels = load_levels("microban.txt")
    grid = levels[0].grid

    # Compact record form
    record = levels[0].to_record()   # {"t": ..., "l": "5#|#.$@#|5#", ...}
"""

# Public API - Data types
from .level import LevelData, LevelFormatError, TUTORIAL_LEVEL

# Public API - Codec
from .codec import (
    compress_row,
    decompress_row,
    compress_rows,
    decompress_rows,
)

# Public API - Parsing
from .parser import (
    normalize_rows,
    parse_collection,
    decode_records,
    encode_records,
    load_levels,
)

__all__ = [
    # Data types
    "LevelData",
    "LevelFormatError",
    "TUTORIAL_LEVEL",
    # Codec
    "compress_row",
    "decompress_row",
    "compress_rows",
    "decompress_rows",
    # Parsing
    "normalize_rows",
    "parse_collection",
    "decode_records",
    "encode_records",
    "load_levels",
]
