"""
Level Dataclasses

Shared data structures for decoded levels.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from src.solver import Grid, parse_grid

from .codec import compress_rows, decompress_rows


class LevelFormatError(ValueError):
    """A level file or record could not be decoded."""


@dataclass(frozen=True)
class LevelData:
    """
    One decoded level plus its collection metadata.

    Attributes:
        rows: Level rows, all padded to the same width
        title: Level title (may be empty)
        author: Level author (may be empty)
        email: Author contact (may be empty)
        url: Collection URL (may be empty)
        collection: Name of the collection the level came from
    """
    rows: Tuple[str, ...]
    title: str = ""
    author: str = ""
    email: str = ""
    url: str = ""
    collection: str = ""

    @property
    def grid(self) -> Grid:
        """Parsed grid for the solver."""
        return parse_grid(self.rows)

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def display_name(self) -> str:
        name = self.title or "Untitled"
        return f"{name} ({self.author})" if self.author else name

    def to_record(self) -> Dict[str, str]:
        """
        Encode as a compact JSON record.

        Returns:
            Dict with keys t (title), a (author), e (email), u (url) and
            l (compressed rows)
        """
        return {
            "t": self.title,
            "a": self.author,
            "e": self.email,
            "u": self.url,
            "l": compress_rows(self.rows),
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any], collection: str = "") -> 'LevelData':
        """
        Decode a compact JSON record.

        Args:
            record: Dict with at least an "l" key
            collection: Collection name to attach

        Returns:
            LevelData instance

        Raises:
            LevelFormatError: If the record has no level data
        """
        encoded = record.get("l") if isinstance(record, dict) else None
        if not encoded or not isinstance(encoded, str):
            raise LevelFormatError(f"Level record has no level data: {record!r}")
        return cls(
            rows=tuple(decompress_rows(encoded)),
            title=record.get("t", ""),
            author=record.get("a", ""),
            email=record.get("e", ""),
            url=record.get("u", ""),
            collection=collection,
        )


TUTORIAL_LEVEL = LevelData(
    rows=(
        "#####",
        "#...#",
        "#$$$#",
        "#@  #",
        "#####",
    ),
    title="Tutorial",
)
