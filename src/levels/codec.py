"""
Level Codec - Run-length compression of level rows.

Compressed form: each row is run-length encoded (a run such as "#####"
becomes "5#"), rows are joined with "|". A run count always precedes the
character it repeats; single characters carry no count.

Example:
    compress_rows(["#####", "#.$@#", "#####"]) == "5#|#.$@#|5#"
"""

from typing import List, Sequence

ROW_SEPARATOR = "|"


def compress_row(row: str) -> str:
    """
    Run-length encode a single row.

    Args:
        row: Level row

    Returns:
        Encoded row
    """
    if not row:
        return ""

    parts = []
    current = row[0]
    count = 1
    for char in row[1:]:
        if char == current:
            count += 1
            continue
        parts.append(f"{count}{current}" if count > 1 else current)
        current = char
        count = 1
    parts.append(f"{count}{current}" if count > 1 else current)
    return "".join(parts)


def decompress_row(encoded: str) -> str:
    """
    Expand a run-length encoded row.

    A trailing count with no character after it is ignored.

    Args:
        encoded: Encoded row

    Returns:
        Expanded row
    """
    out = []
    count = ""
    for char in encoded:
        if char.isdigit():
            count += char
            continue
        out.append(char * (int(count) if count else 1))
        count = ""
    return "".join(out)


def compress_rows(rows: Sequence[str]) -> str:
    """Encode level rows into the compressed single-string form."""
    return ROW_SEPARATOR.join(compress_row(row) for row in rows)


def decompress_rows(encoded: str) -> List[str]:
    """Decode the compressed single-string form into level rows."""
    return [decompress_row(part) for part in encoded.split(ROW_SEPARATOR)]
