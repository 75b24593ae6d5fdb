from __future__ import annotations

import re
from dataclasses import dataclass

"""CellReference model for A1 notation.

A reference such as ``C20`` is split into its letter run (column) and digit
run (row) and converted to zero-based indices. Only the first letter of the
column run is decoded: ``AA42`` resolves to column 0, the same as ``A42``.
Multi-letter columns beyond that are not base-26 decoded.
"""

__all__ = [
    "CellReference",
    "InvalidReference",
    "parse_cell_reference",
    "to_a1",
]

# ASCII only; \d would also accept other Unicode digits
_A1_PATTERN = re.compile(r"([A-Za-z]+)([0-9]+)")


class InvalidReference(ValueError):
    """Raised when text is not letters followed by digits."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Invalid cell reference: {text}")
        self.text = text


@dataclass(frozen=True)
class CellReference:
    """A parsed A1 coordinate.

    Attributes:
        original: Text exactly as the user typed it (used in report lines)
        column: Zero-based column index
        row: Zero-based row index (may be -1 for ``A0``)
    """
    original: str
    column: int
    row: int


def _column_letter_to_index(letters: str) -> int:
    return ord(letters[0].upper()) - ord("A")


def parse_cell_reference(text: str) -> CellReference:
    """Parse ``text`` ("C1", "e40") into a CellReference.

    Raises:
        InvalidReference: text is not one-or-more letters then one-or-more digits
    """
    match = _A1_PATTERN.fullmatch(text or "")
    if match is None:
        raise InvalidReference(text)
    letters, digits = match.groups()
    return CellReference(
        original=text,
        column=_column_letter_to_index(letters),
        row=int(digits) - 1,  # 1-based on input
    )


def to_a1(column: int, row: int) -> str:
    """Render zero-based indices back to A1 notation (single-letter columns)."""
    if not 0 <= column < 26:
        raise ValueError(f"column index outside A-Z: {column}")
    return f"{chr(ord('A') + column)}{row + 1}"
