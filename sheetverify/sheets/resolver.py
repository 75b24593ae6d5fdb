from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..models.cell_reference import CellReference, InvalidReference, parse_cell_reference
from ..models.sheet_grid import (
    Cell,
    CellLookupResult,
    ColumnOutOfBounds,
    FormulaCell,
    Found,
    RowOutOfBounds,
    SheetGrid,
)

"""Cell lookup and report formatting over a SheetGrid.

Out-of-bounds coordinates are a normal result, not an error: a sheet may not
yet hold data where a check points.
"""

__all__ = [
    "display_text",
    "format_lookup",
    "format_lookups",
    "lookup_cell",
]

_SCALAR_KINDS = {
    type(None): "null",
    str: "string",
    bool: "boolean",
    int: "number",
    float: "number",
}


def _kind_of(value: Cell) -> str:
    if isinstance(value, FormulaCell):
        return "formula"
    return _SCALAR_KINDS.get(type(value), type(value).__name__)


def lookup_cell(grid: SheetGrid | Sequence[Sequence[Cell]], column: int, row: int) -> CellLookupResult:
    """Bounds-checked lookup; no clamping and no negative wraparound."""
    rows = grid.rows if isinstance(grid, SheetGrid) else grid
    if row < 0 or row >= len(rows):
        return RowOutOfBounds()
    cells = rows[row] or []
    # a short row counts as out of bounds even when other rows are longer
    if column < 0 or column >= len(cells):
        return ColumnOutOfBounds()
    value = cells[column]
    return Found(value=value, is_empty=value is None or value == "", kind=_kind_of(value))


def display_text(value: Cell) -> str:
    """Displayed text of a cell: the evaluated value for formulas, "" for empty."""
    if isinstance(value, FormulaCell):
        value = value.value
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def format_lookup(ref: CellReference, result: CellLookupResult) -> str:
    if isinstance(result, (RowOutOfBounds, ColumnOutOfBounds)):
        return f"{ref.original}: [ERROR] {result.reason}"
    if result.is_empty:
        return f"{ref.original}: <empty>"
    value = result.value
    if isinstance(value, FormulaCell) and value.formula:
        evaluated = "null" if value.value is None else display_text(value)
        return f"{ref.original}: {value.formula} (evaluates to: {evaluated})"
    return f"{ref.original}: {display_text(value)}"


def format_lookups(grid: SheetGrid, texts: Iterable[str]) -> list[str]:
    """One report line per input text, in order; parse failures included."""
    lines: list[str] = []
    for text in texts:
        try:
            ref = parse_cell_reference(text)
        except InvalidReference as e:
            lines.append(f"{text}: [ERROR] {e}")
            continue
        lines.append(format_lookup(ref, lookup_cell(grid, ref.column, ref.row)))
    return lines
