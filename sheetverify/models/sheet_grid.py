from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

"""SheetGrid model: one sheet of a spreadsheet snapshot.

A grid is a row-major list of rows. Rows may have different lengths; trailing
empty cells are simply absent. A cell is ``None``, a scalar display value, or
a FormulaCell holding the written formula and its last evaluated value.
"""

__all__ = [
    "Cell",
    "CellLookupResult",
    "ColumnOutOfBounds",
    "Found",
    "FormulaCell",
    "RowOutOfBounds",
    "SheetGrid",
]


@dataclass(frozen=True)
class FormulaCell:
    formula: str
    value: Any = None


Cell = Union[None, str, int, float, bool, FormulaCell]


def _cell_from_json(raw: Any) -> Cell:
    if isinstance(raw, Mapping) and "formula" in raw:
        return FormulaCell(formula=raw.get("formula") or "", value=raw.get("value"))
    return raw


@dataclass(frozen=True)
class SheetGrid:
    rows: list[list[Cell]] = field(default_factory=list)

    @classmethod
    def from_json(cls, sheet_data: Mapping[str, Any] | None) -> SheetGrid:
        """Build a grid from one snapshot sheet entry (``{rows, charts}``)."""
        raw_rows: Sequence[Any] = (sheet_data or {}).get("rows") or []
        rows = [[_cell_from_json(c) for c in (raw or [])] for raw in raw_rows]
        return cls(rows=rows)


@dataclass(frozen=True)
class RowOutOfBounds:
    reason: str = "Row out of bounds"


@dataclass(frozen=True)
class ColumnOutOfBounds:
    reason: str = "Column out of bounds"


@dataclass(frozen=True)
class Found:
    value: Cell
    is_empty: bool
    kind: str  # "formula" or the scalar type name


CellLookupResult = Union[RowOutOfBounds, ColumnOutOfBounds, Found]
