from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..models.sheet_grid import SheetGrid

"""Spreadsheet snapshot I/O.

Snapshot file (JSON)::

    {"<sheet title>": {"rows": [[cell, ...], ...], "charts": [...]}, ...}

where a cell is null, a display string, or ``{"formula": ..., "value": ...}``.
``charts`` is carried through untouched and never read here.

``snapshot_from_sheets_api`` builds that document from a Google Sheets API v4
spreadsheet resource fetched with ``includeGridData=true``.
"""

__all__ = [
    "SnapshotError",
    "load_snapshot",
    "read_api_response",
    "select_sheet",
    "snapshot_from_sheets_api",
    "write_snapshot",
]

logger = logging.getLogger(__name__)


class SnapshotError(Exception):
    pass


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise SnapshotError(f"file not found: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SnapshotError(f"invalid json in {path}: {e}") from e


def read_api_response(path: Path) -> Mapping[str, Any]:
    """Read a saved spreadsheets.get response (includeGridData=true)."""
    data = _read_json(path)
    if not isinstance(data, Mapping) or "sheets" not in data:
        raise SnapshotError(f"not a Sheets API spreadsheet resource: {path}")
    return data


def load_snapshot(path: Path) -> dict[str, SheetGrid]:
    """Load a snapshot file into grids keyed by sheet title (file order kept)."""
    data = _read_json(path)
    if not isinstance(data, Mapping):
        raise SnapshotError(f"snapshot must be a JSON object keyed by sheet name: {path}")
    for name, sheet in data.items():
        _check_sheet_shape(name, sheet)
    return {str(name): SheetGrid.from_json(sheet) for name, sheet in data.items()}


def _check_sheet_shape(name: str, sheet: Any) -> None:
    if sheet is None:
        return
    if not isinstance(sheet, Mapping):
        raise SnapshotError(f"sheet {name!r}: expected an object with a 'rows' list")
    rows = sheet.get("rows")
    if rows is None:
        return
    if not isinstance(rows, list):
        raise SnapshotError(f"sheet {name!r}: 'rows' must be a list")
    for i, row in enumerate(rows):
        if row is not None and not isinstance(row, list):
            raise SnapshotError(f"sheet {name!r}: row {i + 1} must be a list")


def select_sheet(snapshot: Mapping[str, SheetGrid], name: str | None = None) -> tuple[str, SheetGrid]:
    """Pick ``name``, or the first sheet when no name is given."""
    if not snapshot:
        raise SnapshotError("no sheets found in the spreadsheet data")
    if name is None:
        name = next(iter(snapshot))
    elif name not in snapshot:
        raise SnapshotError(f"sheet not found: {name!r} (available: {', '.join(snapshot)})")
    return name, snapshot[name]


def _convert_cell(cell: Mapping[str, Any] | None) -> Any:
    if not cell:
        return None
    formula = (cell.get("userEnteredValue") or {}).get("formulaValue")
    value = cell.get("formattedValue")
    if formula:
        return {"formula": formula, "value": value}
    return value or None


def snapshot_from_sheets_api(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Convert a Sheets API spreadsheet resource into a snapshot document.

    Raises SnapshotError when the resource does not have the sheets/data/rowData shape.
    """
    try:
        return _convert_sheets(payload)
    except (AttributeError, KeyError, TypeError) as e:
        raise SnapshotError(f"malformed Sheets API response: {e!r}") from e


def _convert_sheets(payload: Mapping[str, Any]) -> dict[str, Any]:
    output: dict[str, Any] = {}
    for sheet in payload.get("sheets") or []:
        title = sheet["properties"]["title"]
        rows = []
        for grid in sheet.get("data") or []:
            for row in grid.get("rowData") or []:
                rows.append([_convert_cell(c) for c in (row.get("values") or [])])
        charts = [
            {"chartId": chart.get("chartId"), "spec": chart.get("spec")}
            for chart in sheet.get("charts") or []
        ]
        output[title] = {"rows": rows, "charts": charts}
        logger.debug(f"sheet {title!r}: rows={len(rows)} charts={len(charts)}")
    return output


def write_snapshot(path: Path, snapshot: Mapping[str, Any]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(snapshot, indent=2, ensure_ascii=False), encoding="utf-8")
    return path
