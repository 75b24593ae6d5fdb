from __future__ import annotations

import logging
from collections.abc import Iterable

from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.cell_reference import InvalidReference, parse_cell_reference
from ..models.sheet_grid import ColumnOutOfBounds, FormulaCell, RowOutOfBounds, SheetGrid
from ..models.verification_record import VerificationKind, VerificationRecord
from ..models.verification_result import OutcomeStatus, VerificationOutcome
from ..sheets.resolver import display_text, lookup_cell

"""Verification pipeline.

Each configured record is resolved against one sheet of a snapshot and its
active payload compared with what the sheet holds:

- value:    expected text vs. the displayed (evaluated) value
- function: expected text vs. the written formula ("" for plain cells)

Both sides are compared after trimming surrounding whitespace. A cell name
that does not parse, or a coordinate outside the grid, is an ERROR outcome
for that record only; the remaining records are still checked.
"""

__all__ = [
    "record_failures",
    "verify_record",
    "verify_records",
]

logger = logging.getLogger(__name__)


def _actual_text(record: VerificationRecord, value: object) -> str:
    if record.kind is VerificationKind.FUNCTION:
        return value.formula if isinstance(value, FormulaCell) else ""
    return display_text(value)


def verify_record(grid: SheetGrid, index: int, record: VerificationRecord) -> VerificationOutcome:
    def outcome(status: OutcomeStatus, actual: str | None = None, message: str = "") -> VerificationOutcome:
        return VerificationOutcome(
            index=index,
            cell=record.cell_name,
            kind=record.kind,
            status=status,
            expected=record.expected,
            actual=actual,
            message=message,
        )

    try:
        ref = parse_cell_reference(record.cell_name)
    except InvalidReference as e:
        return outcome(OutcomeStatus.ERROR, message=str(e))

    result = lookup_cell(grid, ref.column, ref.row)
    if isinstance(result, (RowOutOfBounds, ColumnOutOfBounds)):
        return outcome(OutcomeStatus.ERROR, message=result.reason)

    actual = _actual_text(record, result.value)
    if actual.strip() == record.expected.strip():
        return outcome(OutcomeStatus.PASS, actual)
    return outcome(OutcomeStatus.FAIL, actual)


def verify_records(grid: SheetGrid, records: Iterable[VerificationRecord]) -> list[VerificationOutcome]:
    outcomes = []
    for index, record in enumerate(records):
        o = verify_record(grid, index, record)
        logger.debug(f"check[{index}] {record.cell_name!r} -> {o.status.value}")
        outcomes.append(o)
    return outcomes


def record_failures(outcomes: Iterable[VerificationOutcome], buffer: ErrorLogBuffer) -> int:
    """Buffer every non-passing outcome; returns how many were added."""
    added = 0
    for o in outcomes:
        if o.status is not OutcomeStatus.PASS:
            buffer.append(ErrorRecord.from_outcome(o))
            added += 1
    return added
