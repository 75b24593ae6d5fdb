"""Domain models for the sheetverify toolset.

Cell references and grids on the spreadsheet side, verification records and
the config document on the configuration side.
"""

from .cell_reference import CellReference, InvalidReference, parse_cell_reference, to_a1
from .config_models import VerificationConfig
from .sheet_grid import (
    CellLookupResult,
    ColumnOutOfBounds,
    FormulaCell,
    Found,
    RowOutOfBounds,
    SheetGrid,
)
from .verification_record import (
    IndexOutOfRange,
    VerificationCollection,
    VerificationKind,
    VerificationRecord,
    append_record,
    canonicalize,
    edit_field,
    normalize,
    remove_at,
    set_kind,
)
from .verification_result import OutcomeStatus, VerificationOutcome, VerificationSummary

__all__ = [
    # Spreadsheet side
    "CellReference",
    "InvalidReference",
    "parse_cell_reference",
    "to_a1",
    "SheetGrid",
    "FormulaCell",
    "CellLookupResult",
    "RowOutOfBounds",
    "ColumnOutOfBounds",
    "Found",
    # Configuration side
    "VerificationConfig",
    "VerificationKind",
    "VerificationRecord",
    "VerificationCollection",
    "IndexOutOfRange",
    "normalize",
    "canonicalize",
    "set_kind",
    "edit_field",
    "append_record",
    "remove_at",
    # Verification results
    "OutcomeStatus",
    "VerificationOutcome",
    "VerificationSummary",
]
