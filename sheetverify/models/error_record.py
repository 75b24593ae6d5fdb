from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

from .verification_result import VerificationOutcome

"""ErrorRecord model for the verification failure log.

One JSON Lines entry per check that did not pass. The key set is fixed:
timestamp, index, cell, kind, status, expected, actual, message.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured failure record.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        index: Position of the check in cellsToVerify
        cell: Cell name as configured
        kind: "value" or "function"
        status: FAIL or ERROR
        expected: Expected text of the active payload
        actual: Text found in the snapshot; None when the cell was not resolved
        message: Error reason (empty for plain mismatches)
    """
    timestamp: str
    index: int
    cell: str
    kind: str
    status: str
    expected: str
    actual: str | None
    message: str

    @staticmethod
    def from_outcome(outcome: VerificationOutcome) -> ErrorRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            index=outcome.index,
            cell=outcome.cell,
            kind=outcome.kind.value,
            status=outcome.status.value,
            expected=outcome.expected,
            actual=outcome.actual,
            message=outcome.message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
