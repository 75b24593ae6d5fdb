from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from .verification_record import VerificationKind

"""Outcome models for the verification pipeline."""

__all__ = [
    "OutcomeStatus",
    "VerificationOutcome",
    "VerificationSummary",
]


class OutcomeStatus(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"
    ERROR = "ERROR"  # unparsable cell name or coordinate outside the grid


@dataclass(frozen=True)
class VerificationOutcome:
    index: int  # position in cellsToVerify
    cell: str
    kind: VerificationKind
    status: OutcomeStatus
    expected: str
    actual: str | None = None  # None when the cell could not be resolved
    message: str = ""

    def render(self) -> str:
        if self.status is OutcomeStatus.ERROR:
            return f"{self.status.value} {self.cell}: {self.message}"
        line = f"{self.status.value} {self.cell} ({self.kind.value}) expected={self.expected!r}"
        if self.status is OutcomeStatus.FAIL:
            line += f" actual={self.actual!r}"
        return line


@dataclass(frozen=True)
class VerificationSummary:
    checks: int
    passed: int
    failed: int
    errors: int

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[VerificationOutcome]) -> VerificationSummary:
        outcomes = list(outcomes)
        return cls(
            checks=len(outcomes),
            passed=sum(1 for o in outcomes if o.status is OutcomeStatus.PASS),
            failed=sum(1 for o in outcomes if o.status is OutcomeStatus.FAIL),
            errors=sum(1 for o in outcomes if o.status is OutcomeStatus.ERROR),
        )

    @property
    def all_passed(self) -> bool:
        return self.passed == self.checks
