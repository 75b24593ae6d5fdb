from __future__ import annotations

from ..models.verification_result import VerificationSummary

"""SUMMARY line rendering for the verify command."""


def render_summary_line(summary: VerificationSummary) -> str:
    """Render ``SUMMARY checks=<n> passed=<p> failed=<f> errors=<e>``.

    Examples:
        >>> render_summary_line(VerificationSummary(checks=3, passed=2, failed=1, errors=0))
        'SUMMARY checks=3 passed=2 failed=1 errors=0'
    """
    return (
        f"SUMMARY checks={summary.checks} "
        f"passed={summary.passed} "
        f"failed={summary.failed} "
        f"errors={summary.errors}"
    )
