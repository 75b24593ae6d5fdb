from __future__ import annotations

from dataclasses import dataclass, field

from .verification_record import VerificationCollection

"""Config document model.

The persisted document is ``{spreadsheetURL, cellsToVerify}``. In memory the
records are kept in their full normalized form; the loader applies
``normalize`` on the way in and ``canonicalize`` on the way out.
"""


@dataclass(frozen=True)
class VerificationConfig:
    """Root configuration object: the sheet under test and its checks."""
    spreadsheet_url: str = ""
    cells_to_verify: VerificationCollection = field(default_factory=tuple)
