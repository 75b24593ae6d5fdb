from __future__ import annotations

import re
from urllib.parse import urlparse

"""Google Sheets URL helpers."""

__all__ = [
    "embed_url",
    "extract_spreadsheet_id",
]

_ID_PATTERN = re.compile(r"/d/([a-zA-Z0-9_-]+)")
_SHEETS_ID_PATTERN = re.compile(r"/spreadsheets/d/([a-zA-Z0-9_-]+)")
_GID_PATTERN = re.compile(r"[#&]gid=([0-9]+)")


def extract_spreadsheet_id(url: str) -> str | None:
    """Return the document id from ``.../d/<id>/...``, or None."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return None
    if not parsed.scheme or not parsed.netloc:
        return None
    match = _ID_PATTERN.search(parsed.path)
    return match.group(1) if match else None


def embed_url(url: str) -> str:
    """Editor URL with minimal chrome for previewing a sheet.

    Non-Sheets URLs are returned unchanged.
    """
    if not url:
        return ""
    match = _SHEETS_ID_PATTERN.search(url)
    if match is None:
        return url
    params = []
    gid = _GID_PATTERN.search(url)
    if gid:
        params.append(f"gid={gid.group(1)}")
    params.append("rm=minimal")
    return f"https://docs.google.com/spreadsheets/d/{match.group(1)}/edit?{'&'.join(params)}"
