"""Cell verification toolset for Google Sheets snapshots."""

__version__ = "0.1.0"
