"""Command-line interface; run with ``python -m sheetverify.cli``."""
