from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv, set_key

from sheetverify.config.loader import ConfigError, load_config, save_config
from sheetverify.logging.error_log import ErrorLogBuffer
from sheetverify.logging.init import log_summary, setup_logging
from sheetverify.models.config_models import VerificationConfig
from sheetverify.models.verification_record import (
    IndexOutOfRange,
    VerificationCollection,
    VerificationKind,
    append_record,
    edit_field,
    remove_at,
)
from sheetverify.models.verification_result import VerificationSummary
from sheetverify.services.summary import render_summary_line
from sheetverify.services.verify import record_failures, verify_records
from sheetverify.sheets.resolver import format_lookups
from sheetverify.sheets.snapshot import (
    SnapshotError,
    load_snapshot,
    read_api_response,
    select_sheet,
    snapshot_from_sheets_api,
    write_snapshot,
)
from sheetverify.sheets.urls import embed_url, extract_spreadsheet_id

"""CLI entrypoint.

Commands:
- extract:   print the contents of named cells from a snapshot
- verify:    check every configured cell against a snapshot
- config:    show / edit the cells-to-verify document
- snapshot:  convert a downloaded Sheets API response into a snapshot file
- use-sheet: point GOOGLE_SHEET_ID in .env at a spreadsheet URL

Config path: --config, else $CONFIG_FILE, else ./config.yaml.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_VERIFY_FAILED = 2

DEFAULT_CONFIG = "config.yaml"
DEFAULT_SNAPSHOT = "spreadsheet.json"

logger = logging.getLogger("sheetverify.cli")


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env so that CONFIG_FILE / GOOGLE_SHEET_ID set there win."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _resolve_config_path(option: str | None) -> Path:
    return Path(option or os.getenv("CONFIG_FILE") or DEFAULT_CONFIG)


def _cmd_extract(args: argparse.Namespace) -> int:
    try:
        snapshot = load_snapshot(Path(args.snapshot))
        sheet_name, grid = select_sheet(snapshot, args.sheet)
    except SnapshotError as e:
        logger.error(f"snapshot: {e}")
        return EXIT_FATAL

    if len(snapshot) > 1:
        logger.info(f'Using sheet: "{sheet_name}" ({len(snapshot)} sheets available)')
    for line in format_lookups(grid, args.cells):
        print(line)
    return EXIT_SUCCESS


def _cmd_verify(args: argparse.Namespace) -> int:
    try:
        cfg = load_config(args.config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    try:
        sheet_name, grid = select_sheet(load_snapshot(Path(args.snapshot)), args.sheet)
    except SnapshotError as e:
        logger.error(f"snapshot: {e}")
        return EXIT_FATAL

    if not cfg.cells_to_verify:
        logger.warning("no cells configured")
    logger.info(f'Verifying {len(cfg.cells_to_verify)} cell(s) against sheet "{sheet_name}"')

    outcomes = verify_records(grid, cfg.cells_to_verify)
    for o in outcomes:
        print(o.render())

    summary = VerificationSummary.from_outcomes(outcomes)
    log_summary(render_summary_line(summary)[len("SUMMARY "):])

    buffer = ErrorLogBuffer()
    record_failures(outcomes, buffer)
    log_path = buffer.flush()
    if log_path is not None:
        logger.info(f"failure log: {log_path}")

    return EXIT_SUCCESS if summary.all_passed else EXIT_VERIFY_FAILED


def _edit_config(
    path: Path, edit: Callable[[VerificationConfig], VerificationConfig], done: str
) -> int:
    """One load -> edit -> save unit of work."""
    try:
        cfg = load_config(path, create_missing=True)
        save_config(path, edit(cfg))
    except (ConfigError, IndexOutOfRange, ValueError) as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    logger.info(done)
    return EXIT_SUCCESS


def _cmd_config_show(args: argparse.Namespace) -> int:
    try:
        cfg = load_config(args.config_path, create_missing=True)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    print(f"spreadsheetURL: {cfg.spreadsheet_url}")
    if cfg.spreadsheet_url:
        print(f"preview: {embed_url(cfg.spreadsheet_url)}")
    if not cfg.cells_to_verify:
        print("no cells configured")
    for i, r in enumerate(cfg.cells_to_verify):
        print(f"[{i}] {r.cell_name} {r.kind.value}: {r.expected}")
    return EXIT_SUCCESS


def _cmd_config_add(args: argparse.Namespace) -> int:
    def edit(cfg: VerificationConfig) -> VerificationConfig:
        return replace(cfg, cells_to_verify=append_record(cfg.cells_to_verify))

    return _edit_config(args.config_path, edit, "added empty value check")


def _payload_key(records: VerificationCollection, index: int) -> str:
    """Wire key of the active payload slot of records[index]."""
    if 0 <= index < len(records) and records[index].kind is VerificationKind.FUNCTION:
        return "expectedFunction"
    return "expectedValue"


def _cmd_config_set(args: argparse.Namespace) -> int:
    def edit(cfg: VerificationConfig) -> VerificationConfig:
        records = cfg.cells_to_verify
        field = _payload_key(records, args.index) if args.field == "expected" else args.field
        records = edit_field(records, args.index, field, args.value)
        return replace(cfg, cells_to_verify=records)

    return _edit_config(args.config_path, edit, f"[{args.index}] {args.field} updated")


def _cmd_config_kind(args: argparse.Namespace) -> int:
    def edit(cfg: VerificationConfig) -> VerificationConfig:
        records = edit_field(cfg.cells_to_verify, args.index, "verificationKind", args.kind)
        if args.expected is not None:
            records = edit_field(records, args.index, _payload_key(records, args.index), args.expected)
        if not records[args.index].expected and records[args.index].kind is VerificationKind.FUNCTION:
            # canonical form drops the kind; an empty formula reloads as a value check
            logger.warning(f"[{args.index}] function check has no expected formula yet")
        return replace(cfg, cells_to_verify=records)

    return _edit_config(args.config_path, edit, f"[{args.index}] kind set to {args.kind}")


def _cmd_config_remove(args: argparse.Namespace) -> int:
    def edit(cfg: VerificationConfig) -> VerificationConfig:
        return replace(cfg, cells_to_verify=remove_at(cfg.cells_to_verify, args.index))

    return _edit_config(args.config_path, edit, f"[{args.index}] removed")


def _cmd_config_url(args: argparse.Namespace) -> int:
    def edit(cfg: VerificationConfig) -> VerificationConfig:
        return replace(cfg, spreadsheet_url=args.url)

    return _edit_config(args.config_path, edit, "spreadsheetURL updated")


def _cmd_snapshot(args: argparse.Namespace) -> int:
    try:
        payload = read_api_response(Path(args.response))
        snapshot = snapshot_from_sheets_api(payload)
    except SnapshotError as e:
        logger.error(f"snapshot: {e}")
        return EXIT_FATAL
    try:
        out = write_snapshot(Path(args.output), snapshot)
    except OSError as e:
        logger.error(f"snapshot: cannot write {args.output}: {e}")
        return EXIT_FATAL
    logger.info(f"Sheet data saved to {out} ({len(snapshot)} sheet(s))")
    return EXIT_SUCCESS


def _cmd_use_sheet(args: argparse.Namespace) -> int:
    sheet_id = extract_spreadsheet_id(args.url)
    if sheet_id is None:
        logger.error(f"use-sheet: no spreadsheet id in url: {args.url}")
        return EXIT_FATAL
    env_path = Path(args.env_file)
    try:
        env_path.touch(exist_ok=True)
        set_key(str(env_path), "GOOGLE_SHEET_ID", sheet_id, quote_mode="never")
    except OSError as e:
        logger.error(f"use-sheet: cannot update {env_path}: {e}")
        return EXIT_FATAL
    logger.info(f"GOOGLE_SHEET_ID updated to {sheet_id}")
    return EXIT_SUCCESS


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="sheetverify", description="Spreadsheet cell verification tools")
    p.add_argument("--config", help="config YAML (default: $CONFIG_FILE or ./config.yaml)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    ex = sub.add_parser("extract", help="Print the contents of cells from a snapshot")
    ex.add_argument("snapshot", help="snapshot JSON file")
    ex.add_argument("cells", nargs="+", help="cell references, e.g. C1 C20 E40")
    ex.add_argument("--sheet", help="sheet name (default: first sheet)")
    ex.set_defaults(handler=_cmd_extract)

    ve = sub.add_parser("verify", help="Check configured cells against a snapshot")
    ve.add_argument("snapshot", nargs="?", default=DEFAULT_SNAPSHOT)
    ve.add_argument("--sheet", help="sheet name (default: first sheet)")
    ve.set_defaults(handler=_cmd_verify)

    co = sub.add_parser("config", help="Show or edit the cells-to-verify config")
    co_sub = co.add_subparsers(dest="action", required=True)
    co_sub.add_parser("show").set_defaults(handler=_cmd_config_show)
    co_sub.add_parser("add").set_defaults(handler=_cmd_config_add)
    cs = co_sub.add_parser("set")
    cs.add_argument("index", type=int)
    cs.add_argument("field", choices=["cellName", "expected"], help="expected: the active value/function slot")
    cs.add_argument("value")
    cs.set_defaults(handler=_cmd_config_set)
    ck = co_sub.add_parser("kind")
    ck.add_argument("index", type=int)
    ck.add_argument("kind", choices=["value", "function"])
    ck.add_argument("expected", nargs="?", help="expected text for the new kind")
    ck.set_defaults(handler=_cmd_config_kind)
    cr = co_sub.add_parser("remove")
    cr.add_argument("index", type=int)
    cr.set_defaults(handler=_cmd_config_remove)
    cu = co_sub.add_parser("url")
    cu.add_argument("url")
    cu.set_defaults(handler=_cmd_config_url)

    sn = sub.add_parser("snapshot", help="Convert a Sheets API response into a snapshot file")
    sn.add_argument("response", help="JSON of spreadsheets.get?includeGridData=true")
    sn.add_argument("-o", "--output", default=DEFAULT_SNAPSHOT)
    sn.set_defaults(handler=_cmd_snapshot)

    us = sub.add_parser("use-sheet", help="Write GOOGLE_SHEET_ID for a spreadsheet URL into .env")
    us.add_argument("url")
    us.add_argument("--env-file", default=".env")
    us.set_defaults(handler=_cmd_use_sheet)

    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    # None only: an explicit [] must not fall back to sys.argv (pytest args)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    setup_logging(debug=args.debug)
    if args.debug:
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"), override=True)
    args.config_path = _resolve_config_path(args.config)
    logger.debug(f"config file: {args.config_path}")
    return args.handler(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
