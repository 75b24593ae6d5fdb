from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from sheetverify.cli.__main__ import EXIT_FATAL, EXIT_SUCCESS, main as cli_main
from sheetverify.logging.init import reset_logging


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    yield
    reset_logging()


def _doc(path: Path) -> dict:
    return yaml.safe_load(path.read_text(encoding="utf-8"))


def _run(path: Path, *args: str) -> int:
    return cli_main(["--config", str(path), "config", *args])


def test_add_creates_missing_config(temp_workdir: Path):
    path = temp_workdir / "config.yaml"
    assert _run(path, "add") == EXIT_SUCCESS
    assert _doc(path) == {"spreadsheetURL": "", "cellsToVerify": [{"cellName": "", "expectedValue": ""}]}


def test_edit_session(temp_workdir: Path):
    path = temp_workdir / "config.yaml"
    assert _run(path, "url", "https://docs.google.com/spreadsheets/d/abc/edit") == EXIT_SUCCESS
    assert _run(path, "add") == EXIT_SUCCESS
    assert _run(path, "set", "0", "cellName", "C1") == EXIT_SUCCESS
    assert _run(path, "kind", "0", "function", "=SUM(A1:A10)") == EXIT_SUCCESS
    assert _run(path, "add") == EXIT_SUCCESS
    assert _run(path, "set", "1", "cellName", "C20") == EXIT_SUCCESS
    assert _run(path, "set", "1", "expected", "55") == EXIT_SUCCESS
    assert _run(path, "set", "0", "expected", "=SUM(A1:A11)") == EXIT_SUCCESS
    assert _doc(path) == {
        "spreadsheetURL": "https://docs.google.com/spreadsheets/d/abc/edit",
        "cellsToVerify": [
            {"cellName": "C1", "expectedFunction": "=SUM(A1:A11)"},
            {"cellName": "C20", "expectedValue": "55"},
        ],
    }


def test_remove_shifts_records(write_config: Path):
    assert _run(write_config, "remove", "1") == EXIT_SUCCESS
    assert [r["cellName"] for r in _doc(write_config)["cellsToVerify"]] == ["A1", "B2"]


def test_remove_out_of_range_keeps_file(write_config: Path, capsys):
    before = write_config.read_text(encoding="utf-8")
    assert _run(write_config, "remove", "7") == EXIT_FATAL
    assert "ERROR config: index 7 out of range for 3 record(s)" in capsys.readouterr().out
    assert write_config.read_text(encoding="utf-8") == before


def test_set_out_of_range(write_config: Path, capsys):
    assert _run(write_config, "set", "3", "expected", "x") == EXIT_FATAL
    assert "out of range" in capsys.readouterr().out


def test_kind_switch_without_formula_warns(write_config: Path, capsys):
    assert _run(write_config, "kind", "0", "function") == EXIT_SUCCESS
    assert "WARN [0] function check has no expected formula yet" in capsys.readouterr().out
    assert _doc(write_config)["cellsToVerify"][0] == {"cellName": "A1", "expectedFunction": ""}


def test_invalid_config_is_reported(temp_workdir: Path, capsys):
    path = temp_workdir / "config.yaml"
    path.write_text("bogus: 1\n", encoding="utf-8")
    assert _run(path, "add") == EXIT_FATAL
    assert "config validation failed" in capsys.readouterr().out


def test_show(write_config: Path, capsys):
    assert _run(write_config, "show") == EXIT_SUCCESS
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "spreadsheetURL: https://docs.google.com/spreadsheets/d/abc123_XY-z/edit#gid=42",
        "preview: https://docs.google.com/spreadsheets/d/abc123_XY-z/edit?gid=42&rm=minimal",
        "[0] A1 value: Name",
        "[1] C1 function: =SUM(A1:A10)",
        "[2] B2 value: 10",
    ]


def test_show_empty(temp_workdir: Path, capsys):
    path = temp_workdir / "config.yaml"
    assert _run(path, "show") == EXIT_SUCCESS
    out = capsys.readouterr().out
    assert "no cells configured" in out
    assert "preview:" not in out
