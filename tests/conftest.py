# Shared pytest fixtures
from __future__ import annotations
import json
import tempfile
from pathlib import Path
import pytest


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("CONFIG_FILE", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """spreadsheetURL: https://docs.google.com/spreadsheets/d/abc123_XY-z/edit#gid=42
cellsToVerify:
  - cellName: A1
    expectedValue: Name
  - cellName: C1
    expectedFunction: =SUM(A1:A10)
  - cellName: B2
    expectedValue: 10
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "cells.yaml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def sample_snapshot() -> dict:
    return {
        "Sheet1": {
            "rows": [
                ["Name", None, {"formula": "=SUM(A1:A10)", "value": "55"}],
                ["x", "10"],
                [],
            ],
            "charts": [],
        },
        "Totals": {
            "rows": [["total", {"formula": "=Sheet1!C1", "value": "55"}]],
            "charts": [{"chartId": 7, "spec": {"title": "t"}}],
        },
    }


@pytest.fixture()
def snapshot_file(temp_workdir: Path, sample_snapshot: dict) -> Path:
    p = temp_workdir / "spreadsheet.json"
    p.write_text(json.dumps(sample_snapshot), encoding="utf-8")
    return p
