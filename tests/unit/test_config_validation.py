from __future__ import annotations

import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from sheetverify.config.loader import ConfigError, _validate_config_schema

"""Unit tests for config validation error cases."""


def test_validate_config_schema_missing_schema_file():
    with patch("sheetverify.config.loader.SCHEMA_PATH", Path("/nonexistent/schema.json")):
        with pytest.raises(ConfigError) as e:
            _validate_config_schema({})
        assert "config schema not found" in str(e.value)


def test_validate_config_schema_invalid_json_schema():
    with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
        f.write("{ invalid json }")
        f.flush()
        temp_path = Path(f.name)

    try:
        with patch("sheetverify.config.loader.SCHEMA_PATH", temp_path):
            with pytest.raises(ConfigError) as e:
                _validate_config_schema({})
            assert "invalid schema file" in str(e.value)
    finally:
        temp_path.unlink()


def test_validate_config_schema_accepts_empty_document():
    _validate_config_schema({})


@pytest.mark.parametrize(
    "data",
    [
        [],
        {"spreadsheetURL": 5},
        {"cellsToVerify": {"cellName": "A1"}},
        {"cellsToVerify": [{"cellName": "A1", "color": "red"}]},
        {"cellsToVerify": [{"cellName": "A1", "verificationKind": "regex"}]},
        {"cellsToVerify": [{"cellName": "A1", "expectedFunction": 3}]},
    ],
)
def test_validate_config_schema_rejects(data):
    with pytest.raises(ConfigError) as e:
        _validate_config_schema(data)
    assert "config validation failed" in str(e.value)


def test_validate_config_schema_accepts_kind_spellings():
    _validate_config_schema(
        {
            "spreadsheetURL": None,
            "cellsToVerify": [
                {"cellName": "A1", "verificationKind": "Function", "expectedFunction": "=B1"},
                {"cellName": "A2", "verificationType": "value", "expectedValue": 1.5},
            ],
        }
    )


@pytest.mark.parametrize("kind", ["FUNCTION", "VALUE", "fUnCtIoN"])
def test_validate_config_schema_accepts_any_case_kind(kind):
    _validate_config_schema({"cellsToVerify": [{"cellName": "A1", "verificationKind": kind}]})
