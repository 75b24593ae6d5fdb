from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import VerificationConfig
from ..models.verification_record import canonicalize, normalize

"""Config loader / saver for the cells-to-verify document.

Responsibilities:
- Load the YAML document ``{spreadsheetURL, cellsToVerify}``
- Validate it against config_schema.json (shipped next to this module)
- Apply defaults (empty URL, no records) and normalize every record
- Save: canonicalize every record and write YAML back (last write wins)
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_DOCUMENT: dict[str, Any] = {"spreadsheetURL": "", "cellsToVerify": []}

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    pass


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or unreadable, or data fails validation
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def config_from_dict(data: Mapping[str, Any]) -> VerificationConfig:
    """Validate a parsed document and normalize its records (load-time hook)."""
    _validate_config_schema(data)
    records = tuple(normalize(raw) for raw in data.get("cellsToVerify") or [])
    return VerificationConfig(
        spreadsheet_url=data.get("spreadsheetURL") or "",
        cells_to_verify=records,
    )


def config_to_dict(config: VerificationConfig) -> dict[str, Any]:
    """Canonical persisted shape (save-time hook)."""
    return {
        "spreadsheetURL": config.spreadsheet_url,
        "cellsToVerify": [canonicalize(r) for r in config.cells_to_verify],
    }


def _dump(document: Mapping[str, Any]) -> str:
    return yaml.safe_dump(
        dict(document),
        sort_keys=False,
        indent=2,
        width=float("inf"),  # never wrap long formulas
        allow_unicode=True,
        default_flow_style=False,
    )


def load_config(path: Path, create_missing: bool = False) -> VerificationConfig:
    if not path.exists():
        if not create_missing:
            raise ConfigError(f"config file not found: {path}")
        logger.info(f"config file not found, creating default: {path}")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(_dump(DEFAULT_DOCUMENT), encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"failed to create config file: {e}") from e
        return VerificationConfig()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    return config_from_dict(data)


def save_config(path: Path, config: VerificationConfig) -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(_dump(config_to_dict(config)), encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"failed to write config file: {e}") from e
    logger.debug(f"config saved: {path} records={len(config.cells_to_verify)}")
    return path
