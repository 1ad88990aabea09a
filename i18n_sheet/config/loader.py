from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import ColumnWidths, ConvertConfig

"""Config loader.

Responsibilities:
- Resolve the config path (CLI flag > I18N_SHEET_CONFIG > config/convert.yml)
- Load YAML and validate it against the packaged config_schema.json
- Apply defaults for every omitted key
"""

CONFIG_ENV_VAR = "I18N_SHEET_CONFIG"
DEFAULT_CONFIG_PATH = Path("config/convert.yml")
SCHEMA_PATH = Path(__file__).parent / "config_schema.json"


class ConfigError(Exception):
    pass


def resolve_config_path(explicit: str | None = None) -> tuple[Path, bool]:
    """Return ``(path, required)``; only the implicit default may be absent."""
    if explicit:
        return Path(explicit), True
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path), True
    return DEFAULT_CONFIG_PATH, False


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against JSON schema.

    Raises:
        ConfigError: If the schema file is missing or invalid, or the config
            data fails schema validation (unknown keys, wrong types, ...)
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


def load_config(path: Path | None = None, required: bool = True) -> ConvertConfig:
    if path is None:
        path, required = resolve_config_path()
    if not path.exists():
        if required:
            raise ConfigError(f"config file not found: {path}")
        return ConvertConfig()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    defaults = ConvertConfig()
    widths_raw = data.get("column_widths", {})
    return ConvertConfig(
        output_filename=data.get("output_filename", defaults.output_filename),
        sheet_name=data.get("sheet_name", defaults.sheet_name),
        output_directory=data.get("output_directory", defaults.output_directory),
        column_widths=ColumnWidths(
            key=widths_raw.get("key", defaults.column_widths.key),
            value=widths_raw.get("value", defaults.column_widths.value),
        ),
    )
