from __future__ import annotations

from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import DEFAULT_ERROR_LOG_DIR, ParserConfig

"""Config loader.

Responsibilities:
- Load YAML config (default config/sheet_invoice.yml)
- Validate keys and types against CONFIG_SCHEMA (unknown keys rejected)
- Apply defaults for missing keys
"""

DEFAULT_CONFIG_PATH = Path("config/sheet_invoice.yml")

CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "gst_fraction_normalization": {"type": "boolean"},
        "null_sentinels": {
            "type": "array",
            "items": {"type": "string"},
        },
        "error_log_dir": {"type": "string", "minLength": 1},
    },
}


class ConfigError(Exception):
    pass


def _validate_config_schema(data: Any) -> None:
    """Validate config data against CONFIG_SCHEMA.

    Raises:
        ConfigError: if the document is not a mapping or violates the schema
    """
    try:
        jsonschema.validate(data, CONFIG_SCHEMA)
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def config_from_dict(data: dict[str, Any]) -> ParserConfig:
    _validate_config_schema(data)
    sentinels = frozenset(s.strip().upper() for s in data.get("null_sentinels", []) if s.strip())
    return ParserConfig(
        gst_fraction_normalization=data.get("gst_fraction_normalization", True),
        null_sentinels=sentinels,
        error_log_dir=data.get("error_log_dir", DEFAULT_ERROR_LOG_DIR),
    )


def load_config(path: Path) -> ParserConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    return config_from_dict(data)


def load_config_or_default(path: Path | None = None) -> ParserConfig:
    """Load ``path`` if given, else the default file if present, else defaults."""
    if path is not None:
        return load_config(path)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return ParserConfig()
