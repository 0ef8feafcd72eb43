"""
Configuration Loader (``bottle_config.loader``).

Responsibility
--------------
Loads a YAML configuration file and parses it into the frozen
``bottle_config.schema`` dataclasses. Runtime callers go through
``bottle_config.get_active_config()`` instead of calling this directly.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Wrong section type, unknown keys or wrongly typed values  -> ``ValueError``.
* Out-of-range values  -> ``ValueError`` from the schema.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from bottle_config.schema import LedgerConfig, LedgerSection, LoggingSection


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Postconditions:
        - Returns a ``dict`` (empty if the YAML document is empty).
    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the top-level document is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top-level YAML must be a mapping")
    return data


def _section(data: dict[str, Any], key: str, allowed: set[str]) -> dict[str, Any]:
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise ValueError(f"'{key}' must be a mapping, got {type(section).__name__}")
    unknown = set(section) - allowed
    if unknown:
        raise ValueError(f"Unknown keys in '{key}': {sorted(unknown)}")
    return section


def _typed(section: dict[str, Any], key: str, default: Any, kind: type) -> Any:
    value = section.get(key, default)
    # bool is an int subclass; "first_item_id: yes" is a typo, not 1
    if not isinstance(value, kind) or isinstance(value, bool):
        raise ValueError(
            f"'{key}' must be {kind.__name__}, got {type(value).__name__}: {value!r}"
        )
    return value


def parse_ledger_section(data: dict[str, Any]) -> LedgerSection:
    section = _section(data, "ledger", {"total_key", "first_item_id"})
    defaults = LedgerSection()
    return LedgerSection(
        total_key=_typed(section, "total_key", defaults.total_key, str),
        first_item_id=_typed(section, "first_item_id", defaults.first_item_id, int),
    )


def parse_logging_section(data: dict[str, Any]) -> LoggingSection:
    section = _section(data, "logging", {"level"})
    return LoggingSection(
        level=_typed(section, "level", LoggingSection().level, str).upper(),
    )


def parse_config(data: dict[str, Any]) -> LedgerConfig:
    """
    Parse a ``LedgerConfig`` from a dict.

    Missing sections and keys fall back to the schema defaults; unknown
    keys are rejected so that typos do not go unnoticed.
    """
    unknown = set(data) - {"ledger", "logging"}
    if unknown:
        raise ValueError(f"Unknown configuration sections: {sorted(unknown)}")
    return LedgerConfig(
        ledger=parse_ledger_section(data),
        logging=parse_logging_section(data),
        checksum=compute_checksum(data),
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """Deterministic SHA-256 of a configuration dict."""
    canonical = json.dumps(data, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
