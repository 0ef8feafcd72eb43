"""
bottle_config -- single public entrypoint for ledger configuration.

Responsibility:
    ``get_active_config()`` is the one way to obtain configuration at
    runtime. It loads a YAML file (the packaged ``defaults.yaml`` when no
    path is given), validates it and returns a frozen ``LedgerConfig``.

Architecture position:
    Sits above ``bottle_kernel``. The kernel never imports this package;
    ``bottle_config.bridges`` turns a ``LedgerConfig`` into kernel objects.

Audit relevance:
    Every successful call logs a ``ledger_config_loaded`` entry with the
    source path and checksum.
"""

from __future__ import annotations

import logging
from pathlib import Path

from bottle_config.loader import load_yaml_file, parse_config
from bottle_config.schema import LedgerConfig, LedgerSection, LoggingSection

_logger = logging.getLogger("bottle_kernel.config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"


def get_active_config(path: Path | str | None = None) -> LedgerConfig:
    """
    Load and validate the ledger configuration.

    Args:
        path: YAML file to load. Defaults to the packaged defaults.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        ValueError: If the contents fail validation.
    """
    source = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    config = parse_config(load_yaml_file(source))
    _logger.info(
        "ledger_config_loaded",
        extra={
            "config_path": str(source),
            "checksum": config.checksum,
            "total_key": config.ledger.total_key,
        },
    )
    return config


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "LedgerConfig",
    "LedgerSection",
    "LoggingSection",
    "get_active_config",
]
