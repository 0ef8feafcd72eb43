"""
LedgerConfig schema.

Typed, frozen view of a ledger configuration file. YAML is parsed into these
types by the loader and handed to the bridges that wire the kernel.
"""

from __future__ import annotations

from dataclasses import dataclass, field

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class LedgerSection:
    """Counts-index and id-allocator settings."""

    total_key: str = "Total"
    first_item_id: int = 1

    def __post_init__(self):
        if not self.total_key:
            raise ValueError("total_key must be a non-empty string")
        if self.first_item_id < 1:
            raise ValueError(
                f"first_item_id must be >= 1, got {self.first_item_id}"
            )


@dataclass(frozen=True)
class LoggingSection:
    """Log level for the bottle_kernel logger hierarchy."""

    level: str = "INFO"

    def __post_init__(self):
        if self.level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"level must be one of {VALID_LOG_LEVELS}, got '{self.level}'"
            )


@dataclass(frozen=True)
class LedgerConfig:
    """Complete configuration for one ledger session."""

    ledger: LedgerSection = field(default_factory=LedgerSection)
    logging: LoggingSection = field(default_factory=LoggingSection)
    checksum: str = ""
