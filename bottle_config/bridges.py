"""
Config -> Kernel Bridges.

Functions that turn a ``LedgerConfig`` into kernel objects. They live in
bottle_config (the producer) because the kernel must never import
bottle_config.

Usage:
    from bottle_config import get_active_config
    from bottle_config.bridges import build_controller, configure_logging_from

    config = get_active_config()
    configure_logging_from(config)
    controller = build_controller(config)
"""

from __future__ import annotations

import logging
from typing import Any

from bottle_config.schema import LedgerConfig
from bottle_kernel.domain.clock import Clock
from bottle_kernel.logging_config import configure_logging
from bottle_kernel.services.inventory_controller import InventoryController


def build_controller(
    config: LedgerConfig,
    clock: Clock | None = None,
) -> InventoryController:
    """Create an InventoryController honoring the ledger section."""
    return InventoryController(
        clock,
        total_key=config.ledger.total_key,
        first_item_id=config.ledger.first_item_id,
    )


def configure_logging_from(
    config: LedgerConfig,
    *,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """Configure kernel logging at the configured level (idempotent)."""
    configure_logging(
        level=logging.getLevelNamesMapping()[config.logging.level],
        stream=stream,
        handler=handler,
    )
