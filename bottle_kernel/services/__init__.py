"""Bottle kernel services: the inventory aggregate root."""

from bottle_kernel.services.inventory_controller import (
    TOTAL_KEY,
    InventoryController,
    InventoryResult,
    InventoryStatus,
)

__all__ = [
    "TOTAL_KEY",
    "InventoryController",
    "InventoryResult",
    "InventoryStatus",
]
