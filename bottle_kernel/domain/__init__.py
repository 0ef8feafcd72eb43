"""
Bottle kernel domain layer.

Pure value objects and records with no I/O:
- ContainerSize / Barcode: unit-normalized size and product code
- ItemRecord / ItemUpdate: one stocked product and its partial update
- BreakageCounter / BreakageState: sticky breakage flag and event log
- Clock: injectable time source
"""

from bottle_kernel.domain.breakage import (
    BreakageCounter,
    BreakageEvent,
    BreakageState,
)
from bottle_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from bottle_kernel.domain.item import ItemRecord, ItemUpdate
from bottle_kernel.domain.values import (
    BARCODE_DIGITS,
    FL_OZ_TO_ML,
    Barcode,
    ContainerSize,
    fl_oz_to_ml,
)

__all__ = [
    "BARCODE_DIGITS",
    "FL_OZ_TO_ML",
    "Barcode",
    "BreakageCounter",
    "BreakageEvent",
    "BreakageState",
    "Clock",
    "ContainerSize",
    "DeterministicClock",
    "ItemRecord",
    "ItemUpdate",
    "SystemClock",
    "fl_oz_to_ml",
]
