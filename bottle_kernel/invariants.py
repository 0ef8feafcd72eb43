"""
Ledger Invariants Contract.

These invariants are structural law for the inventory ledger. They are
enforced by InventoryController and the domain records; no LedgerConfig
setting may override them.

This module exists solely to declare these invariants explicitly.
"""

from enum import Enum, unique


@unique
class LedgerInvariant(str, Enum):
    """Non-configurable invariants enforced by the kernel.

    Configuration may change the name of the grand-total key or the first
    id handed out, but never whether these rules apply.
    """

    ID_MONOTONICITY = "id_monotonicity"
    """Item ids are strictly increasing and never reused, even after the
    item is removed. Enforced by InventoryController's allocator."""

    ID_IMMUTABILITY = "id_immutability"
    """An assigned item id never changes. Enforced by ItemRecord."""

    NAME_UNIQUENESS = "name_uniqueness"
    """A name already keyed in the counts index cannot be added again.
    Checked at add time only; edits do not re-check."""

    POSITIVE_QUANTITY = "positive_quantity"
    """Items are only stocked with a quantity greater than zero."""

    ALL_OR_NOTHING = "all_or_nothing"
    """A rejected operation leaves records, counters and breakage state
    untouched."""

    BREAKAGE_STICKINESS = "breakage_stickiness"
    """Once breakage is flagged it stays flagged for the session, and every
    later successful add is logged as a breakage event."""


# All invariants as a frozenset for programmatic checks.
ALL_LEDGER_INVARIANTS: frozenset[LedgerInvariant] = frozenset(LedgerInvariant)

# The kernel package may not import from these packages.
# This is enforced by tests/architecture/test_kernel_boundary.py.
FORBIDDEN_KERNEL_IMPORTS: tuple[str, ...] = (
    "bottle_config",
)
