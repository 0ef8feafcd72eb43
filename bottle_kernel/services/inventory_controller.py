"""
InventoryController -- the aggregate root of the bottle ledger.

Responsibility:
    Owns every piece of mutable inventory state for one session and is the
    only path through which it changes:
      - item records, in insertion order, keyed by assigned id
      - the per-name counts index plus the synthetic grand-total key
      - breakage flag, event log and broken-unit counter
      - the item id allocator

Architecture position:
    Kernel > Services. Depends on the domain layer only; wired from
    configuration by ``bottle_config.bridges.build_controller``.

Invariants enforced:
    ID_MONOTONICITY     -- ids come from a counter that only moves forward
    NAME_UNIQUENESS     -- add rejects any name already keyed in the index
    POSITIVE_QUANTITY   -- add rejects quantity <= 0
    ALL_OR_NOTHING      -- rejected operations return before any write
    BREAKAGE_STICKINESS -- once flagged, every later add logs breakage

Failure modes:
    Mutations never raise for business rejections; they return an
    ``InventoryResult`` whose status names the outcome. ``total_count``
    raises TotalNotInitializedError before the first add.

Counts index semantics:
    The index moves only by add/remove deltas. Edits change a record's
    quantity or name without touching the index, so after an edit the
    index and the records can disagree. Keys are never deleted, so a name
    stays "taken" after its record is removed.

Logging:
    Every event about one stored record is logged with ``item_id`` bound in
    ``LogContext``; rejections that never reach a record log the offending
    name or id as an extra field instead.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator

from bottle_kernel.domain.breakage import BreakageEvent, BreakageState
from bottle_kernel.domain.clock import Clock, SystemClock
from bottle_kernel.domain.item import ItemRecord, ItemUpdate
from bottle_kernel.exceptions import (
    DuplicateNameError,
    InsufficientStockError,
    InvalidQuantityError,
    ItemNotFoundError,
    TotalNotInitializedError,
)
from bottle_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.inventory_controller")

TOTAL_KEY = "Total"


class InventoryStatus(str, Enum):
    """Outcome of an inventory operation."""

    ADDED = "added"
    REMOVED = "removed"
    UPDATED = "updated"
    RECORDED = "recorded"
    INVALID_QUANTITY = "invalid_quantity"
    DUPLICATE_NAME = "duplicate_name"
    NOT_FOUND = "not_found"
    INSUFFICIENT_STOCK = "insufficient_stock"


_SUCCESS_STATUSES = frozenset({
    InventoryStatus.ADDED,
    InventoryStatus.REMOVED,
    InventoryStatus.UPDATED,
    InventoryStatus.RECORDED,
})


@dataclass(frozen=True)
class InventoryResult:
    """Result of an inventory operation, for the caller to render."""

    status: InventoryStatus
    item_id: int | None = None
    name: str | None = None
    quantity: int | None = None
    available: int | None = None
    message: str | None = None

    @property
    def is_success(self) -> bool:
        return self.status in _SUCCESS_STATUSES

    def raise_for_status(self) -> None:
        """Raise the typed exception matching a failed status."""
        if self.status is InventoryStatus.INVALID_QUANTITY:
            raise InvalidQuantityError(self.quantity)
        if self.status is InventoryStatus.DUPLICATE_NAME:
            raise DuplicateNameError(self.name)
        if self.status is InventoryStatus.NOT_FOUND:
            raise ItemNotFoundError(
                self.item_id if self.item_id is not None else self.name
            )
        if self.status is InventoryStatus.INSUFFICIENT_STOCK:
            raise InsufficientStockError(
                self.name, self.quantity, self.available or 0
            )


class InventoryController:
    """
    In-memory stock ledger for one session.

    Contract:
        One instance per session, injected into whatever front end uses it.
        Every public method runs under a single re-entrant lock, so the
        check-then-write sequences in add/remove/edit are each one critical
        section.

    Non-goals:
        - No persistence; state lives as long as the instance.
        - No reconciliation of the counts index after edits.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        *,
        total_key: str = TOTAL_KEY,
        first_item_id: int = 1,
    ):
        if first_item_id < 1:
            raise ValueError(
                f"first_item_id must be >= 1, got {first_item_id}"
            )
        self._clock = clock or SystemClock()
        self._total_key = total_key
        self._records: dict[int, ItemRecord] = {}
        self._counts: dict[str, int] = {}
        self._breakage = BreakageState()
        self._next_id = first_item_id
        self._lock = threading.RLock()

    @property
    def total_key(self) -> str:
        return self._total_key

    # =========================================================================
    # Mutations
    # =========================================================================

    def add(self, candidate: ItemRecord) -> InventoryResult:
        """
        Stock a new item.

        The stored record is a copy of ``candidate`` carrying the next id
        and a fresh ``updated_at``; ``candidate`` itself is not modified.
        While breakage is flagged, the added quantity is also logged as
        broken.
        """
        name = candidate.name
        quantity = candidate.quantity
        with self._lock:
            if quantity <= 0:
                logger.warning(
                    "item_add_rejected",
                    extra={"item_name": name, "quantity": quantity,
                           "reason": InventoryStatus.INVALID_QUANTITY.value},
                )
                return InventoryResult(
                    status=InventoryStatus.INVALID_QUANTITY,
                    name=name,
                    quantity=quantity,
                    message="Invalid quantity. Please enter a positive value.",
                )

            if name == self._total_key or name in self._counts:
                logger.warning(
                    "item_add_rejected",
                    extra={"item_name": name, "quantity": quantity,
                           "reason": InventoryStatus.DUPLICATE_NAME.value},
                )
                return InventoryResult(
                    status=InventoryStatus.DUPLICATE_NAME,
                    name=name,
                    quantity=quantity,
                    message=(
                        f"Item '{name}' already exists. "
                        "Edit the existing item instead."
                    ),
                )

            item_id = self._next_id
            self._next_id += 1

            self._counts[name] = self._counts.get(name, 0) + quantity
            self._counts[self._total_key] = (
                self._counts.get(self._total_key, 0) + quantity
            )
            self._records[item_id] = replace(
                candidate,
                container_size=replace(candidate.container_size),
                item_id=item_id,
                updated_at=self._clock.now(),
            )

            with LogContext.bind(item_id=item_id):
                logger.info(
                    "item_added",
                    extra={"item_name": name, "quantity": quantity,
                           "total": self._counts[self._total_key]},
                )

                if self._breakage.flagged:
                    self._breakage.record(name, quantity)
                    logger.warning(
                        "breakage_logged_on_add",
                        extra={"item_name": name, "quantity": quantity,
                               "total_broken": self._breakage.total_broken},
                    )

            return InventoryResult(
                status=InventoryStatus.ADDED,
                item_id=item_id,
                name=name,
                quantity=quantity,
                message=f"{quantity} bottles of {name} added to stock.",
            )

    def remove(self, item_id: int) -> InventoryResult:
        """
        Remove a record by id.

        The record's quantity comes off its name counter and the grand
        total; the id is retired for good.
        """
        with self._lock:
            record = self._records.get(item_id)
            if record is None:
                logger.warning("item_not_found", extra={"item_id": item_id})
                return InventoryResult(
                    status=InventoryStatus.NOT_FOUND,
                    item_id=item_id,
                    message=f"Item with id {item_id} not found.",
                )

            self._counts[record.name] = (
                self._counts.get(record.name, 0) - record.quantity
            )
            self._counts[self._total_key] = (
                self._counts.get(self._total_key, 0) - record.quantity
            )
            del self._records[item_id]

            with LogContext.bind(item_id=item_id):
                logger.info(
                    "item_removed",
                    extra={"item_name": record.name,
                           "quantity": record.quantity,
                           "total": self._counts[self._total_key]},
                )
            return InventoryResult(
                status=InventoryStatus.REMOVED,
                item_id=item_id,
                name=record.name,
                quantity=record.quantity,
                message=(
                    f"{record.quantity} bottles of {record.name} "
                    "removed from stock."
                ),
            )

    def remove_amount(self, amount: int) -> InventoryResult:
        """
        Take ``amount`` units out of stock without naming an item.

        The first record (in insertion order) whose own quantity and name
        counter both cover ``amount`` is chosen, and only that name's counter
        is decremented. With no such record the grand-total counter is tried
        instead, and only it is decremented.
        """
        with self._lock:
            if amount <= 0:
                logger.warning(
                    "stock_remove_rejected",
                    extra={"quantity": amount,
                           "reason": InventoryStatus.INVALID_QUANTITY.value},
                )
                return InventoryResult(
                    status=InventoryStatus.INVALID_QUANTITY,
                    quantity=amount,
                    message="Invalid amount. Please enter a positive value.",
                )

            target = self._total_key
            for record in self._records.values():
                if (
                    record.quantity >= amount
                    and self._counts.get(record.name, 0) >= amount
                ):
                    target = record.name
                    break

            available = self._counts.get(target, 0)
            if available < amount:
                logger.warning(
                    "stock_remove_rejected",
                    extra={"item_name": target, "quantity": amount,
                           "available": available,
                           "reason": InventoryStatus.INSUFFICIENT_STOCK.value},
                )
                return InventoryResult(
                    status=InventoryStatus.INSUFFICIENT_STOCK,
                    name=target,
                    quantity=amount,
                    available=available,
                    message=(
                        f"Not enough {target} in stock to remove "
                        f"{amount} bottles."
                    ),
                )

            self._counts[target] = available - amount
            touched = self._find_by_name(target)
            touched_id = None
            if touched is not None:
                touched.update_date(self._clock.now())
                touched_id = touched.item_id

            with LogContext.bind(item_id=touched_id):
                logger.info(
                    "stock_removed",
                    extra={"item_name": target, "quantity": amount,
                           "remaining": self._counts[target]},
                )
            return InventoryResult(
                status=InventoryStatus.REMOVED,
                item_id=touched_id,
                name=target,
                quantity=amount,
                available=self._counts[target],
                message=f"{amount} bottles of {target} removed from stock.",
            )

    def edit(self, name: str, update: ItemUpdate) -> InventoryResult:
        """
        Apply a partial update to the first record named ``name``.

        The counts index is left alone, and a rename is not checked against
        other live names.
        """
        with self._lock:
            record = self._find_by_name(name)
            if record is None:
                logger.warning("item_not_found", extra={"item_name": name})
                return InventoryResult(
                    status=InventoryStatus.NOT_FOUND,
                    name=name,
                    message=f"Item with name '{name}' not found.",
                )

            record.apply_update(update)
            record.update_date(self._clock.now())

            with LogContext.bind(item_id=record.item_id):
                logger.info(
                    "item_edited",
                    extra={"item_name": name, "new_name": record.name,
                           "quantity": record.quantity},
                )
            return InventoryResult(
                status=InventoryStatus.UPDATED,
                item_id=record.item_id,
                name=record.name,
                quantity=record.quantity,
                message="Item details updated.",
            )

    def flag_breakage(self) -> None:
        """Turn on breakage flagging for the rest of the session."""
        with self._lock:
            if self._breakage.flagged:
                return
            self._breakage.flag()
            logger.warning("breakage_flagged")

    def record_breakage(self, name: str, quantity: int) -> InventoryResult:
        """
        Log a breakage incident directly.

        Unlike the flag, this records exactly one event and leaves stock
        counts alone; it does not require the item to exist.
        """
        with self._lock:
            if quantity <= 0:
                return InventoryResult(
                    status=InventoryStatus.INVALID_QUANTITY,
                    name=name,
                    quantity=quantity,
                    message="Invalid quantity. Please enter a positive value.",
                )
            self._breakage.record(name, quantity)
            logger.info(
                "breakage_recorded",
                extra={"item_name": name, "quantity": quantity,
                       "total_broken": self._breakage.total_broken},
            )
            return InventoryResult(
                status=InventoryStatus.RECORDED,
                name=name,
                quantity=quantity,
                message=f"{quantity} bottles of {name} recorded as broken.",
            )

    # =========================================================================
    # Queries
    # =========================================================================

    def total_count(self) -> int:
        with self._lock:
            if self._total_key not in self._counts:
                raise TotalNotInitializedError(self._total_key)
            return self._counts[self._total_key]

    def exists(self, name: str) -> bool:
        with self._lock:
            return name in self._counts

    def count_for(self, name: str) -> int:
        """Counter value for ``name``; 0 if the name was never stocked."""
        with self._lock:
            return self._counts.get(name, 0)

    def get(self, item_id: int) -> ItemRecord | None:
        with self._lock:
            record = self._records.get(item_id)
            return _snapshot(record) if record is not None else None

    def list_items(self) -> Iterator[ItemRecord]:
        """Live records in insertion order, copied at call time."""
        with self._lock:
            snapshots = tuple(_snapshot(record) for record in self._records.values())
        return iter(snapshots)

    def list_flagged(self) -> Iterator[BreakageEvent]:
        with self._lock:
            events = tuple(self._breakage.events)
        return iter(events)

    def list_totals(self) -> Iterator[tuple[str, int]]:
        """``(name, count)`` pairs sorted by name, grand total included."""
        with self._lock:
            totals = sorted(self._counts.items())
        return iter(totals)

    @property
    def is_breakage_flagged(self) -> bool:
        with self._lock:
            return self._breakage.flagged

    @property
    def total_breakage(self) -> int:
        with self._lock:
            return self._breakage.total_broken

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    # =========================================================================
    # Internal
    # =========================================================================

    def _find_by_name(self, name: str) -> ItemRecord | None:
        for record in self._records.values():
            if record.name == name:
                return record
        return None


def _snapshot(record: ItemRecord) -> ItemRecord:
    return replace(record, container_size=replace(record.container_size))
