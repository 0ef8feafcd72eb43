"""
Item records and partial updates.

An ``ItemRecord`` is one stocked product line. Candidates are built by the
caller with ``item_id=None``; the controller stores its own copy with an
assigned id and a fresh ``updated_at``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

from bottle_kernel.domain.values import Barcode, ContainerSize
from bottle_kernel.exceptions import ItemIdImmutableError

UPDATED_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class ItemRecord:
    """
    One stocked product.

    Contract: ``item_id`` may be written exactly once (from None to an
    integer). Every other field is mutable through ``apply_update``.
    """

    name: str
    style: str
    alcohol_content: float
    container_size: ContainerSize
    quantity: int
    barcode: Barcode
    item_id: int | None = None
    updated_at: datetime | None = None

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "item_id":
            current = getattr(self, "item_id", None)
            if current is not None and value != current:
                raise ItemIdImmutableError(current)
        object.__setattr__(self, name, value)

    @property
    def updated_date(self) -> str:
        """Last update formatted for display, or "" if never stamped."""
        if self.updated_at is None:
            return ""
        return self.updated_at.strftime(UPDATED_DATE_FORMAT)

    def update_date(self, now: datetime) -> None:
        self.updated_at = now

    def apply_update(self, update: ItemUpdate) -> None:
        """
        Apply every field present in ``update``.

        Empty ``name``/``style`` keep the current value. A new size is
        applied with the CURRENT metric flag as the conversion hint, and
        only then is the new metric flag written; the container is replaced
        as a whole rather than mutated in place.
        """
        if update.name:
            self.name = update.name
        if update.style:
            self.style = update.style
        if update.alcohol_content is not None:
            self.alcohol_content = update.alcohol_content

        if update.size is not None or update.is_metric is not None:
            new_size = replace(self.container_size)
            if update.size is not None:
                new_size.set_size(update.size, new_size.is_metric)
            if update.is_metric is not None:
                new_size.set_is_metric(update.is_metric)
            self.container_size = new_size

        if update.quantity is not None:
            self.quantity = update.quantity
        if update.barcode is not None:
            self.barcode = update.barcode


@dataclass(frozen=True)
class ItemUpdate:
    """Partial update for an ``ItemRecord``. ``None`` means "leave as is"."""

    name: str | None = None
    style: str | None = None
    alcohol_content: float | None = None
    size: int | None = None
    is_metric: bool | None = None
    quantity: int | None = None
    barcode: Barcode | None = None

    @property
    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (
                self.name,
                self.style,
                self.alcohol_content,
                self.size,
                self.is_metric,
                self.quantity,
                self.barcode,
            )
        )
