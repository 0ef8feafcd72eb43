"""
Values -- Small domain value objects for stocked bottles.

Responsibility:
    Provides ContainerSize (a size paired with its unit system, rendered in
    millilitres) and Barcode (the product code scanned at the counter).

Architecture position:
    Kernel > Domain -- pure core, zero I/O. Imported by the item model and
    the inventory controller.

Invariants enforced:
    - Metric rendering uses the fixed factor ``FL_OZ_TO_ML`` and truncates
      toward zero. Arithmetic is Decimal, never float.
    - ``Barcode.parse`` admits exactly ``BARCODE_DIGITS`` decimal digits.

Failure modes:
    - InvalidBarcodeError from ``Barcode.parse`` on malformed text.
    - ContainerSize does NOT validate its size; non-negative sizes are a
      caller precondition.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from bottle_kernel.exceptions import InvalidBarcodeError

# 1 US fl oz = 29.5735 ml
FL_OZ_TO_ML = Decimal("29.5735")

BARCODE_DIGITS = 12


def fl_oz_to_ml(size: int) -> int:
    """Convert fluid ounces to whole millilitres, truncating toward zero."""
    return int(Decimal(size) * FL_OZ_TO_ML)


@dataclass(slots=True)
class ContainerSize:
    """
    Size of a bottle or can.

    Contract:
        ``size`` is millilitres when ``is_metric`` is true, fluid ounces
        otherwise. Rendering always shows millilitres but never changes the
        stored value; only ``set_size(..., convert=True)`` rewrites it.
    """

    is_metric: bool
    size: int

    @property
    def metric_size(self) -> int:
        """Size in whole millilitres, regardless of the stored unit."""
        if self.is_metric:
            return self.size
        return fl_oz_to_ml(self.size)

    def render(self) -> str:
        if self.is_metric:
            return f"{self.size} ml"
        return f"{self.metric_size} ml (Converted from {self.size} fl oz)"

    def set_is_metric(self, metric: bool) -> None:
        self.is_metric = metric

    def set_size(self, new_size: int, convert: bool = False) -> None:
        """
        Replace the size, optionally normalizing to metric.

        When ``convert`` is true and the value is non-metric, ``new_size`` is
        read as fluid ounces, converted to millilitres and the value is
        marked metric. Otherwise ``new_size`` is stored as given.
        """
        self.size = new_size
        if convert and not self.is_metric:
            self.size = fl_oz_to_ml(new_size)
            self.is_metric = True

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True, slots=True)
class Barcode:
    """
    Product barcode.

    The constructor stores any integer as-is. Text coming from a scanner or
    keyboard goes through ``parse``, which enforces the digit count.
    """

    value: int

    @classmethod
    def parse(cls, text: str) -> Barcode:
        """
        Parse barcode text.

        Raises:
            InvalidBarcodeError: Unless the stripped text is exactly
                ``BARCODE_DIGITS`` ASCII decimal digits.
        """
        candidate = text.strip()
        if (
            len(candidate) != BARCODE_DIGITS
            or not candidate.isascii()
            or not candidate.isdigit()
        ):
            raise InvalidBarcodeError(text, BARCODE_DIGITS)
        return cls(int(candidate))

    @staticmethod
    def is_valid(text: str) -> bool:
        """Check barcode text without raising."""
        try:
            Barcode.parse(text)
        except InvalidBarcodeError:
            return False
        return True

    def __str__(self) -> str:
        return str(self.value)
