"""
Typed Exception Hierarchy for the Bottle Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Mutating ledger operations report their outcome as an ``InventoryStatus``
value, never by raising. The same taxonomy is mirrored here so that:
  1. Callers who prefer exceptions can call ``result.raise_for_status()``
  2. Every error has a CODE attribute (machine-readable, log-safe)
  3. Exceptions carry structured DATA (not just a message string)

Example:
    result = controller.add(record)
    try:
        result.raise_for_status()
    except DuplicateNameError as e:
        show_edit_prompt(e.name)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    BottleKernelError (base)
    |
    +-- StockError
    |   +-- InvalidQuantityError
    |   +-- DuplicateNameError
    |   +-- ItemNotFoundError
    |   +-- InsufficientStockError
    |   +-- TotalNotInitializedError
    |
    +-- ValidationError
    |   +-- InvalidBarcodeError
    |
    +-- ImmutabilityError
        +-- ItemIdImmutableError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                   | When Raised
----------------|------------------------|----------------------------------------
Stock           | INVALID_QUANTITY       | Quantity <= 0 at add / amount remove
                | DUPLICATE_NAME         | Name already keyed in the counts index
                | ITEM_NOT_FOUND         | Id or name absent at remove / edit
                | INSUFFICIENT_STOCK     | Amount remove cannot be satisfied
                | TOTAL_NOT_INITIALIZED  | Grand total read before any add
----------------|------------------------|----------------------------------------
Validation      | INVALID_BARCODE        | Barcode text is not exactly 12 digits
----------------|------------------------|----------------------------------------
Immutability    | ITEM_ID_IMMUTABLE      | Reassigning an already assigned item id

===============================================================================
"""


class BottleKernelError(Exception):
    """
    Base exception for all bottle kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "BOTTLE_KERNEL_ERROR"


# Stock-related exceptions


class StockError(BottleKernelError):
    """Base exception for stock ledger errors."""

    code: str = "STOCK_ERROR"


class InvalidQuantityError(StockError):
    """Quantity must be a positive number of units."""

    code: str = "INVALID_QUANTITY"

    def __init__(self, quantity: int):
        self.quantity = quantity
        super().__init__(
            f"Invalid quantity {quantity}. Please enter a positive value."
        )


class DuplicateNameError(StockError):
    """An item with this name is already stocked."""

    code: str = "DUPLICATE_NAME"

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Item '{name}' already exists. Edit the existing item instead."
        )


class ItemNotFoundError(StockError):
    """No live item matches the given id or name."""

    code: str = "ITEM_NOT_FOUND"

    def __init__(self, key: int | str):
        self.key = key
        super().__init__(f"Item not found: {key}")


class InsufficientStockError(StockError):
    """Not enough units counted to satisfy an amount-based removal."""

    code: str = "INSUFFICIENT_STOCK"

    def __init__(self, name: str, requested: int, available: int):
        self.name = name
        self.requested = requested
        self.available = available
        super().__init__(
            f"Not enough {name} in stock to remove {requested} bottles "
            f"(available: {available})"
        )


class TotalNotInitializedError(StockError):
    """The grand total does not exist until the first successful add."""

    code: str = "TOTAL_NOT_INITIALIZED"

    def __init__(self, total_key: str):
        self.total_key = total_key
        super().__init__(
            f"No '{total_key}' count yet: nothing has been added to stock"
        )


# Validation exceptions


class ValidationError(BottleKernelError):
    """Base exception for rejected input values."""

    code: str = "VALIDATION_ERROR"


class InvalidBarcodeError(ValidationError):
    """Barcode text must be exactly the required number of decimal digits."""

    code: str = "INVALID_BARCODE"

    def __init__(self, raw_value: str, digits: int):
        self.raw_value = raw_value
        self.digits = digits
        super().__init__(
            f"Invalid barcode {raw_value!r}: expected exactly {digits} digits"
        )


# Immutability exceptions


class ImmutabilityError(BottleKernelError):
    """Base exception for writes to immutable fields."""

    code: str = "IMMUTABILITY_ERROR"


class ItemIdImmutableError(ImmutabilityError):
    """An item id cannot change once assigned."""

    code: str = "ITEM_ID_IMMUTABLE"

    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__(f"Item id {item_id} is already assigned")
