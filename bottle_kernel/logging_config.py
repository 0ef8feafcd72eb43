"""
Structured JSON logging for the bottle ledger.

Each kernel log line is one JSON object. The log message is the event
name (``item_added``, ``stock_removed`` ...) and is emitted under the
``event`` key, followed by the bound ledger context and any ``extra``
fields the caller passed::

    {"ts": "...", "level": "INFO", "logger": "bottle_kernel.services...",
     "event": "item_added", "session_id": "bar-1", "item_id": 3,
     "item_name": "Example IPA", "quantity": 24, "total": 36}

Ledger context:
    ``session_id`` is bound by whoever drives a session (the demo script
    binds one per run). ``item_id`` is bound by ``InventoryController``
    around every operation that touches a single stored record, so every
    line logged while that record is handled carries its id.
"""

__all__ = [
    "CONTEXT_FIELDS",
    "StructuredFormatter",
    "LogContext",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
import threading
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Iterator

from bottle_kernel.exceptions import BottleKernelError

CONTEXT_FIELDS = ("session_id", "item_id")

_context_vars: dict[str, ContextVar[Any]] = {
    field: ContextVar(f"bottle_log_{field}", default=None)
    for field in CONTEXT_FIELDS
}


def _context_var(field: str) -> ContextVar[Any]:
    try:
        return _context_vars[field]
    except KeyError:
        raise ValueError(
            f"Unknown log context field {field!r}; "
            f"expected one of {list(CONTEXT_FIELDS)}"
        ) from None


class LogContext:
    """Session and record fields stamped onto every log line."""

    @staticmethod
    def set(**fields: Any) -> None:
        """Set context fields. None values leave the field untouched."""
        for field, value in fields.items():
            var = _context_var(field)
            if value is not None:
                var.set(value)

    @staticmethod
    def get_all() -> dict[str, Any]:
        ctx: dict[str, Any] = {}
        for field, var in _context_vars.items():
            value = var.get()
            if value is not None:
                ctx[field] = value
        return ctx

    @staticmethod
    def clear() -> None:
        for var in _context_vars.values():
            var.set(None)

    @staticmethod
    @contextmanager
    def bind(**fields: Any) -> Iterator[None]:
        """Set fields for the duration of a ``with`` block, then restore them."""
        tokens: list[tuple[ContextVar[Any], Any]] = []
        try:
            for field, value in fields.items():
                var = _context_var(field)
                if value is not None:
                    tokens.append((var, var.set(value)))
            yield
        finally:
            for var, token in reversed(tokens):
                var.reset(token)


# ---------------------------------------------------------------------------
# Formatter
# ---------------------------------------------------------------------------

_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "taskName"}


def _to_json(obj: Any) -> Any:
    """Fallback for values ``json`` cannot encode on its own."""
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, Decimal):
        return str(obj)
    # ContainerSize, Barcode and anything else with a readable str()
    return str(obj)


def _exception_fields(exc: BaseException) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "exc_type": type(exc).__name__,
        "exc_message": str(exc),
    }
    if isinstance(exc, BottleKernelError):
        fields["exc_code"] = exc.code
        for attr, value in vars(exc).items():
            if not attr.startswith("_"):
                fields[f"exc_{attr}"] = value
    return fields


class StructuredFormatter(logging.Formatter):
    """Renders a log record as one JSON line keyed by event name."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        payload.update(LogContext.get_all())

        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS:
                payload.setdefault(key, value)

        if record.exc_info and record.exc_info[1] is not None:
            payload.update(_exception_fields(record.exc_info[1]))
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=_to_json)


# ---------------------------------------------------------------------------
# Logger hierarchy
# ---------------------------------------------------------------------------

ROOT_LOGGER = "bottle_kernel"

_configured = False
_configure_lock = threading.Lock()


def get_logger(name: str) -> logging.Logger:
    """Child logger of ``bottle_kernel``, e.g. ``services.inventory_controller``."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure_logging(
    *,
    level: int = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """
    Attach one JSON handler to the ``bottle_kernel`` logger.

    Only the first call has any effect until ``reset_logging`` runs.
    Kernel lines do not propagate to the root logger.
    """
    global _configured
    with _configure_lock:
        if _configured:
            return
        _configured = True

    if handler is None:
        handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter())

    kernel_logger = logging.getLogger(ROOT_LOGGER)
    kernel_logger.setLevel(level)
    kernel_logger.propagate = False
    kernel_logger.addHandler(handler)


def reset_logging() -> None:
    """Undo ``configure_logging``. Test helper."""
    global _configured
    with _configure_lock:
        _configured = False
    kernel_logger = logging.getLogger(ROOT_LOGGER)
    kernel_logger.handlers.clear()
    kernel_logger.setLevel(logging.WARNING)
    kernel_logger.propagate = True
