"""
Pytest fixtures for the bottle kernel test suite.

Provides:
- A deterministic clock and a fresh InventoryController per test
- Candidate item builders
- Structured log capture
"""

import json
import logging
from datetime import datetime, timezone
from io import StringIO

import pytest

from bottle_kernel.domain.clock import DeterministicClock
from bottle_kernel.domain.item import ItemRecord
from bottle_kernel.domain.values import Barcode, ContainerSize
from bottle_kernel.logging_config import LogContext, StructuredFormatter
from bottle_kernel.services.inventory_controller import InventoryController

FIXED_TIME = datetime(2024, 3, 1, 18, 30, 0, tzinfo=timezone.utc)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture bottle_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, controller):
            controller.add(make_item())
            logs = captured_logs()
            assert any(r["event"] == "item_added" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("bottle_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Domain fixtures
# =============================================================================


@pytest.fixture
def deterministic_clock():
    """Provide a deterministic clock for testing."""
    return DeterministicClock(FIXED_TIME)


@pytest.fixture
def controller(deterministic_clock) -> InventoryController:
    return InventoryController(deterministic_clock)


def make_item(
    name: str = "Example IPA",
    quantity: int = 24,
    *,
    style: str = "IPA",
    alcohol_content: float = 6.5,
    is_metric: bool = True,
    size: int = 355,
    barcode: int = 123456789012,
) -> ItemRecord:
    """Build a candidate record (no id, never stamped)."""
    return ItemRecord(
        name=name,
        style=style,
        alcohol_content=alcohol_content,
        container_size=ContainerSize(is_metric, size),
        quantity=quantity,
        barcode=Barcode(barcode),
    )


@pytest.fixture
def item_factory():
    return make_item
