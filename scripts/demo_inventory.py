#!/usr/bin/env python3
"""
Bottle ledger walkthrough.

Flags breakage, stocks an IPA and a Stout, prints the stock list, the
breakage list and the per-name totals, edits the IPA and prints the grand
total.

Usage:
    python3 scripts/demo_inventory.py
    python3 scripts/demo_inventory.py --config my_ledger.yaml
    python3 scripts/demo_inventory.py --log   # JSON kernel logs on stderr
    python3 scripts/demo_inventory.py --log --session bar-1
"""

import argparse
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Project root on sys.path
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from bottle_config import get_active_config  # noqa: E402
from bottle_config.bridges import build_controller, configure_logging_from  # noqa: E402
from bottle_kernel.domain import Barcode, ContainerSize, ItemRecord, ItemUpdate  # noqa: E402
from bottle_kernel.logging_config import LogContext  # noqa: E402
from bottle_kernel.services import InventoryController  # noqa: E402

DIVIDER = "-----------------------"


def print_items(controller: InventoryController) -> None:
    print("List of added beers:")
    for item in controller.list_items():
        print(f"ID: {item.item_id}")
        print(f"Name: {item.name}")
        print(f"Style: {item.style}")
        print(f"Alcohol Content: {item.alcohol_content}%")
        print(f"Container Size: {item.container_size}")
        print(f"Quantity: {item.quantity} bottles")
        print(f"Barcode: {item.barcode}")
        print(f"Updated Date: {item.updated_date}")
        print(DIVIDER)


def print_flagged(controller: InventoryController) -> None:
    events = list(controller.list_flagged())
    if not events:
        print("No beers flagged for breakage.")
        return
    print("List of flagged beers for breakage:")
    for event in events:
        print(f"Name: {event.name}")
        print(f"Quantity: {event.quantity} bottles")
        print(DIVIDER)


def print_totals(controller: InventoryController) -> None:
    print("Total counts of each beer type:")
    for name, count in controller.list_totals():
        print(f"{name}: {count} bottles")


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--config", type=Path, default=None,
                        help="ledger YAML config (default: packaged defaults)")
    parser.add_argument("--log", action="store_true",
                        help="emit structured kernel logs to stderr")
    parser.add_argument("--session", default="demo",
                        help="session id stamped on every kernel log line")
    args = parser.parse_args()

    config = get_active_config(args.config)
    if args.log:
        configure_logging_from(config)
    controller = build_controller(config)

    with LogContext.bind(session_id=args.session):
        run_session(controller)
    return 0


def run_session(controller: InventoryController) -> None:
    controller.flag_breakage()

    for candidate in (
        ItemRecord("Example IPA", "IPA", 6.5, ContainerSize(True, 355), 24,
                   Barcode(123456)),
        ItemRecord("Sample Stout", "Stout", 7.0, ContainerSize(False, 12), 12,
                   Barcode(789012)),
    ):
        print(controller.add(candidate).message)

    print_items(controller)
    print_flagged(controller)
    print_totals(controller)

    result = controller.edit(
        "Example IPA",
        ItemUpdate(name="Example Hazy IPA", alcohol_content=6.8, quantity=30),
    )
    print(result.message)

    print(f"Total beer count in stock: {controller.total_count()} bottles.")


if __name__ == "__main__":
    sys.exit(main())
