"""
Breakage tracking.

``BreakageCounter`` is the running total of units written off as broken.
``BreakageState`` adds the sticky session flag and the ordered event log the
controller appends to.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class BreakageEvent:
    """One logged breakage: ``quantity`` units of ``name``."""

    name: str
    quantity: int


class BreakageCounter:
    """Running total of broken units."""

    def __init__(self) -> None:
        self._total = 0

    @property
    def total(self) -> int:
        return self._total

    def set_total(self, total: int) -> None:
        self._total = total

    def increment(self, amount: int) -> None:
        self._total += amount


@dataclass
class BreakageState:
    """
    Breakage flag, event log and counter for one session.

    Contract: ``flagged`` only ever goes from False to True.
    """

    flagged: bool = False
    events: list[BreakageEvent] = field(default_factory=list)
    counter: BreakageCounter = field(default_factory=BreakageCounter)

    def flag(self) -> None:
        self.flagged = True

    def record(self, name: str, quantity: int) -> BreakageEvent:
        event = BreakageEvent(name, quantity)
        self.events.append(event)
        self.counter.increment(quantity)
        return event

    @property
    def total_broken(self) -> int:
        return self.counter.total
