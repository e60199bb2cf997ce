"""An adding machine that checks for overflow and emits the result as an event."""

from __future__ import annotations

from dataclasses import dataclass

from .system import DispatchError, Origin, System, checked_add, ensure_signed


@dataclass(frozen=True)
class Added:
    val1: int
    val2: int
    result: int


class AddingMachine:
    """Adds two 32-bit unsigned values without keeping any storage."""

    def __init__(self, system: System) -> None:
        self.system = system

    def add(self, origin: Origin, val1: int, val2: int) -> None:
        ensure_signed(origin)
        result = checked_add(val1, val2, 32)
        if result is None:
            raise DispatchError("Addition overflowed")
        self.system.deposit_event(Added(val1, val2, result))