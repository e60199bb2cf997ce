"""A value with a configurable maximum addend, cleared every few blocks."""

from __future__ import annotations

from dataclasses import dataclass

from .system import DispatchError, Origin, System, checked_add, ensure_signed


@dataclass(frozen=True)
class Added:
    initial: int
    added: int
    final: int


@dataclass(frozen=True)
class Cleared:
    amount: int


class ConstantConfig:
    """Accumulates a 32-bit value; additions are capped and the value resets periodically."""

    def __init__(self, system: System, max_addend: int, clear_frequency: int) -> None:
        if clear_frequency <= 0:
            raise ValueError("clear frequency must be positive")
        self.system = system
        self.max_addend = max_addend
        self.clear_frequency = clear_frequency
        self.single_value = 0

    def add_value(self, origin: Origin, val_to_add: int) -> None:
        ensure_signed(origin)
        if val_to_add > self.max_addend:
            raise DispatchError("value must be <= maximum add amount constant")
        current = self.single_value
        result = checked_add(current, val_to_add, 32)
        if result is None:
            raise DispatchError("Addition overflowed")
        self.single_value = result
        self.system.deposit_event(Added(current, val_to_add, result))

    def on_finalize(self, n: int) -> None:
        if n % self.clear_frequency == 0:
            current = self.single_value
            self.single_value = 0
            self.system.deposit_event(Cleared(current))

    def set_value(self, origin: Origin, value: int) -> None:
        ensure_signed(origin)
        self.single_value = value