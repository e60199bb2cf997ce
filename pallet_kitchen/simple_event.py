"""A module emitting a plain event that does not depend on runtime types."""

from __future__ import annotations

from dataclasses import dataclass

from .system import Origin, System, ensure_signed


@dataclass(frozen=True)
class EmitInput:
    value: int


class SimpleEvent:
    """Echoes its input back as an event."""

    def __init__(self, system: System) -> None:
        self.system = system

    def do_something(self, origin: Origin, input_value: int) -> None:
        ensure_signed(origin)
        self.system.deposit_event(EmitInput(input_value))