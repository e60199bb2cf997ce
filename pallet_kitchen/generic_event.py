"""A module whose event carries a runtime type: the calling account."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable

from .system import Origin, System, ensure_signed


@dataclass(frozen=True)
class EmitInput:
    account: Hashable
    value: int


class GenericEvent:
    """Echoes its input back as an event together with the caller's account."""

    def __init__(self, system: System) -> None:
        self.system = system

    def do_something(self, origin: Origin, input_value: int) -> None:
        user = ensure_signed(origin)
        self.system.deposit_event(EmitInput(user, input_value))