"""A very small module storing the last value set and each user's value."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable

from .system import Origin, System, ensure_signed


@dataclass(frozen=True)
class ValueSet:
    account: Hashable
    value: int


class HelloSubstrate:
    """Stores the last value set by anyone and the last value set by each account."""

    def __init__(self, system: System) -> None:
        self.system = system
        self.last_value = 0
        self._user_values: dict[Hashable, int] = {}

    def set_value(self, origin: Origin, value: int) -> None:
        setter = ensure_signed(origin)
        self.last_value = value
        self._user_values[setter] = value
        self.system.deposit_event(ValueSet(setter, value))

    def user_value(self, account: Hashable) -> int:
        return self._user_values.get(account, 0)