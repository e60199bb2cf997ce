"""A storage map from accounts to 32-bit values, with the usual map operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable

from .system import DispatchError, Origin, System, checked_add, ensure_signed


@dataclass(frozen=True)
class EntrySet:
    account: Hashable
    entry: int


@dataclass(frozen=True)
class EntryGot:
    account: Hashable
    entry: int


@dataclass(frozen=True)
class EntryTook:
    account: Hashable
    entry: int


@dataclass(frozen=True)
class IncreaseEntry:
    old_entry: int
    new_entry: int


@dataclass(frozen=True)
class CompareAndSwap:
    old_entry: int
    new_entry: int


class SimpleMap:
    """Maps each account to a single unsigned 32-bit entry; missing entries read as 0."""

    def __init__(self, system: System) -> None:
        self.system = system
        self._entries: dict[Hashable, int] = {}

    def entry(self, account: Hashable) -> int:
        return self._entries.get(account, 0)

    def set_single_entry(self, origin: Origin, entry: int) -> None:
        user = ensure_signed(origin)
        self._entries[user] = entry
        self.system.deposit_event(EntrySet(user, entry))

    def get_single_entry(self, origin: Origin, account: Hashable) -> int:
        getter = ensure_signed(origin)
        if account not in self._entries:
            raise DispatchError("an entry does not exist for this user")
        entry = self._entries[account]
        self.system.deposit_event(EntryGot(getter, entry))
        return entry

    def take_single_entry(self, origin: Origin) -> int:
        user = ensure_signed(origin)
        if user not in self._entries:
            raise DispatchError("an entry does not exist for this user")
        entry = self._entries.pop(user)
        self.system.deposit_event(EntryTook(user, entry))
        return entry

    def increase_single_entry(self, origin: Origin, add_this_val: int) -> None:
        user = ensure_signed(origin)
        original = self.entry(user)
        new_value = checked_add(original, add_this_val, 32)
        if new_value is None:
            raise DispatchError("value overflowed")
        self._entries[user] = new_value
        self.system.deposit_event(IncreaseEntry(original, new_value))

    def compare_and_swap_single_entry(
        self, origin: Origin, old_entry: int, new_entry: int
    ) -> None:
        user = ensure_signed(origin)
        if old_entry != self.entry(user):
            raise DispatchError(
                "cas failed bc old_entry inputted by user != existing_entry"
            )
        self._entries[user] = new_entry
        self.system.deposit_event(CompareAndSwap(old_entry, new_entry))