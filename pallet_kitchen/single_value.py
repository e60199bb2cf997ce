"""Single-value storage for a number and an account, with events on read and write."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Optional

from .system import DispatchError, Origin, System, ensure_signed


@dataclass(frozen=True)
class ValueSet:
    value: int
    block_number: int


@dataclass(frozen=True)
class ValueGet:
    value: int
    block_number: int


@dataclass(frozen=True)
class AccountSet:
    account: Hashable
    block_number: int


@dataclass(frozen=True)
class AccountGet:
    account: Hashable
    block_number: int


class SingleValue:
    """Holds one value and one account; reads fail until each has been set."""

    def __init__(self, system: System) -> None:
        self.system = system
        self.value: Optional[int] = None
        self.account: Optional[Hashable] = None

    def set_value(self, origin: Origin, value: int) -> None:
        ensure_signed(origin)
        now = self.system.block_number
        self.value = value
        self.system.deposit_event(ValueSet(value, now))

    def get_value(self, origin: Origin) -> int:
        ensure_signed(origin)
        now = self.system.block_number
        if self.value is None:
            raise DispatchError("value does not exist")
        self.system.deposit_event(ValueGet(self.value, now))
        return self.value

    def set_account(self, origin: Origin, account_to_set: Hashable) -> None:
        ensure_signed(origin)
        now = self.system.block_number
        self.account = account_to_set
        self.system.deposit_event(AccountSet(account_to_set, now))

    def get_account(self, origin: Origin) -> Hashable:
        ensure_signed(origin)
        now = self.system.block_number
        if self.account is None:
            raise DispatchError("account dne")
        self.system.deposit_event(AccountGet(self.account, now))
        return self.account