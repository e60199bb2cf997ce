"""A fixed-supply token handed to its initialiser and then transferable."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable

from .system import (
    DispatchError,
    Origin,
    System,
    checked_add,
    checked_sub,
    ensure_signed,
)

TOTAL_SUPPLY = 21_000_000


@dataclass(frozen=True)
class Transfer:
    source: Hashable
    dest: Hashable
    value: int


class BasicToken:
    """Gives the whole supply to the first caller of ``init``; balances are 64-bit."""

    def __init__(self, system: System) -> None:
        self.system = system
        self.total_supply = TOTAL_SUPPLY
        self.is_init = False
        self._balances: dict[Hashable, int] = {}

    def get_balance(self, account: Hashable) -> int:
        return self._balances.get(account, 0)

    def init(self, origin: Origin) -> None:
        sender = ensure_signed(origin)
        if self.is_init:
            raise DispatchError("Already initialized.")
        self._balances[sender] = self.total_supply
        self.is_init = True

    def transfer(self, origin: Origin, to: Hashable, value: int) -> None:
        sender = ensure_signed(origin)
        sender_balance = self.get_balance(sender)
        if sender_balance < value:
            raise DispatchError("Not enough balance.")
        updated_from = checked_sub(sender_balance, value)
        if updated_from is None:
            raise DispatchError("overflow in calculating balance")
        receiver_balance = self.get_balance(to)
        updated_to = checked_add(receiver_balance, value, 64)
        if updated_to is None:
            raise DispatchError("overflow in calculating balance")
        self._balances[sender] = updated_from
        self._balances[to] = updated_to
        self.system.deposit_event(Transfer(sender, to, value))