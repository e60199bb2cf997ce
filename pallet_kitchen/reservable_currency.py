"""Reserving, releasing and transferring funds of a reservable currency."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable

from .currency import Balances
from .system import DispatchError, Origin, System, ensure_signed


@dataclass(frozen=True)
class LockFunds:
    account: Hashable
    amount: int
    block_number: int


@dataclass(frozen=True)
class UnlockFunds:
    account: Hashable
    amount: int
    block_number: int


@dataclass(frozen=True)
class TransferFunds:
    source: Hashable
    dest: Hashable
    amount: int
    block_number: int


class ReservableCurrency:
    """Calls that reserve collateral, release it and move funds between accounts."""

    def __init__(self, system: System, currency: Balances) -> None:
        self.system = system
        self.currency = currency

    def lock_funds(self, origin: Origin, amount: int) -> None:
        locker = ensure_signed(origin)
        try:
            self.currency.reserve(locker, amount)
        except DispatchError as exc:
            raise DispatchError(
                "locker can't afford to lock the amount requested"
            ) from exc
        self.system.deposit_event(LockFunds(locker, amount, self.system.block_number))

    def unlock_funds(self, origin: Origin, amount: int) -> None:
        """Release up to ``amount`` of reserved funds; never fails."""
        unlocker = ensure_signed(origin)
        self.currency.unreserve(unlocker, amount)
        self.system.deposit_event(
            UnlockFunds(unlocker, amount, self.system.block_number)
        )

    def transfer_funds(self, origin: Origin, dest: Hashable, amount: int) -> None:
        sender = ensure_signed(origin)
        self.currency.transfer(sender, dest, amount)
        self.system.deposit_event(
            TransferFunds(sender, dest, amount, self.system.block_number)
        )

    def unreserve_and_transfer(
        self, origin: Origin, to_punish: Hashable, dest: Hashable, collateral: int
    ) -> None:
        """Release ``to_punish``'s collateral and hand what was released to ``dest``.

        Any signed origin may call this.
        """
        ensure_signed(origin)
        unreserved = self.currency.unreserve(to_punish, collateral)
        self.currency.transfer(to_punish, dest, unreserved)
        self.system.deposit_event(
            TransferFunds(to_punish, dest, unreserved, self.system.block_number)
        )