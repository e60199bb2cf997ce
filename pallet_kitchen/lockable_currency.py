"""Locking an account's capital under a fixed lock identifier."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable

from .currency import Balances, WithdrawReason
from .system import Origin, System, ensure_signed

EXAMPLE_ID = b"example "


@dataclass(frozen=True)
class Locked:
    account: Hashable
    amount: int


@dataclass(frozen=True)
class ExtendedLock:
    account: Hashable
    amount: int


@dataclass(frozen=True)
class Unlocked:
    account: Hashable


def _lock_reasons() -> WithdrawReason:
    return WithdrawReason.all_except(WithdrawReason.TRANSACTION_PAYMENT)


class LockableCurrency:
    """Sets, extends and removes a lock on the caller's funds.

    The lock lasts until block ``lock_period`` and applies to every
    withdrawal except transaction payment.
    """

    def __init__(self, system: System, currency: Balances, lock_period: int) -> None:
        self.system = system
        self.currency = currency
        self.lock_period = lock_period

    def lock_capital(self, origin: Origin, amount: int) -> None:
        user = ensure_signed(origin)
        self.currency.set_lock(
            EXAMPLE_ID, user, amount, self.lock_period, _lock_reasons()
        )
        self.system.deposit_event(Locked(user, amount))

    def extend_lock(self, origin: Origin, amount: int) -> None:
        user = ensure_signed(origin)
        self.currency.extend_lock(
            EXAMPLE_ID, user, amount, self.lock_period, _lock_reasons()
        )
        self.system.deposit_event(ExtendedLock(user, amount))

    def unlock_all(self, origin: Origin) -> None:
        user = ensure_signed(origin)
        self.currency.remove_lock(EXAMPLE_ID, user)
        self.system.deposit_event(Unlocked(user))