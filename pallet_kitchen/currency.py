"""An in-memory currency with free and reserved balances, locks and imbalances."""

from __future__ import annotations

import enum
import functools
import operator
from dataclasses import dataclass, field
from typing import Hashable, Optional

from .system import DispatchError, System


class WithdrawReason(enum.Flag):
    """Why funds leave an account; locks apply only to overlapping reasons."""

    TRANSACTION_PAYMENT = enum.auto()
    TRANSFER = enum.auto()
    RESERVE = enum.auto()
    FEE = enum.auto()
    TIP = enum.auto()

    @classmethod
    def all(cls) -> "WithdrawReason":
        return functools.reduce(operator.or_, cls, cls(0))

    @classmethod
    def all_except(cls, reason: "WithdrawReason") -> "WithdrawReason":
        return functools.reduce(
            operator.or_, (m for m in cls if not m & reason), cls(0)
        )


@dataclass
class _Imbalance:
    amount: int = 0

    @classmethod
    def zero(cls):
        return cls(0)

    def subsume(self, other: "_Imbalance") -> None:
        """Absorb ``other`` into this imbalance, leaving ``other`` empty."""
        if type(other) is not type(self):
            raise TypeError("cannot merge imbalances of different kinds")
        self.amount += other.amount
        other.amount = 0

    def maybe_subsume(self, other: Optional["_Imbalance"]) -> None:
        if other is not None:
            self.subsume(other)


class PositiveImbalance(_Imbalance):
    """Funds created in some account without being taken from another."""


class NegativeImbalance(_Imbalance):
    """Funds removed from some account without being given to another."""


@dataclass(frozen=True)
class _Lock:
    amount: int
    until: int
    reasons: WithdrawReason


@dataclass
class _Account:
    free: int = 0
    reserved: int = 0

    @property
    def total(self) -> int:
        return self.free + self.reserved


def _check_amount(value: int) -> None:
    if value < 0:
        raise ValueError("amounts cannot be negative")


@dataclass
class Balances:
    """Accounts with free and reserved funds, withdrawal locks and total issuance.

    Withdrawals burn funds from the issuance and deposits mint them. An account
    whose total falls to zero or below the existential deposit is removed.
    Locks are active while the current block number is below their ``until``.
    """

    system: Optional[System] = None
    existential_deposit: int = 0
    total_issuance: int = field(default=0, init=False)
    _accounts: dict = field(default_factory=dict, init=False, repr=False)
    _locks: dict = field(default_factory=dict, init=False, repr=False)

    def _now(self) -> int:
        return self.system.block_number if self.system is not None else 0

    def _exists(self, who: Hashable) -> bool:
        return who in self._accounts

    def _locked(self, who: Hashable, reasons: WithdrawReason) -> int:
        now = self._now()
        return max(
            (
                lock.amount
                for lock in self._locks.get(who, {}).values()
                if lock.until > now and lock.reasons & reasons
            ),
            default=0,
        )

    def _ensure_can_withdraw(
        self, who: Hashable, new_free: int, reasons: WithdrawReason
    ) -> None:
        if new_free < self._locked(who, reasons):
            raise DispatchError("account liquidity restrictions prevent withdrawal")

    def _reap_if_dust(self, who: Hashable) -> None:
        account = self._accounts.get(who)
        if account is None:
            return
        if account.total == 0 or account.total < self.existential_deposit:
            self.total_issuance -= account.total
            del self._accounts[who]

    def free_balance(self, who: Hashable) -> int:
        account = self._accounts.get(who)
        return account.free if account else 0

    def reserved_balance(self, who: Hashable) -> int:
        account = self._accounts.get(who)
        return account.reserved if account else 0

    def deposit_creating(self, who: Hashable, value: int) -> PositiveImbalance:
        """Mint ``value`` into ``who``, creating the account if it is large enough."""
        _check_amount(value)
        if not self._exists(who) and (value == 0 or value < self.existential_deposit):
            return PositiveImbalance(0)
        self._accounts.setdefault(who, _Account()).free += value
        self.total_issuance += value
        return PositiveImbalance(value)

    def deposit_into_existing(self, who: Hashable, value: int) -> PositiveImbalance:
        _check_amount(value)
        if not self._exists(who):
            raise DispatchError("beneficiary account must pre-exist")
        self._accounts[who].free += value
        self.total_issuance += value
        return PositiveImbalance(value)

    def withdraw(
        self,
        who: Hashable,
        value: int,
        reasons: WithdrawReason = WithdrawReason.TRANSFER,
    ) -> NegativeImbalance:
        """Burn ``value`` from the free balance of ``who``."""
        _check_amount(value)
        free = self.free_balance(who)
        if free < value:
            raise DispatchError("too few free funds in account")
        self._ensure_can_withdraw(who, free - value, reasons)
        if value:
            self._accounts[who].free -= value
            self.total_issuance -= value
            self._reap_if_dust(who)
        return NegativeImbalance(value)

    def transfer(self, source: Hashable, dest: Hashable, value: int) -> None:
        _check_amount(value)
        free = self.free_balance(source)
        if free < value:
            raise DispatchError("balance too low to send value")
        self._ensure_can_withdraw(source, free - value, WithdrawReason.TRANSFER)
        if not self._exists(dest) and value < self.existential_deposit:
            raise DispatchError("value too low to create account")
        if source == dest or value == 0:
            return
        self._accounts[source].free -= value
        self._accounts.setdefault(dest, _Account()).free += value
        self._reap_if_dust(source)
        self._reap_if_dust(dest)

    def reserve(self, who: Hashable, value: int) -> None:
        """Move ``value`` from free to reserved funds."""
        _check_amount(value)
        free = self.free_balance(who)
        if free < value:
            raise DispatchError("not enough free funds")
        self._ensure_can_withdraw(who, free - value, WithdrawReason.RESERVE)
        if value:
            account = self._accounts[who]
            account.free -= value
            account.reserved += value

    def unreserve(self, who: Hashable, value: int) -> int:
        """Move up to ``value`` back to free funds; returns the amount moved."""
        _check_amount(value)
        account = self._accounts.get(who)
        if account is None:
            return 0
        moved = min(value, account.reserved)
        account.reserved -= moved
        account.free += moved
        return moved

    def slash_reserved(
        self, who: Hashable, value: int
    ) -> tuple[NegativeImbalance, int]:
        """Burn up to ``value`` of reserved funds; returns the imbalance and the shortfall."""
        _check_amount(value)
        account = self._accounts.get(who)
        slashed = min(value, account.reserved) if account else 0
        if slashed:
            account.reserved -= slashed
            self.total_issuance -= slashed
            self._reap_if_dust(who)
        return NegativeImbalance(slashed), value - slashed

    def set_lock(
        self,
        lock_id: bytes,
        who: Hashable,
        amount: int,
        until: int,
        reasons: WithdrawReason,
    ) -> None:
        """Create or replace the lock ``lock_id`` on ``who``."""
        _check_amount(amount)
        if amount == 0 or not reasons:
            self.remove_lock(lock_id, who)
            return
        self._locks.setdefault(who, {})[bytes(lock_id)] = _Lock(amount, until, reasons)

    def extend_lock(
        self,
        lock_id: bytes,
        who: Hashable,
        amount: int,
        until: int,
        reasons: WithdrawReason,
    ) -> None:
        """Widen an existing lock to the larger amount and period, or create it."""
        _check_amount(amount)
        existing = self._locks.get(who, {}).get(bytes(lock_id))
        if existing is not None:
            amount = max(amount, existing.amount)
            until = max(until, existing.until)
            reasons = reasons | existing.reasons
        self.set_lock(lock_id, who, amount, until, reasons)

    def remove_lock(self, lock_id: bytes, who: Hashable) -> None:
        locks = self._locks.get(who)
        if locks is None:
            return
        locks.pop(bytes(lock_id), None)
        if not locks:
            del self._locks[who]

    def locks(self, who: Hashable) -> dict[bytes, _Lock]:
        return dict(self._locks.get(who, {}))

    def resolve_creating(self, who: Hashable, imbalance: NegativeImbalance) -> None:
        """Credit withdrawn funds to ``who``, creating the account if needed."""
        self.deposit_creating(who, imbalance.amount)
        imbalance.amount = 0

    def resolve_into_existing(
        self, who: Hashable, imbalance: NegativeImbalance
    ) -> None:
        """Credit withdrawn funds to an existing account; raises if it does not exist."""
        self.deposit_into_existing(who, imbalance.amount)
        imbalance.amount = 0