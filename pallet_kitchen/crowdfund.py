"""A simple crowdfund whose per-contributor balances live in child tries."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Callable, Hashable, Optional

from .child_trie import ChildStorage, encode_account, id_from_index
from .currency import Balances, NegativeImbalance, WithdrawReason
from .system import DispatchError, Origin, System, ensure_signed

MODULE_ID = b"ex/cfund"
_SUB_ACCOUNT_PREFIX = b"modl"
_ACCOUNT_ID_LENGTH = 32


@dataclass(frozen=True)
class FundInfo:
    """The terms and progress of one crowdfund."""

    owner: Hashable
    deposit: int
    raised: int
    start: int
    end: int
    cap: int


@dataclass(frozen=True)
class Created:
    index: int
    block_number: int


@dataclass(frozen=True)
class Contributed:
    account: Hashable
    index: int
    balance: int
    block_number: int


@dataclass(frozen=True)
class Withdrew:
    account: Hashable
    index: int
    balance: int
    block_number: int


@dataclass(frozen=True)
class Retiring:
    index: int
    block_number: int


@dataclass(frozen=True)
class Dissolved:
    index: int
    block_number: int


class Crowdfund:
    """Funds with a deposit, a cap and an end block; contributions sit in a pot account.

    Contributors may withdraw after a fund ends. Once the retirement period
    has passed, anyone may dissolve the fund: the owner gets the deposit back
    and whatever is still raised goes to ``orphaned_funds``.
    """

    def __init__(
        self,
        system: System,
        currency: Balances,
        submission_deposit: int,
        min_contribution: int,
        retirement_period: int,
        orphaned_funds: Optional[Callable[[NegativeImbalance], None]] = None,
    ) -> None:
        self.system = system
        self.currency = currency
        self.submission_deposit = submission_deposit
        self.min_contribution = min_contribution
        self.retirement_period = retirement_period
        self.orphaned_funds = orphaned_funds
        self.fund_count = 0
        self.new_raise: list[int] = []
        self.storage = ChildStorage()
        self._funds: dict[int, FundInfo] = {}

    def funds(self, index: int) -> Optional[FundInfo]:
        return self._funds.get(index)

    def _fund(self, index: int) -> FundInfo:
        fund = self._funds.get(index)
        if fund is None:
            raise DispatchError("invalid fund index")
        return fund

    def fund_account_id(self, index: int) -> bytes:
        """The account holding the pot of fund ``index``."""
        if not 0 <= index < 1 << 32:
            raise ValueError("fund index must fit in 32 bits")
        raw = _SUB_ACCOUNT_PREFIX + MODULE_ID + index.to_bytes(4, "little")
        return raw.ljust(_ACCOUNT_ID_LENGTH, b"\x00")

    def create(self, origin: Origin, cap: int, start: int, end: int) -> int:
        """Open a new fund, taking the submission deposit; returns its index."""
        owner = ensure_signed(origin)
        now = self.system.block_number
        if not start < end:
            raise DispatchError("must start before it ends")
        if not end > now:
            raise DispatchError("end must be in the future")
        deposit = self.submission_deposit
        imbalance = self.currency.withdraw(owner, deposit, WithdrawReason.TRANSFER)
        index = self.fund_count
        self.fund_count = index + 1
        self.currency.resolve_creating(self.fund_account_id(index), imbalance)
        self._funds[index] = FundInfo(
            owner=owner, deposit=deposit, raised=0, start=start, end=end, cap=cap
        )
        self.system.deposit_event(Created(index, now))
        return index

    def contribute(self, origin: Origin, index: int, value: int) -> None:
        who = ensure_signed(origin)
        if value < self.min_contribution:
            raise DispatchError("contribution too small")
        fund = self._fund(index)
        now = self.system.block_number
        if not fund.end > now:
            raise DispatchError("contribution period ended")
        if not fund.raised + value < fund.cap:
            raise DispatchError("contributions exceed cap")
        self.currency.transfer(who, self.fund_account_id(index), value)
        self._funds[index] = dataclasses.replace(fund, raised=fund.raised + value)
        balance = self.contribution_get(index, who) + value
        self.contribution_put(index, who, balance)
        self.system.deposit_event(Contributed(who, index, balance, now))

    def withdraw(self, origin: Origin, index: int) -> None:
        """Return a contributor's whole balance once the fund has ended."""
        who = ensure_signed(origin)
        fund = self._fund(index)
        now = self.system.block_number
        if not fund.end < now:
            raise DispatchError("no more withdrawals")
        balance = self.contribution_get(index, who)
        if not balance > 0:
            raise DispatchError("no contributions stored")
        imbalance = self.currency.withdraw(
            self.fund_account_id(index), balance, WithdrawReason.TRANSFER
        )
        try:
            self.currency.resolve_into_existing(who, imbalance)
        except DispatchError:
            pass
        self.contribution_kill(index, who)
        self._funds[index] = dataclasses.replace(
            fund, raised=max(fund.raised - balance, 0)
        )
        self.system.deposit_event(Withdrew(who, index, balance, now))

    def dissolve(self, origin: Origin, index: int) -> None:
        """Close a retired fund, refunding the deposit and handing off what is left."""
        ensure_signed(origin)
        fund = self._fund(index)
        now = self.system.block_number
        if now < fund.end + self.retirement_period:
            raise DispatchError("retirement period not over")
        account = self.fund_account_id(index)
        refund = self.currency.withdraw(account, fund.deposit, WithdrawReason.TRANSFER)
        try:
            self.currency.resolve_into_existing(fund.owner, refund)
        except DispatchError:
            pass
        orphaned = self.currency.withdraw(account, fund.raised, WithdrawReason.TRANSFER)
        if self.orphaned_funds is not None:
            self.orphaned_funds(orphaned)
        self.crowdfund_kill(index)
        del self._funds[index]
        self.system.deposit_event(Dissolved(index, now))

    def _trie_id(self, index: int) -> bytes:
        return id_from_index(MODULE_ID, index)

    def contribution_put(self, index: int, who: Hashable, balance: int) -> None:
        self.storage.put(self._trie_id(index), encode_account(who), balance)

    def contribution_get(self, index: int, who: Hashable) -> int:
        return self.storage.get(self._trie_id(index), encode_account(who), 0)

    def contribution_kill(self, index: int, who: Hashable) -> None:
        self.storage.kill(self._trie_id(index), encode_account(who))

    def crowdfund_kill(self, index: int) -> None:
        self.storage.kill_storage(self._trie_id(index))