"""Minting rewards and burning collateral through imbalance handlers.

Any signed origin may call these, so they are for demonstration only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Hashable, Optional

from .currency import Balances, NegativeImbalance, PositiveImbalance
from .system import DispatchError, Origin, System, ensure_signed


@dataclass(frozen=True)
class SlashFunds:
    account: Hashable
    amount: int
    block_number: int


@dataclass(frozen=True)
class RewardFunds:
    account: Hashable
    amount: int
    block_number: int


class CurrencyImbalances:
    """Slashes reserved funds and rewards accounts, handing imbalances to handlers."""

    def __init__(
        self,
        system: System,
        currency: Balances,
        on_reward: Optional[Callable[[PositiveImbalance], None]] = None,
        on_slash: Optional[Callable[[NegativeImbalance], None]] = None,
    ) -> None:
        self.system = system
        self.currency = currency
        self.on_reward = on_reward
        self.on_slash = on_slash

    def slash_funds(self, origin: Origin, to_punish: Hashable, collateral: int) -> None:
        ensure_signed(origin)
        imbalance, _ = self.currency.slash_reserved(to_punish, collateral)
        if self.on_slash is not None:
            self.on_slash(imbalance)
        self.system.deposit_event(
            SlashFunds(to_punish, collateral, self.system.block_number)
        )

    def reward_funds(self, origin: Origin, to_reward: Hashable, reward: int) -> None:
        """Mint ``reward`` into an existing account; nothing is minted otherwise."""
        ensure_signed(origin)
        total = PositiveImbalance.zero()
        try:
            minted: Optional[PositiveImbalance] = self.currency.deposit_into_existing(
                to_reward, reward
            )
        except DispatchError:
            minted = None
        total.maybe_subsume(minted)
        if self.on_reward is not None:
            self.on_reward(total)
        self.system.deposit_event(
            RewardFunds(to_reward, reward, self.system.block_number)
        )