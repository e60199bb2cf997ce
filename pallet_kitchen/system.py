"""Runtime plumbing shared by every module: origins, errors, events and blocks."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import Any, Hashable, Optional


class DispatchError(Exception):
    """A dispatchable call was rejected; the message says why."""


class BadOrigin(DispatchError):
    """The call's origin is not the kind the call requires."""


@dataclass(frozen=True)
class Origin:
    """Where a call comes from: a signing account, or root when ``account`` is None."""

    account: Optional[Hashable] = None

    @property
    def is_signed(self) -> bool:
        return self.account is not None


def signed(account: Hashable) -> Origin:
    """An origin signed by ``account``."""
    if account is None:
        raise ValueError("a signed origin needs an account")
    return Origin(account)


def root() -> Origin:
    """The unsigned root origin."""
    return Origin()


def ensure_signed(origin: Origin) -> Hashable:
    """Return the signing account of ``origin`` or raise :class:`BadOrigin`."""
    if not origin.is_signed:
        raise BadOrigin("bad origin: expected a signed origin")
    return origin.account


def checked_add(a: int, b: int, bits: int = 64) -> Optional[int]:
    """Add two unsigned integers of width ``bits``; None when the sum overflows."""
    result = a + b
    if result < 0 or result >= 1 << bits:
        return None
    return result


def checked_sub(a: int, b: int) -> Optional[int]:
    """Subtract unsigned integers; None when the result would go below zero."""
    result = a - b
    return None if result < 0 else result


@dataclass
class System:
    """Block number and the list of events deposited so far."""

    block_number: int = 0
    events: list[Any] = field(default_factory=list)

    def set_block_number(self, n: int) -> None:
        if n < 0:
            raise ValueError("block number cannot be negative")
        self.block_number = n

    def deposit_event(self, event: Any) -> None:
        self.events.append(event)

    def has_event(self, event: Any) -> bool:
        return event in self.events

    def random_seed(self) -> bytes:
        """A weak, deterministic 32-byte seed derived from the current block number."""
        return hashlib.blake2b(
            self.block_number.to_bytes(8, "little"), digest_size=32
        ).digest()