"""Weak randomness from the block's random seed and a nonce."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

from .system import Origin, System, ensure_signed


@dataclass(frozen=True)
class WeakEntropy:
    value: int


class GenRandom:
    """Derives a 64-bit number from the random seed and a nonce that advances per call.

    The result is predictable and must not be relied on for security.
    """

    def __init__(self, system: System) -> None:
        self.system = system
        self.nonce = 0

    def use_weak_entropy(self, origin: Origin) -> int:
        ensure_signed(origin)
        seed = self.system.random_seed()
        payload = seed + self.nonce.to_bytes(8, "little")
        digest = hashlib.blake2b(payload, digest_size=32).digest()
        value = int.from_bytes(digest[:8], "little")
        self.system.deposit_event(WeakEntropy(value))
        self.nonce += 1
        return value