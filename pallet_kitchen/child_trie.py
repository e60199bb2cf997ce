"""Child-trie storage keyed by hashed identifiers, and a small module using it."""

from __future__ import annotations

import hashlib
from typing import Any, Hashable, Optional

CHILD_STORAGE_KEY_PREFIX = b":child_storage:"
DEFAULT_CHILD_TYPE = b"default:"
EXAMPLE_TAG = b"exchildtr"

_ID_PREFIX = CHILD_STORAGE_KEY_PREFIX + DEFAULT_CHILD_TYPE


def encode_account(account: Hashable) -> bytes:
    """Encode an account id: integers as little-endian u64, bytes as is, text as UTF-8."""
    if isinstance(account, bool):
        raise TypeError("booleans are not account ids")
    if isinstance(account, int):
        if not 0 <= account < 1 << 64:
            raise ValueError("integer account ids must fit in 64 bits")
        return account.to_bytes(8, "little")
    if isinstance(account, (bytes, bytearray, memoryview)):
        return bytes(account)
    if isinstance(account, str):
        return account.encode("utf-8")
    raise TypeError(f"cannot encode account id of type {type(account).__name__}")


def id_from_index(tag: bytes, index: int) -> bytes:
    """The storage key of the child trie numbered ``index`` under ``tag``."""
    if not 0 <= index < 1 << 32:
        raise ValueError("index must fit in 32 bits")
    digest = hashlib.blake2b(
        bytes(tag) + index.to_bytes(4, "little"), digest_size=32
    ).digest()
    return _ID_PREFIX + digest


def trie_unique_id(fund_id: bytes) -> bytes:
    """The hash part of a child-trie storage key."""
    fund_id = bytes(fund_id)
    if not fund_id.startswith(_ID_PREFIX):
        raise ValueError("not a default child storage key")
    return fund_id[len(_ID_PREFIX):]


class ChildStorage:
    """A set of child tries, each a separate key-value store that can be dropped at once."""

    def __init__(self) -> None:
        self._tries: dict[bytes, dict[bytes, Any]] = {}

    def put(self, trie_id: bytes, key: bytes, value: Any) -> None:
        self._tries.setdefault(trie_unique_id(trie_id), {})[bytes(key)] = value

    def get(self, trie_id: bytes, key: bytes, default: Any = None) -> Any:
        return self._tries.get(trie_unique_id(trie_id), {}).get(bytes(key), default)

    def kill(self, trie_id: bytes, key: bytes) -> None:
        unique = trie_unique_id(trie_id)
        trie = self._tries.get(unique)
        if trie is None:
            return
        trie.pop(bytes(key), None)
        if not trie:
            del self._tries[unique]

    def kill_storage(self, trie_id: bytes) -> None:
        self._tries.pop(trie_unique_id(trie_id), None)


class ChildTrie:
    """Per-object child tries mapping accounts to 32-bit values."""

    def __init__(self, storage: Optional[ChildStorage] = None) -> None:
        self.storage = storage if storage is not None else ChildStorage()

    def kv_put(self, index: int, who: Hashable, value: int) -> None:
        self.storage.put(id_from_index(EXAMPLE_TAG, index), encode_account(who), value)

    def kv_get(self, index: int, who: Hashable) -> int:
        return self.storage.get(
            id_from_index(EXAMPLE_TAG, index), encode_account(who), 0
        )

    def kv_kill(self, index: int, who: Hashable) -> None:
        self.storage.kill(id_from_index(EXAMPLE_TAG, index), encode_account(who))

    def kill_trie(self, index: int) -> None:
        self.storage.kill_storage(id_from_index(EXAMPLE_TAG, index))