import pytest

from pallet_kitchen.child_trie import (
    CHILD_STORAGE_KEY_PREFIX,
    ChildStorage,
    ChildTrie,
    encode_account,
    id_from_index,
    trie_unique_id,
)


def test_id_layout():
    trie_id = id_from_index(b"exchildtr", 0)
    assert trie_id.startswith(CHILD_STORAGE_KEY_PREFIX + b"default:")
    assert len(trie_unique_id(trie_id)) == 32


def test_ids_differ_by_index_and_tag():
    assert id_from_index(b"exchildtr", 0) != id_from_index(b"exchildtr", 1)
    assert id_from_index(b"exchildtr", 0) != id_from_index(b"ex/cfund", 0)
    assert id_from_index(b"exchildtr", 7) == id_from_index(b"exchildtr", 7)


def test_id_index_out_of_range():
    with pytest.raises(ValueError):
        id_from_index(b"exchildtr", 2**32)


def test_trie_unique_id_rejects_foreign_key():
    with pytest.raises(ValueError):
        trie_unique_id(b"not a child key")


def test_encode_account():
    assert encode_account(1) == b"\x01" + bytes(7)
    assert encode_account(b"abc") == b"abc"
    with pytest.raises(TypeError):
        encode_account(1.5)


def test_storage_put_get_kill():
    storage = ChildStorage()
    trie_id = id_from_index(b"exchildtr", 3)
    storage.put(trie_id, b"k", 9)
    assert storage.get(trie_id, b"k") == 9
    storage.kill(trie_id, b"k")
    assert storage.get(trie_id, b"k", "missing") == "missing"


def test_kv_round_trip():
    tries = ChildTrie()
    tries.kv_put(1, 5, 42)
    assert tries.kv_get(1, 5) == 42
    assert tries.kv_get(2, 5) == 0
    tries.kv_kill(1, 5)
    assert tries.kv_get(1, 5) == 0


def test_kill_trie_removes_only_that_trie():
    tries = ChildTrie()
    tries.kv_put(1, 5, 42)
    tries.kv_put(1, 6, 43)
    tries.kv_put(2, 5, 44)
    tries.kill_trie(1)
    assert tries.kv_get(1, 5) == 0
    assert tries.kv_get(1, 6) == 0
    assert tries.kv_get(2, 5) == 44


def test_shared_storage():
    storage = ChildStorage()
    ChildTrie(storage).kv_put(0, 1, 11)
    assert ChildTrie(storage).kv_get(0, 1) == 11