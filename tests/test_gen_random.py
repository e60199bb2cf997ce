import pytest

from pallet_kitchen.gen_random import GenRandom, WeakEntropy
from pallet_kitchen.system import BadOrigin, System, root, signed


def test_emits_event_and_advances_nonce():
    system = System()
    module = GenRandom(system)
    value = module.use_weak_entropy(signed(1))
    assert system.events == [WeakEntropy(value)]
    assert module.nonce == 1


def test_value_fits_in_u64():
    module = GenRandom(System())
    values = [module.use_weak_entropy(signed(1)) for _ in range(5)]
    assert all(0 <= v < 2**64 for v in values)


def test_successive_values_differ():
    module = GenRandom(System())
    values = {module.use_weak_entropy(signed(1)) for _ in range(5)}
    assert len(values) == 5


def test_deterministic_for_same_block_and_nonce():
    first = GenRandom(System(block_number=3)).use_weak_entropy(signed(1))
    second = GenRandom(System(block_number=3)).use_weak_entropy(signed(2))
    other_block = GenRandom(System(block_number=4)).use_weak_entropy(signed(1))
    assert first == second
    assert first != other_block


def test_unsigned_origin_rejected():
    module = GenRandom(System())
    with pytest.raises(BadOrigin):
        module.use_weak_entropy(root())
    assert module.nonce == 0