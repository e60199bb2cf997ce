import pytest

from pallet_kitchen.basic_token import BasicToken, Transfer
from pallet_kitchen.system import BadOrigin, DispatchError, System, root, signed


@pytest.fixture
def system():
    return System()


@pytest.fixture
def token(system):
    return BasicToken(system)


def test_init_gives_total_supply(token):
    token.init(signed(1))
    assert token.get_balance(1) == 21000000
    assert token.is_init


def test_init_only_once(token):
    token.init(signed(1))
    with pytest.raises(DispatchError, match="Already initialized."):
        token.init(signed(2))
    assert token.get_balance(2) == 0


def test_transfer_moves_value_and_keeps_supply(system, token):
    token.init(signed(1))
    token.transfer(signed(1), 2, 100)
    assert token.get_balance(2) == 100
    assert token.get_balance(1) == token.total_supply - 100
    assert token.get_balance(1) + token.get_balance(2) == token.total_supply
    assert system.events == [Transfer(1, 2, 100)]


def test_transfer_without_balance_fails(system, token):
    with pytest.raises(DispatchError, match="Not enough balance."):
        token.transfer(signed(3), 1, 1)
    assert system.events == []


def test_transfer_receiver_overflow(token):
    token.init(signed(1))
    token._balances[2] = 2**64 - 1
    with pytest.raises(DispatchError, match="overflow in calculating balance"):
        token.transfer(signed(1), 2, 1)
    assert token.get_balance(1) == token.total_supply


def test_unsigned_origin_rejected(token):
    with pytest.raises(BadOrigin):
        token.init(root())
    assert not token.is_init