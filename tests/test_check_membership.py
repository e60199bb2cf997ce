import pytest

from pallet_kitchen.check_membership import (
    AddMember,
    CheckMembership,
    OwnershipInitiated,
    OwnershipTransferred,
    RemoveMember,
)
from pallet_kitchen.system import BadOrigin, DispatchError, System, root, signed


@pytest.fixture
def system():
    return System()


@pytest.fixture
def module(system):
    return CheckMembership(system)


def test_init_ownership_sets_owner_once(system, module):
    module.init_ownership(signed(1))
    assert module.owner == 1
    assert system.has_event(OwnershipInitiated(1))
    with pytest.raises(DispatchError, match="Owner already exists"):
        module.init_ownership(signed(2))
    assert module.owner == 1


def test_init_ownership_requires_signed(module):
    with pytest.raises(BadOrigin):
        module.init_ownership(root())
    assert module.owner is None


def test_transfer_ownership_by_owner(system, module):
    module.init_ownership(signed(1))
    module.transfer_ownership(signed(1), 2)
    assert module.owner == 2
    assert system.has_event(OwnershipTransferred(1, 2))


def test_transfer_ownership_by_non_owner_fails(module):
    module.init_ownership(signed(1))
    with pytest.raises(
        DispatchError, match="This function can only be called by the owner"
    ):
        module.transfer_ownership(signed(3), 3)
    assert module.owner == 1


def test_transfer_without_owner_fails(module):
    with pytest.raises(DispatchError):
        module.transfer_ownership(signed(1), 2)


def test_add_and_remove_member(system, module):
    module.add_member(signed(1))
    module.add_member(signed(2))
    assert module.members == [1, 2]
    assert module.is_member(1)
    with pytest.raises(DispatchError, match="already a member"):
        module.add_member(signed(1))
    module.remove_member(signed(1))
    assert module.members == [2]
    assert not module.is_member(1)
    assert system.events == [AddMember(1), AddMember(2), RemoveMember(1)]


def test_remove_non_member_fails(module):
    with pytest.raises(
        DispatchError, match="not a member so can't be taken out of the set"
    ):
        module.remove_member(signed(5))