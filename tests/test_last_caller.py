import pytest

from pallet_kitchen.last_caller import Called, LastCaller
from pallet_kitchen.system import BadOrigin, System, root, signed


def test_call_records_caller_and_event():
    system = System()
    module = LastCaller(system)
    module.call(signed(7))
    assert module.caller == 7
    assert system.events == [Called(7)]


def test_later_call_overwrites_caller():
    system = System()
    module = LastCaller(system)
    module.call(signed(1))
    module.call(signed(2))
    assert module.caller == 2
    assert system.events == [Called(1), Called(2)]


def test_default_instance_name():
    module = LastCaller(System())
    assert module.instance == "DefaultInstance"


def test_instances_are_independent():
    system = System()
    first = LastCaller(system, "first")
    second = LastCaller(system, "second")
    first.call(signed(1))
    second.call(signed(2))
    assert first.caller == 1
    assert second.caller == 2


def test_unsigned_origin_rejected():
    system = System()
    module = LastCaller(system)
    with pytest.raises(BadOrigin):
        module.call(root())
    assert module.caller is None
    assert system.events == []