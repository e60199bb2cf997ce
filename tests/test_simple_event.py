import pytest

from pallet_kitchen.simple_event import EmitInput, SimpleEvent
from pallet_kitchen.system import BadOrigin, System, root, signed


def test_emits_input():
    system = System()
    SimpleEvent(system).do_something(signed(1), 32)
    assert system.events == [EmitInput(32)]


def test_root_rejected():
    system = System()
    with pytest.raises(BadOrigin):
        SimpleEvent(system).do_something(root(), 32)
    assert system.events == []