import pytest

from pallet_kitchen.execution_schedule import (
    ExecutionSchedule,
    SignalRefreshed,
    SignalSupport,
    Task,
    TaskExecuted,
    TaskScheduled,
)
from pallet_kitchen.system import BadOrigin, DispatchError, System, root, signed


def make(signal_quota=100, execution_frequency=5, task_limit=10):
    system = System()
    return system, ExecutionSchedule(system, signal_quota, execution_frequency, task_limit)


def run_to_block(system, schedule, n):
    while system.block_number < n:
        schedule.on_finalize(system.block_number)
        system.set_block_number(system.block_number + 1)
        schedule.on_initialize(system.block_number + 1)


def test_eras_change_correctly():
    system, schedule = make(execution_frequency=2)
    system.set_block_number(1)
    run_to_block(system, schedule, 13)
    assert schedule.era == 6
    run_to_block(system, schedule, 32)
    assert schedule.era == 16


@pytest.mark.parametrize("block, expected", [(5, 8), (67, 72)])
def test_estimator_works(block, expected):
    _, schedule = make(execution_frequency=8)
    assert schedule.execution_estimate(block) == expected


def test_schedule_task_behaves():
    system, schedule = make(execution_frequency=10)
    schedule.add_member(1)
    assert schedule.is_on_council(1)
    system.set_block_number(2)
    new_task = bytes(range(32))
    schedule.schedule_task(signed(1), new_task)

    assert schedule.pending_task(new_task) == Task(new_task, 0, 2)
    assert schedule.execution_queue == [new_task]
    assert system.has_event(TaskScheduled(1, new_task, 10))


def test_priority_signalling_behaves():
    system, schedule = make(execution_frequency=5, signal_quota=10, task_limit=1)
    system.set_block_number(2)
    new_task = b"\x07" * 32
    schedule.add_member(1)
    schedule.add_member(2)

    run_to_block(system, schedule, 7)

    schedule.schedule_task(signed(2), new_task)
    schedule.signal_priority(signed(1), new_task, 2)

    assert schedule.signal_bank(1, 1) == 8
    assert schedule.pending_task(new_task).score == 2
    assert system.has_event(SignalSupport(new_task, 2))


def test_signal_refresh_emits_event_and_fills_quota():
    system, schedule = make(execution_frequency=5, signal_quota=10)
    schedule.add_member(3)
    schedule.on_initialize(6)
    assert schedule.era == 1
    assert schedule.signal_bank(1, 3) == 10
    assert system.has_event(SignalRefreshed(6))


def test_refresh_drops_previous_era():
    _, schedule = make(execution_frequency=5, signal_quota=10)
    schedule.add_member(3)
    schedule.on_initialize(6)
    schedule.on_initialize(11)
    assert schedule.era == 2
    assert schedule.signal_bank(1, 3) == 0
    assert schedule.signal_bank(2, 3) == 10


def test_on_initialize_outside_period_does_nothing():
    system, schedule = make(execution_frequency=5)
    schedule.on_initialize(3)
    assert schedule.era == 0
    assert system.events == []


def test_schedule_task_requires_council():
    _, schedule = make()
    with pytest.raises(DispatchError, match="only members of the council"):
        schedule.schedule_task(signed(9), b"task")


def test_schedule_task_requires_signed_origin():
    _, schedule = make()
    with pytest.raises(BadOrigin):
        schedule.schedule_task(root(), b"task")


def test_signal_priority_requires_council():
    _, schedule = make()
    with pytest.raises(DispatchError, match="must be on the council"):
        schedule.signal_priority(signed(9), b"task", 1)


def test_signal_priority_cannot_exceed_remaining_signal():
    _, schedule = make(signal_quota=3)
    schedule.add_member(1)
    schedule.on_initialize(1)
    schedule.schedule_task(signed(1), b"task")
    with pytest.raises(DispatchError, match="cannot signal more"):
        schedule.signal_priority(signed(1), b"task", 4)
    assert schedule.signal_bank(1, 1) == 3


def test_signal_priority_unknown_task():
    _, schedule = make(signal_quota=3)
    schedule.add_member(1)
    schedule.on_initialize(1)
    with pytest.raises(DispatchError, match="did not exist"):
        schedule.signal_priority(signed(1), b"missing", 1)
    assert schedule.signal_bank(1, 1) == 3


def test_signal_priority_overflow():
    _, schedule = make(signal_quota=2**32 - 1)
    schedule.add_member(1)
    schedule.add_member(2)
    schedule.on_initialize(1)
    schedule.schedule_task(signed(1), b"task")
    schedule.signal_priority(signed(1), b"task", 2**32 - 1)
    with pytest.raises(DispatchError, match="overflowed"):
        schedule.signal_priority(signed(2), b"task", 1)
    assert schedule.pending_task(b"task").score == 2**32 - 1


def test_execute_tasks_respects_allowance():
    system, schedule = make(signal_quota=100, execution_frequency=5, task_limit=10)
    schedule.add_member(1)
    schedule.on_initialize(1)
    for task_id in (b"c", b"a", b"b"):
        schedule.schedule_task(signed(1), task_id)
    schedule.signal_priority(signed(1), b"b", 7)
    schedule.signal_priority(signed(1), b"c", 5)

    schedule.on_finalize(5)

    executed = [e for e in system.events if isinstance(e, TaskExecuted)]
    assert executed == [TaskExecuted(b"a", 5), TaskExecuted(b"b", 5)]
    assert schedule.pending_task(b"a") is None
    assert schedule.pending_task(b"b") is None
    assert schedule.pending_task(b"c") == Task(b"c", 5, 0)


def test_on_finalize_outside_period_keeps_tasks():
    system, schedule = make(execution_frequency=5)
    schedule.add_member(1)
    schedule.schedule_task(signed(1), b"a")
    schedule.on_finalize(4)
    assert schedule.pending_task(b"a") == Task(b"a", 0, 0)
    assert not any(isinstance(e, TaskExecuted) for e in system.events)


def test_invalid_frequency_rejected():
    with pytest.raises(ValueError):
        ExecutionSchedule(System(), 10, 0, 10)