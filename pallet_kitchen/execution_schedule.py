"""Council-driven task scheduling with priority signalling and batch execution."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Hashable, Optional

from .system import DispatchError, Origin, System, checked_add, ensure_signed


@dataclass(frozen=True)
class Task:
    """A queued task: its identifier, accumulated priority and proposal block."""

    id: bytes
    score: int
    proposed_at: int


@dataclass(frozen=True)
class SignalRefreshed:
    block_number: int


@dataclass(frozen=True)
class TaskScheduled:
    proposer: Hashable
    task_id: bytes
    expected_execution: int


@dataclass(frozen=True)
class SignalSupport:
    task_id: bytes
    signal: int


@dataclass(frozen=True)
class TaskExecuted:
    task_id: bytes
    block_number: int


@dataclass(frozen=True)
class UpdatedTaskSchedule:
    task_id: bytes
    block_number: int


class ExecutionSchedule:
    """Council members schedule tasks and signal priority; tasks run in batches.

    Every ``execution_frequency`` blocks the signal quota of each council
    member is refreshed for a new era, and pending tasks are executed in the
    order of their identifiers while the period's ``task_limit`` allows.
    """

    def __init__(
        self,
        system: System,
        signal_quota: int = 100,
        execution_frequency: int = 5,
        task_limit: int = 10,
    ) -> None:
        if execution_frequency <= 0:
            raise ValueError("execution frequency must be positive")
        self.system = system
        self.signal_quota = signal_quota
        self.execution_frequency = execution_frequency
        self.task_limit = task_limit
        self.council: list[Hashable] = []
        self.execution_queue: list[bytes] = []
        self.era = 0
        self._pending: dict[bytes, Task] = {}
        self._signal_bank: dict[int, dict[Hashable, int]] = {}

    def add_member(self, who: Hashable) -> None:
        """Seat ``who`` on the council with no signal until the next era."""
        self.council.append(who)
        self._signal_bank.setdefault(self.era, {})[who] = 0

    def is_on_council(self, who: Hashable) -> bool:
        return who in self.council

    def signal_bank(self, era: int, who: Hashable) -> int:
        """Remaining signal of ``who`` in ``era``; 0 when none is stored."""
        return self._signal_bank.get(era, {}).get(who, 0)

    def pending_task(self, task_id: bytes) -> Optional[Task]:
        return self._pending.get(bytes(task_id))

    def execution_estimate(self, n: int) -> int:
        """The block after ``n`` at which the next batch execution happens."""
        miss = n % self.execution_frequency
        return n + (self.execution_frequency - miss)

    def on_initialize(self, n: int) -> None:
        if n < 1:
            raise ValueError("block number must be at least 1")
        if (n - 1) % self.execution_frequency != 0:
            return
        last_era = self.era
        self._signal_bank.pop(last_era, None)
        next_era = last_era + 1
        self.era = next_era
        bank = self._signal_bank.setdefault(next_era, {})
        for member in self.council:
            bank[member] = self.signal_quota
        self.system.deposit_event(SignalRefreshed(n))

    def schedule_task(self, origin: Origin, data: bytes) -> None:
        proposer = ensure_signed(origin)
        if not self.is_on_council(proposer):
            raise DispatchError("only members of the council can schedule tasks")
        task_id = bytes(data)
        proposed_at = self.system.block_number
        expected_execution = self.execution_estimate(proposed_at)
        self._pending[task_id] = Task(task_id, 0, proposed_at)
        self.execution_queue.append(task_id)
        self.system.deposit_event(
            TaskScheduled(proposer, task_id, expected_execution)
        )

    def signal_priority(self, origin: Origin, task_id: bytes, signal: int) -> None:
        voter = ensure_signed(origin)
        if not self.is_on_council(voter):
            raise DispatchError("The voting member must be on the council")
        current_era = self.era
        voters_signal = self.signal_bank(current_era, voter)
        if voters_signal < signal:
            raise DispatchError(
                "The voter cannot signal more than the remaining signal"
            )
        task_id = bytes(task_id)
        task = self._pending.get(task_id)
        if task is None:
            raise DispatchError(
                "the task did not exist in the PendingTasks storage map"
            )
        new_score = checked_add(task.score, signal, 32)
        if new_score is None:
            raise DispatchError("task is too popular and signal support overflowed")
        self._pending[task_id] = dataclasses.replace(task, score=new_score)
        self._signal_bank.setdefault(current_era, {})[voter] = voters_signal - signal
        self.system.deposit_event(SignalSupport(task_id, signal))

    def on_finalize(self, n: int) -> None:
        if n % self.execution_frequency == 0:
            self.execute_tasks(n)

    def execute_tasks(self, n: int) -> None:
        """Execute queued tasks by identifier order within the period's allowance.

        A task whose score exceeds the remaining allowance is skipped and
        stays pending; the others are executed and removed.
        """
        allowance = self.task_limit
        for task_id in sorted(self.execution_queue):
            task = self._pending.get(task_id)
            if task is not None:
                if task.score > allowance:
                    continue
                allowance -= task.score
                self.system.deposit_event(TaskExecuted(task.id, n))
            self._pending.pop(task_id, None)