"""Lists kept in storage maps: an index map with a counter, and a linked map."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Optional

from .system import (
    DispatchError,
    Origin,
    System,
    checked_add,
    checked_sub,
    ensure_signed,
)


@dataclass(frozen=True)
class MemberAdded:
    account: Hashable


@dataclass(frozen=True)
class MemberRemoved:
    account: Hashable


class LinkedMap:
    """Keeps the same members in an indexed map and in a linked map.

    In the linked map, new keys go to the head. Overwriting a key keeps its
    place in the list.
    """

    def __init__(self, system: System) -> None:
        self.system = system
        self.the_counter = 0
        self.linked_counter = 0
        self._list: dict[int, Optional[Hashable]] = {}
        self._linked: dict[int, Optional[Hashable]] = {}

    def the_list(self, index: int) -> Optional[Hashable]:
        return self._list.get(index)

    def linked_list(self, index: int) -> Optional[Hashable]:
        return self._linked.get(index)

    def _linked_head(self) -> int:
        return next(reversed(self._linked))

    def add_member(self, origin: Origin) -> None:
        who = ensure_signed(origin)
        new_count = checked_add(self.the_counter, 1, 32)
        if new_count is None:
            raise DispatchError("counter overflowed")
        self._list[new_count] = who
        self.the_counter = new_count
        self._linked[new_count] = who
        self.linked_counter = new_count
        self.system.deposit_event(MemberAdded(who))

    def remove_member_unbounded(self, origin: Origin, index: int) -> None:
        ensure_signed(origin)
        if index not in self._list:
            raise DispatchError("an element doesn't exist at this index")
        removed = self._list.pop(index)
        self.system.deposit_event(MemberRemoved(removed))

    def remove_member_bounded(self, origin: Origin, index: int) -> None:
        ensure_signed(origin)
        if index not in self._list:
            raise DispatchError("an element doesn't exist at this index")
        largest_index = self.the_counter
        new_counter = checked_sub(largest_index, 1)
        if new_counter is None:
            raise DispatchError("counter underflowed")
        member_to_remove = self._list.pop(index)
        if index != largest_index:
            self._list[index] = self._list.pop(largest_index, None)
            self._list[largest_index] = member_to_remove
        self._list.pop(largest_index, None)
        self.the_counter = new_counter
        self.system.deposit_event(MemberRemoved(member_to_remove))

    def remove_member_linked(self, origin: Origin, index: int) -> None:
        ensure_signed(origin)
        if index not in self._linked:
            raise DispatchError("A member does not exist at this index")
        head_index = self._linked_head()
        member_to_remove = self._linked.pop(index)
        head_member = self._linked.pop(head_index, None)
        self._linked[index] = head_member
        self._linked[head_index] = member_to_remove
        self._linked.pop(head_index)
        self.system.deposit_event(MemberRemoved(member_to_remove))