"""Group scores kept in a double map, so that a whole group can be removed at once."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable

from .system import DispatchError, Origin, System, ensure_signed


@dataclass(frozen=True)
class NewMember:
    account: Hashable


@dataclass(frozen=True)
class MemberJoinsGroup:
    account: Hashable
    group: int
    score: int


@dataclass(frozen=True)
class RemoveMember:
    account: Hashable


@dataclass(frozen=True)
class RemoveGroup:
    group: int


class DoubleMap:
    """Members join a global set, then a group with a score.

    A group's scores live under one prefix and are dropped together.
    """

    def __init__(self, system: System) -> None:
        self.system = system
        self.all_members: list[Hashable] = []
        self._scores: dict[int, dict[Hashable, int]] = {}
        self._membership: dict[Hashable, int] = {}

    def member_score(self, group: int, account: Hashable) -> int:
        """The account's score in ``group``; 0 when none is stored."""
        return self._scores.get(group, {}).get(account, 0)

    def group_membership(self, account: Hashable) -> int:
        """The group the account last joined; 0 when none is stored."""
        return self._membership.get(account, 0)

    def is_member(self, who: Hashable) -> bool:
        return who in self.all_members

    def join_all_members(self, origin: Origin) -> None:
        new_member = ensure_signed(origin)
        if self.is_member(new_member):
            raise DispatchError("already a member, can't join")
        self.all_members.append(new_member)
        self.system.deposit_event(NewMember(new_member))

    def join_a_group(self, origin: Origin, index: int, score: int) -> None:
        member = ensure_signed(origin)
        if not self.is_member(member):
            raise DispatchError("not a member, can't remove")
        self._scores.setdefault(index, {})[member] = score
        self._membership[member] = index
        self.system.deposit_event(MemberJoinsGroup(member, index, score))

    def remove_member(self, origin: Origin) -> None:
        member = ensure_signed(origin)
        if not self.is_member(member):
            raise DispatchError("not a member, can't remove")
        group_id = self._membership.pop(member, 0)
        group = self._scores.get(group_id)
        if group is not None:
            group.pop(member, None)
            if not group:
                del self._scores[group_id]
        self.system.deposit_event(RemoveMember(member))

    def remove_group(self, origin: Origin, group: int) -> None:
        member = ensure_signed(origin)
        group_id = self.group_membership(member)
        if group_id != group:
            raise DispatchError("member isn't in the group, can't remove it")
        self._scores.pop(group_id, None)
        self.system.deposit_event(RemoveGroup(group_id))