"""An owner-controlled module with a self-service membership set."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Optional

from .system import DispatchError, Origin, System, ensure_signed


@dataclass(frozen=True)
class OwnershipInitiated:
    owner: Hashable


@dataclass(frozen=True)
class OwnershipTransferred:
    old_owner: Hashable
    new_owner: Hashable


@dataclass(frozen=True)
class AddMember:
    member: Hashable


@dataclass(frozen=True)
class RemoveMember:
    member: Hashable


class CheckMembership:
    """Tracks a single owner and an ordered list of members."""

    def __init__(self, system: System) -> None:
        self.system = system
        self.owner: Optional[Hashable] = None
        self.members: list[Hashable] = []

    def init_ownership(self, origin: Origin) -> None:
        if self.owner is not None:
            raise DispatchError("Owner already exists")
        sender = ensure_signed(origin)
        self.owner = sender
        self.system.deposit_event(OwnershipInitiated(sender))

    def transfer_ownership(self, origin: Origin, new_owner: Hashable) -> None:
        sender = ensure_signed(origin)
        if self.owner is None or sender != self.owner:
            raise DispatchError("This function can only be called by the owner")
        self.owner = new_owner
        self.system.deposit_event(OwnershipTransferred(sender, new_owner))

    def add_member(self, origin: Origin) -> None:
        new_member = ensure_signed(origin)
        if self.is_member(new_member):
            raise DispatchError("already a member")
        self.members.append(new_member)
        self.system.deposit_event(AddMember(new_member))

    def remove_member(self, origin: Origin) -> None:
        old_member = ensure_signed(origin)
        if not self.is_member(old_member):
            raise DispatchError("not a member so can't be taken out of the set")
        self.members = [m for m in self.members if m != old_member]
        self.system.deposit_event(RemoveMember(old_member))

    def is_member(self, who: Hashable) -> bool:
        return who in self.members