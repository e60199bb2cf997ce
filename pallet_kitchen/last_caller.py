"""An instantiable module remembering which account called it last."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Optional

from .system import Origin, System, ensure_signed

DEFAULT_INSTANCE = "DefaultInstance"


@dataclass(frozen=True)
class Called:
    account: Hashable


class LastCaller:
    """One instance of the module; separate instances keep separate callers."""

    def __init__(self, system: System, instance: Hashable = DEFAULT_INSTANCE) -> None:
        self.system = system
        self.instance = instance
        self.caller: Optional[Hashable] = None

    def call(self, origin: Origin) -> None:
        caller = ensure_signed(origin)
        self.caller = caller
        self.system.deposit_event(Called(caller))