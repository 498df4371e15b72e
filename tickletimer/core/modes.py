"""Interaction modes and input events.

Each mode is its own frozen dataclass carrying only the data that means
something in that mode, so a pending confirmation can only exist inside
``RemoveReset`` or ``DumpConfirm`` and a rename target only inside
``Rename``.

Transitions
-----------
Normal      → RemoveReset (r) | AddEdit (a) | DumpConfirm (u, u)
RemoveReset → Normal              (r when idle, y/n when confirming)
AddEdit     → Normal (b) | Rename (r)
Rename      → AddEdit             (enter / escape)
DumpConfirm → Normal              (y / n)
"""

from dataclasses import dataclass
from enum import Enum


class ConfirmAction(Enum):
    NONE = "none"
    DELETE = "delete"
    RESET = "reset"


@dataclass(frozen=True)
class Normal:
    name = "normal"


@dataclass(frozen=True)
class RemoveReset:
    name = "remove_reset"
    pending: ConfirmAction = ConfirmAction.NONE

    @property
    def confirming(self):
        return self.pending is not ConfirmAction.NONE


@dataclass(frozen=True)
class AddEdit:
    name = "add_edit"


@dataclass(frozen=True)
class Rename:
    name = "rename"
    target: int  # timer handle, not a list position


@dataclass(frozen=True)
class DumpConfirm:
    name = "dump_confirm"
    # Always asking whether to reset every timer after the dump.
    pending = ConfirmAction.RESET
    confirming = True


Mode = Normal | RemoveReset | AddEdit | Rename | DumpConfirm


@dataclass(frozen=True)
class KeyEvent:
    key: str


@dataclass(frozen=True)
class TickEvent:
    pass


Event = KeyEvent | TickEvent
