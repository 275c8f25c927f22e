"""Child slot ownership states and the transitions between them.

A slot is one of

* ``EMPTY`` (``None``) -- no subtree,
* :class:`Exclusive` -- the holder is the only owner and may mutate in place,
* :class:`Shared` -- the subtree may be referenced from several trees and is
  read-only until promoted back to :class:`Exclusive` by duplication.

Python's garbage collector takes care of lifetimes, so a :class:`Shared` slot
is simply another reference to the same node object. What the collector does
not give us is copy-on-write, so every transition goes through the helpers
below.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

from .errors import OwnershipError

if TYPE_CHECKING:  # pragma: no cover
    from .node import Node

EMPTY = None


@dataclass(frozen=True)
class Exclusive:
    node: "Node"


@dataclass(frozen=True)
class Shared:
    node: "Node"


Slot = Optional[Union[Exclusive, Shared]]


class SlotState(str, Enum):
    EMPTY = "empty"
    EXCLUSIVE = "exclusive"
    SHARED = "shared"


def slot_state(slot: Slot) -> SlotState:
    if slot is EMPTY:
        return SlotState.EMPTY
    if isinstance(slot, Exclusive):
        return SlotState.EXCLUSIVE
    return SlotState.SHARED


def promote_shared(slot: Slot) -> Slot:
    """Exclusive -> Shared. The exclusive handle is consumed; other states pass through."""

    if isinstance(slot, Exclusive):
        slot.node.shared = True
        return Shared(slot.node)
    return slot


def promote_exclusive(slot: Slot, copier: Callable[[Any], Any]) -> Slot:
    """Shared -> Exclusive by duplicating the top node only."""

    if isinstance(slot, Shared):
        return Exclusive(slot.node.duplicate(copier))
    return slot


def share_reference(slot: Slot) -> Slot:
    """Copy a slot into a duplicated node.

    Shared slots are handed over by reference and empty slots stay empty. An
    exclusive slot cannot be duplicated without a deep copy, which the sharing
    pass is there to avoid.
    """

    if isinstance(slot, Exclusive):
        raise OwnershipError(
            f"cannot duplicate exclusive child holding {slot.node.element!r}; "
            "promote the subtree to shared first"
        )
    return slot


__all__ = [
    "EMPTY",
    "Exclusive",
    "Shared",
    "Slot",
    "SlotState",
    "slot_state",
    "promote_shared",
    "promote_exclusive",
    "share_reference",
]
