"""Core node structure and the copy-on-write ownership protocol."""

from .errors import OwnershipError
from .node import LEFT, RIGHT, Node
from .slot import (
    EMPTY,
    Exclusive,
    Shared,
    Slot,
    SlotState,
    promote_exclusive,
    promote_shared,
    share_reference,
    slot_state,
)
from .stats import TreeLogStats

__all__ = [
    "EMPTY",
    "Exclusive",
    "LEFT",
    "Node",
    "OwnershipError",
    "RIGHT",
    "Shared",
    "Slot",
    "SlotState",
    "TreeLogStats",
    "promote_exclusive",
    "promote_shared",
    "share_reference",
    "slot_state",
]
