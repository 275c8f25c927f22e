"""Read-only structural inspection of trees.

Everything here walks nodes by identity, so a subtree shared by two trees is
counted once per tree and can be detected across trees.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set, Tuple

from cowtree.core.errors import OwnershipError
from cowtree.core.node import Node
from cowtree.core.slot import EMPTY, Exclusive, Shared, SlotState, slot_state
from cowtree.logging import get_logger

LOGGER = get_logger("diagnostics")


@dataclass(frozen=True)
class TreeSummary:
    num_nodes: int
    exclusive_slots: int
    shared_slots: int
    height: int

    @property
    def fully_shared(self) -> bool:
        return self.exclusive_slots == 0

    def as_dict(self) -> Dict[str, Any]:
        return {
            "num_nodes": self.num_nodes,
            "exclusive_slots": self.exclusive_slots,
            "shared_slots": self.shared_slots,
            "height": self.height,
            "fully_shared": self.fully_shared,
        }


def _reachable(root: Node) -> List[Node]:
    nodes: List[Node] = []
    stack = [root]
    while stack:
        node = stack.pop()
        nodes.append(node)
        for slot in node.children:
            if slot is not EMPTY:
                stack.append(slot.node)
    return nodes


def reachable_ids(root: Node) -> Set[int]:
    return {id(node) for node in _reachable(root)}


def summarize(root: Node) -> TreeSummary:
    counts = {SlotState.EMPTY: 0, SlotState.EXCLUSIVE: 0, SlotState.SHARED: 0}
    height = 0
    num_nodes = 0
    stack: List[Tuple[Node, int]] = [(root, 1)]
    while stack:
        node, depth = stack.pop()
        num_nodes += 1
        height = max(height, depth)
        for slot in node.children:
            counts[slot_state(slot)] += 1
            if slot is not EMPTY:
                stack.append((slot.node, depth + 1))
    return TreeSummary(
        num_nodes=num_nodes,
        exclusive_slots=counts[SlotState.EXCLUSIVE],
        shared_slots=counts[SlotState.SHARED],
        height=height,
    )


def shared_nodes(first: Node, second: Node) -> int:
    """Number of node objects reachable from both roots."""

    return len(reachable_ids(first) & reachable_ids(second))


def validate(root: Node) -> None:
    """Check ordering and ownership invariants for the whole tree.

    Raises ``ValueError`` when an element sits on the wrong side of an
    ancestor and :class:`OwnershipError` when an exclusive slot is found
    beneath a shared one or a node behind a shared slot is not frozen.
    """

    # (node, low, high, has_low, has_high); low is inclusive, high exclusive
    stack: List[Tuple[Node, Optional[Any], Optional[Any], bool, bool]] = [
        (root, None, None, False, False)
    ]
    while stack:
        node, low, high, has_low, has_high = stack.pop()
        element = node.element
        if has_low and element < low:
            raise ValueError(f"element {element!r} is smaller than ancestor bound {low!r}")
        if has_high and not element < high:
            raise ValueError(f"element {element!r} is not smaller than ancestor bound {high!r}")

        left, right = node.children
        for slot, child_bounds in (
            (left, (low, element, has_low, True)),
            (right, (element, high, True, has_high)),
        ):
            if slot is EMPTY:
                continue
            if isinstance(slot, Exclusive) and node.shared:
                LOGGER.error("Exclusive child %r found beneath shared node %r", slot.node.element, element)
                raise OwnershipError(
                    f"shared node {element!r} owns exclusive child {slot.node.element!r}"
                )
            if isinstance(slot, Shared) and not slot.node.shared:
                raise OwnershipError(
                    f"node {slot.node.element!r} is behind a shared slot but not marked shared"
                )
            child_low, child_high, child_has_low, child_has_high = child_bounds
            stack.append((slot.node, child_low, child_high, child_has_low, child_has_high))


__all__ = ["TreeSummary", "reachable_ids", "shared_nodes", "summarize", "validate"]
