from __future__ import annotations

from typing import Any, Callable, Generic, List, Optional, TypeVar

from cowtree import config as cw_config
from cowtree.logging import get_logger

from .errors import OwnershipError
from .slot import (
    EMPTY,
    Exclusive,
    Shared,
    Slot,
    promote_exclusive,
    promote_shared,
    share_reference,
)
from .stats import TreeLogStats

LOGGER = get_logger("core.node")

T = TypeVar("T")

LEFT = 0
RIGHT = 1


def _resolve_copier(copier: Optional[Callable[[Any], Any]]) -> Callable[[Any], Any]:
    if copier is not None:
        return copier
    return cw_config.runtime_config().copier


def _ensure_mutable(node: "Node") -> None:
    if node.shared:
        LOGGER.error("Attempted in-place mutation of shared node %r", node.element)
        raise OwnershipError(
            f"node holding {node.element!r} is shared and must be duplicated before mutation"
        )


class Node(Generic[T]):
    """Binary search tree node whose children may be shared between trees.

    The node a caller holds is the tree. Nodes reached through a
    :class:`~cowtree.core.slot.Shared` slot carry ``shared = True`` and are
    never changed again; writers duplicate them on the way down instead.
    """

    __slots__ = ("element", "children", "shared")

    def __init__(self, element: T, children: Optional[List[Slot]] = None) -> None:
        self.element = element
        self.children: List[Slot] = [EMPTY, EMPTY] if children is None else children
        self.shared = False

    def __repr__(self) -> str:
        state = "shared" if self.shared else "exclusive"
        return f"Node({self.element!r}, {state})"

    @property
    def left(self) -> Slot:
        return self.children[LEFT]

    @property
    def right(self) -> Slot:
        return self.children[RIGHT]

    def insert(
        self,
        value: T,
        *,
        copier: Optional[Callable[[Any], Any]] = None,
        stats: Optional[TreeLogStats] = None,
    ) -> bool:
        """Insert ``value``, path-copying shared nodes on the way down.

        Returns ``False`` when an equal element is already present; the tree
        is left untouched in that case.
        """

        node: Node[T] = self
        entered_shared = False
        while True:
            _ensure_mutable(node)
            if value == node.element:
                if stats is not None:
                    stats.num_duplicates += 1
                return False

            index = LEFT if value < node.element else RIGHT
            slot = node.children[index]
            if slot is EMPTY:
                node.children[index] = Exclusive(Node(value))
                if stats is not None:
                    stats.num_insertions += 1
                return True

            if isinstance(slot, Shared):
                # Everything below the first shared slot is shared too, so one
                # lookup there tells us whether copying the path is needed.
                if not entered_shared:
                    entered_shared = True
                    if slot.node.contains(value):
                        if stats is not None:
                            stats.num_duplicates += 1
                        return False
                slot = promote_exclusive(slot, _resolve_copier(copier))
                node.children[index] = slot
                if stats is not None:
                    stats.num_path_copies += 1
            node = slot.node

    def contains(self, value: T) -> bool:
        node: Optional[Node[T]] = self
        while node is not None:
            if value == node.element:
                return True
            slot = node.children[LEFT if value < node.element else RIGHT]
            node = None if slot is EMPTY else slot.node
        return False

    def make_shared(self) -> int:
        """Flip every exclusive slot reachable from this node to shared.

        Subtrees behind a slot that is already shared are not visited: nothing
        beneath a shared slot can be exclusive. Returns the number of slots
        flipped.
        """

        promoted = 0
        stack: List[Node[T]] = [self]
        while stack:
            node = stack.pop()
            for index, slot in enumerate(node.children):
                if isinstance(slot, Exclusive):
                    stack.append(slot.node)
                    node.children[index] = promote_shared(slot)
                    promoted += 1
        return promoted

    def duplicate(self, copier: Optional[Callable[[Any], Any]] = None) -> "Node[T]":
        """Shallow copy: a fresh exclusive node whose children reference ours.

        Raises :class:`OwnershipError` if either child is still exclusive.
        """

        copier = _resolve_copier(copier)
        children = [share_reference(slot) for slot in self.children]
        return Node(copier(self.element), children)

    def clone(self, copier: Optional[Callable[[Any], Any]] = None) -> "Node[T]":
        """O(1) copy of an already fully shared tree."""

        try:
            return self.duplicate(copier)
        except OwnershipError:
            LOGGER.error("clone() called on tree rooted at %r before sharing", self.element)
            raise

    def snapshot(
        self,
        *,
        copier: Optional[Callable[[Any], Any]] = None,
        stats: Optional[TreeLogStats] = None,
    ) -> "Node[T]":
        """Share everything reachable from this root, then clone the root."""

        promoted = self.make_shared()
        if stats is not None:
            stats.num_promotions += promoted
            stats.num_snapshots += 1
        LOGGER.debug("Snapshot of %r promoted %d slot(s) to shared", self.element, promoted)
        return self.clone(copier)


__all__ = ["Node", "LEFT", "RIGHT"]
