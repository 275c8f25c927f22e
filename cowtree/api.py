from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

from cowtree import config as cw_config
from cowtree import diagnostics
from cowtree.core.node import Node
from cowtree.core.stats import TreeLogStats
from cowtree.logging import get_logger

LOGGER = get_logger("api")

T = TypeVar("T")


class CowTree(Generic[T]):
    """Snapshottable binary search tree handle.

    Parameters
    ----------
    element :
        Value stored at the root.
    copier :
        Optional element duplication function. Defaults to the mode chosen by
        ``COWTREE_ELEMENT_COPY``.

    Examples
    --------
    >>> tree = CowTree(12)
    >>> tree.insert_many([15, 5, 8, 22])
    >>> copy = tree.snapshot()
    >>> copy.insert(1)
    >>> 1 in copy, 1 in tree
    (True, False)
    """

    __slots__ = ("_root", "_copier", "_stats")

    def __init__(self, element: T, *, copier: Optional[Callable[[Any], Any]] = None) -> None:
        self._root: Node[T] = Node(element)
        self._copier = copier
        self._stats = TreeLogStats()

    @classmethod
    def _from_root(cls, root: Node[T], copier: Optional[Callable[[Any], Any]]) -> "CowTree[T]":
        tree = cls.__new__(cls)
        tree._root = root
        tree._copier = copier
        tree._stats = TreeLogStats()
        return tree

    @property
    def root(self) -> Node[T]:
        return self._root

    @property
    def stats(self) -> TreeLogStats:
        return self._stats

    def insert(self, value: T) -> None:
        self._root.insert(value, copier=self._copier, stats=self._stats)

    def insert_many(self, values: Iterable[T]) -> None:
        for value in values:
            self.insert(value)

    def contains(self, value: T) -> bool:
        return self._root.contains(value)

    def __contains__(self, value: object) -> bool:
        return self._root.contains(value)  # type: ignore[arg-type]

    def snapshot(self) -> "CowTree[T]":
        root = self._root.snapshot(copier=self._copier, stats=self._stats)
        if cw_config.runtime_config().validate:
            diagnostics.validate(self._root)
            diagnostics.validate(root)
            LOGGER.debug("Validated both handles after snapshot of %r", root.element)
        return CowTree._from_root(root, self._copier)

    def clone(self) -> "CowTree[T]":
        """O(1) copy; the tree must already be fully shared (e.g. after ``snapshot``)."""

        root = self._root.clone(self._copier)
        LOGGER.debug("Cloned tree rooted at %r", root.element)
        return CowTree._from_root(root, self._copier)

    def summary(self) -> diagnostics.TreeSummary:
        return diagnostics.summarize(self._root)

    def validate(self) -> None:
        diagnostics.validate(self._root)

    def __repr__(self) -> str:
        return f"CowTree(root={self._root.element!r}, stats={self._stats})"


__all__ = ["CowTree"]
