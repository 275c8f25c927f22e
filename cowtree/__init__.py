"""cowtree: binary search tree with O(1) copy-on-write snapshots.

Quick Start
-----------
>>> from cowtree import CowTree
>>>
>>> tree = CowTree(12)
>>> tree.insert_many([15, 5, 8, 22])
>>> frozen = tree.snapshot()   # shares every node with `tree`
>>> frozen.insert(1)           # copies only the root-to-leaf path
>>> 1 in frozen, 1 in tree
(True, False)

Classes
-------
CowTree : Tree handle with insert / contains / snapshot / clone.
Node : Low-level node carrying the ownership state machine.
"""

from importlib.metadata import version as _pkg_version

try:
    __version__ = _pkg_version("cowtree")
except Exception:  # pragma: no cover - best effort during local development
    __version__ = "0.0.1"

from .api import CowTree
from .core import (
    EMPTY,
    Exclusive,
    Node,
    OwnershipError,
    Shared,
    SlotState,
    TreeLogStats,
)
from .diagnostics import TreeSummary, shared_nodes, summarize, validate

__all__ = [
    "__version__",
    "CowTree",
    "Node",
    "EMPTY",
    "Exclusive",
    "Shared",
    "SlotState",
    "OwnershipError",
    "TreeLogStats",
    "TreeSummary",
    "shared_nodes",
    "summarize",
    "validate",
]
