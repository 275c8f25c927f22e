from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict


@dataclass
class TreeLogStats:
    """Running counters for one tree handle."""

    num_insertions: int = 0
    num_duplicates: int = 0
    num_path_copies: int = 0
    num_promotions: int = 0
    num_snapshots: int = 0

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


__all__ = ["TreeLogStats"]
