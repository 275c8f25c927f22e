from __future__ import annotations

import argparse
import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Tuple

import numpy as np

from cowtree import CowTree, config as cw_config, summarize


@dataclass(frozen=True)
class BenchmarkResult:
    mode: Literal["insert", "snapshot"]
    elapsed_seconds: float
    operations: int
    path_copies: int
    throughput_ops_per_sec: float


def _write_result_artifact(
    path: Path,
    *,
    args: argparse.Namespace,
    result: BenchmarkResult,
    tree_summary: dict[str, Any],
) -> None:
    payload = {
        "timestamp": time.time(),
        "mode": result.mode,
        "operations": result.operations,
        "path_copies": result.path_copies,
        "elapsed_seconds": result.elapsed_seconds,
        "throughput_ops_per_sec": result.throughput_ops_per_sec,
        "parameters": {
            "size": args.size,
            "snapshots": args.snapshots,
            "writes_per_snapshot": args.writes_per_snapshot,
            "seed": args.seed,
        },
        "runtime": {
            "element_copy": cw_config.runtime_config().element_copy,
        },
        "tree": tree_summary,
    }
    path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")


def _generate_keys(rng: np.random.Generator, count: int) -> list[int]:
    return rng.integers(0, max(count * 8, 1), size=count).tolist()


def benchmark_insert(*, size: int, seed: int) -> Tuple[CowTree[int], BenchmarkResult]:
    rng = np.random.default_rng(seed)
    keys = _generate_keys(rng, size + 1)
    tree = CowTree(keys[0])
    start = time.perf_counter()
    tree.insert_many(keys[1:])
    elapsed = time.perf_counter() - start
    throughput = size / elapsed if elapsed > 0 else float("inf")
    return tree, BenchmarkResult(
        mode="insert",
        elapsed_seconds=elapsed,
        operations=size,
        path_copies=tree.stats.num_path_copies,
        throughput_ops_per_sec=throughput,
    )


def benchmark_snapshots(
    base_tree: CowTree[int],
    *,
    snapshots: int,
    writes_per_snapshot: int,
    seed: int,
) -> Tuple[CowTree[int], BenchmarkResult]:
    """Repeatedly snapshot and write into the newest handle."""

    rng = np.random.default_rng(seed)
    tree = base_tree
    path_copies = 0
    start = time.perf_counter()
    for _ in range(snapshots):
        tree = tree.snapshot()
        tree.insert_many(_generate_keys(rng, writes_per_snapshot))
        path_copies += tree.stats.num_path_copies
    elapsed = time.perf_counter() - start
    operations = snapshots * (writes_per_snapshot + 1)
    throughput = operations / elapsed if elapsed > 0 else float("inf")
    return tree, BenchmarkResult(
        mode="snapshot",
        elapsed_seconds=elapsed,
        operations=operations,
        path_copies=path_copies,
        throughput_ops_per_sec=throughput,
    )


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Benchmark insertion and snapshot/path-copy throughput for cowtree."
    )
    parser.add_argument(
        "mode",
        choices=("insert", "snapshot"),
        help="Operation to benchmark.",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=10_000,
        help="Number of random keys inserted into the base tree.",
    )
    parser.add_argument(
        "--snapshots",
        type=int,
        default=100,
        help="Number of snapshots taken in snapshot mode.",
    )
    parser.add_argument(
        "--writes-per-snapshot",
        type=int,
        default=16,
        help="Inserts applied to each new snapshot.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Random seed for key generation.",
    )
    parser.add_argument(
        "--log-json",
        type=str,
        default="",
        help="Optional path to write a JSON summary for the run.",
    )
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    mode: Literal["insert", "snapshot"] = args.mode  # type: ignore[assignment]

    tree, result = benchmark_insert(size=args.size, seed=args.seed)
    if mode == "snapshot":
        tree, result = benchmark_snapshots(
            tree,
            snapshots=args.snapshots,
            writes_per_snapshot=args.writes_per_snapshot,
            seed=args.seed + 1,
        )

    tree_summary = summarize(tree.root).as_dict()
    print(
        f"{result.mode} | ops={result.operations} "
        f"path_copies={result.path_copies} "
        f"nodes={tree_summary['num_nodes']} "
        f"height={tree_summary['height']} "
        f"time={result.elapsed_seconds:.4f}s "
        f"throughput={result.throughput_ops_per_sec:,.1f} ops/s"
    )
    if args.log_json:
        log_path = Path(args.log_json)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        _write_result_artifact(log_path, args=args, result=result, tree_summary=tree_summary)
        print(f"[snapshot_ops] wrote summary to {log_path}")


if __name__ == "__main__":
    main()
