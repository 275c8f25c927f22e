import json
from types import SimpleNamespace

import pytest

np = pytest.importorskip("numpy")

from benchmarks.snapshot_ops import (
    BenchmarkResult,
    _write_result_artifact,
    benchmark_insert,
    benchmark_snapshots,
)
from cowtree import summarize


def test_benchmark_insert_smoke():
    tree, result = benchmark_insert(size=64, seed=0)

    assert result.mode == "insert"
    assert result.operations == 64
    assert result.path_copies == 0
    assert summarize(tree.root).num_nodes <= 65
    tree.validate()


def test_benchmark_snapshots_smoke():
    base, _ = benchmark_insert(size=64, seed=0)
    tree, result = benchmark_snapshots(base, snapshots=3, writes_per_snapshot=4, seed=1)

    assert result.mode == "snapshot"
    assert result.operations == 3 * 5
    assert tree is not base
    tree.validate()
    base.validate()


def test_write_result_artifact(tmp_path):
    path = tmp_path / "summary.json"
    args = SimpleNamespace(size=8, snapshots=1, writes_per_snapshot=2, seed=0)
    result = BenchmarkResult(
        mode="insert",
        elapsed_seconds=0.5,
        operations=8,
        path_copies=0,
        throughput_ops_per_sec=16.0,
    )

    _write_result_artifact(path, args=args, result=result, tree_summary={"num_nodes": 9})

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["mode"] == "insert"
    assert payload["parameters"]["size"] == 8
    assert payload["tree"]["num_nodes"] == 9
    assert payload["runtime"]["element_copy"] in {"deep", "shallow", "none"}
