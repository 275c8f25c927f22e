import logging

import pytest

import cowtree
from cowtree import CowTree, TreeLogStats


def test_public_exports():
    for name in cowtree.__all__:
        assert hasattr(cowtree, name)
    assert isinstance(cowtree.__version__, str)


def test_new_tree_holds_single_element():
    tree = CowTree("root")
    assert "root" in tree
    assert tree.contains("root")
    assert "other" not in tree
    assert tree.summary().num_nodes == 1


def test_insert_returns_none_and_tracks_stats():
    tree = CowTree(5)
    assert tree.insert(3) is None
    tree.insert(3)
    tree.insert_many([7, 9])

    assert isinstance(tree.stats, TreeLogStats)
    assert tree.stats.as_dict() == {
        "num_insertions": 3,
        "num_duplicates": 1,
        "num_path_copies": 0,
        "num_promotions": 0,
        "num_snapshots": 0,
    }


def test_snapshot_inherits_copier():
    calls = []

    def copier(value):
        calls.append(value)
        return value

    tree = CowTree(10, copier=copier)
    tree.insert_many([5, 15])
    copy = tree.snapshot()
    copy.insert(1)

    # the root duplicate, then the path copy of 5
    assert calls == [10, 5]


def test_clone_of_snapshotted_tree():
    tree = CowTree(10)
    tree.insert_many([5, 15])
    tree.snapshot()

    clone = tree.clone()
    clone.insert(20)

    assert 20 in clone
    assert 20 not in tree
    assert clone.stats.num_path_copies == 1


def test_repr_mentions_root():
    assert "CowTree(root=3" in repr(CowTree(3))


@pytest.mark.parametrize("values", [[], [1], [3, 1, 2]])
def test_insert_many_accepts_iterables(values):
    tree = CowTree(0)
    tree.insert_many(iter(values))
    for value in values:
        assert value in tree


def test_clone_and_validated_snapshot_log_at_debug(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
):
    monkeypatch.setenv("COWTREE_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("COWTREE_VALIDATE", "1")
    caplog.set_level(logging.DEBUG)
    tree = CowTree(10)
    tree.insert(5)

    tree.snapshot()
    tree.clone()

    messages = [record.getMessage() for record in caplog.records if record.name == "cowtree.api"]
    assert "Validated both handles after snapshot of 10" in messages
    assert "Cloned tree rooted at 10" in messages
