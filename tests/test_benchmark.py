import random

import pytest

from userbench.benchmark import (
    CHECKPOINT_STEP,
    SEARCH_SIZES,
    TreeLoad,
    insert_closed_hash,
    insert_open_hash,
    load_id_tree,
    load_name_tree,
    search_bst,
    search_hash,
)
from userbench.hashing import ClosedHashTable, OpenHashTable
from userbench.models import User
from userbench.trees import IdTree, NameTree

HEADER = "id,screen_name,tags,avatar,followers,friends,lang,last_seen,tweet_id,friends\n"


def _row(uid, name):
    return f"{uid},{name},[],a.png,10,5,en,1600000000,99,[2,3]\n"


def _write(path, rows):
    path.write_text(HEADER + "".join(rows), encoding="utf-8")
    return path


@pytest.fixture
def small_file(tmp_path):
    return _write(
        tmp_path / "data.csv",
        [_row(7, "alice"), _row(3, ""), "short,line\n", _row(0, "bob"), _row(9, "carol")],
    )


@pytest.fixture(scope="module")
def big_file(tmp_path_factory):
    keys = list(range(1, CHECKPOINT_STEP + 2))
    random.Random(4).shuffle(keys)
    path = tmp_path_factory.mktemp("big") / "data.csv"
    return _write(path, [_row(k, f"user{k}") for k in keys])


@pytest.fixture(scope="module")
def many_users():
    keys = list(range(1, SEARCH_SIZES[0] + 1))
    random.Random(11).shuffle(keys)
    return [User(id=k, screen_name=f"user{k}") for k in keys]


def test_load_id_tree_keeps_named_users(small_file):
    load = load_id_tree(small_file)
    assert isinstance(load.tree, IdTree)
    assert load.tree.contains(7)
    assert load.tree.contains(0)
    assert load.tree.contains(9)
    assert not load.tree.contains(3)
    assert len(load.tree) == 3


def test_load_id_tree_grid_ends_with_remainder(small_file):
    load = load_id_tree(small_file)
    assert [r.node_count for r in load.grid] == [0, 3]
    assert all(r.structure == "BST" and r.target == "id" for r in load.grid)
    assert all(r.operation == "inserción" for r in load.grid)


def test_grid_units_agree(small_file):
    load = load_id_tree(small_file)
    for r in load.grid:
        assert r.milliseconds == r.nanoseconds // 1_000_000
        assert r.microseconds == r.nanoseconds // 1000
        assert r.seconds == pytest.approx(r.nanoseconds / 1e9)
    assert load.read_seconds >= 0
    assert load.insert_seconds >= 0


def test_limit_counts_rows_without_names(small_file):
    load = load_id_tree(small_file, limit=2)
    assert load.tree.contains(7)
    assert not load.tree.contains(0)
    assert len(load.tree) == 1


def test_load_name_tree_skips_partial_checkpoint(small_file):
    load = load_name_tree(small_file)
    assert isinstance(load.tree, NameTree)
    assert [r.node_count for r in load.grid] == [0]
    assert load.grid[0].target == "nombre"
    assert len(load.tree) == 0


def test_big_file_checkpoints(big_file):
    by_id = load_id_tree(big_file)
    by_name = load_name_tree(big_file)
    assert [r.node_count for r in by_id.grid] == [0, CHECKPOINT_STEP, CHECKPOINT_STEP + 1]
    assert [r.node_count for r in by_name.grid] == [0, CHECKPOINT_STEP]
    assert len(by_id.tree) == CHECKPOINT_STEP + 1
    assert len(by_name.tree) == CHECKPOINT_STEP


def test_missing_file_gives_empty_load(tmp_path, capsys):
    load = load_id_tree(tmp_path / "missing.csv")
    assert load.grid == []
    assert len(load.tree) == 0
    assert load.read_seconds == 0.0 and load.insert_seconds == 0.0
    assert "No se pudo abrir el archivo" in capsys.readouterr().err


def test_tree_load_defaults():
    load = TreeLoad(IdTree())
    assert load.grid == [] and load.read_seconds == 0.0


def test_insert_open_hash_fills_table():
    users = [User(id=i, screen_name=f"u{i}") for i in (5, 6, 7)]
    table = OpenHashTable(11)
    grid, seconds = insert_open_hash(table, users)
    assert [(r.target, r.node_count) for r in grid] == [
        ("id", 0), ("id", 3), ("screenName", 0), ("screenName", 3)
    ]
    assert all(r.structure == "HashAbierto" for r in grid)
    assert all(table.contains_id(u.id) for u in users)
    assert len(table) == 3
    assert seconds >= 0


def test_insert_closed_hash_fills_table():
    users = [User(id=i, screen_name=f"u{i}") for i in (1, 12, 23)]
    table = ClosedHashTable(11)
    grid, _ = insert_closed_hash(table, users)
    assert all(r.structure == "HashCerrado" for r in grid)
    assert all(table.contains_id(u.id) for u in users)
    assert len(table) == 3


def test_insert_closed_hash_overflows():
    users = [User(id=i, screen_name=f"u{i}") for i in range(3)]
    with pytest.raises(OverflowError):
        insert_closed_hash(ClosedHashTable(2), users)


def test_search_bst_too_few_users():
    users = [User(id=1, screen_name="a")]
    tree = IdTree()
    tree.insert(users[0])
    assert search_bst(tree, NameTree(), users, random.Random(1)) == []


EXPECTED_BATCHES = [
    ("id", "exitosa"), ("id", "fallida"),
    ("screenName", "exitosa"), ("screenName", "fallida"),
]


def test_search_bst_batches(many_users):
    id_tree, name_tree = IdTree(), NameTree()
    for user in many_users:
        id_tree.insert(user)
        name_tree.insert(user)
    results = search_bst(id_tree, name_tree, many_users, random.Random(2))
    assert [(r.key, r.search_kind) for r in results] == EXPECTED_BATCHES
    assert all(r.user_count == SEARCH_SIZES[0] for r in results)
    assert all(r.time_ns >= 0 for r in results)


@pytest.mark.parametrize("kind", ["abierto", "cerrado"])
def test_search_hash_batches(kind, many_users):
    results = search_hash(kind, many_users, random.Random(3))
    assert [(r.key, r.search_kind) for r in results] == EXPECTED_BATCHES
    assert all(r.user_count == SEARCH_SIZES[0] for r in results)


def test_search_hash_too_few_users():
    assert search_hash("abierto", [User(id=1, screen_name="a")]) == []


def test_search_hash_unknown_kind():
    with pytest.raises(ValueError):
        search_hash("otro", [])