"""Timed insertion and lookup runs over the trees and hash tables."""

from __future__ import annotations

import random
import sys
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .hashing import ClosedHashTable, OpenHashTable
from .models import InsertionResult, SearchResult, User
from .parsing import DEFAULT_LIMIT, FIELD_COUNT, parse_user, split_csv_fields
from .trees import IdTree, NameTree

CHECKPOINT_STEP = 5000
SEARCH_SIZES = (5000, 10000, 20000, 40000)
SEARCHES_PER_SIZE = 100

HashTable = Union[OpenHashTable, ClosedHashTable]

_HASH_KINDS: dict[str, type] = {
    "abierto": OpenHashTable,
    "cerrado": ClosedHashTable,
}


@dataclass
class TreeLoad:
    """A tree filled from the data file, with its timing checkpoints."""

    tree: Union[IdTree, NameTree]
    grid: list[InsertionResult] = field(default_factory=list)
    read_seconds: float = 0.0
    insert_seconds: float = 0.0


def _read_named_users(path: str | Path, limit: int) -> Optional[list[User]]:
    """Read rows that carry a screen name; ``limit`` counts every well-formed row.

    Returns None when the file cannot be opened.
    """
    try:
        handle = open(path, encoding="utf-8", errors="replace", newline="\n")
    except OSError:
        return None
    users: list[User] = []
    rows_read = 0
    with handle:
        handle.readline()
        for raw in handle:
            if rows_read >= limit:
                break
            line = raw[:-1] if raw.endswith("\n") else raw
            fields = split_csv_fields(line, FIELD_COUNT)
            if len(fields) < FIELD_COUNT:
                continue
            user = parse_user(fields)
            if user.screen_name:
                users.append(user)
            rows_read += 1
    return users


def _record(
    structure: str, operation: str, target: str, count: int, start_ns: int
) -> InsertionResult:
    elapsed = time.perf_counter_ns() - start_ns
    return InsertionResult(
        structure=structure,
        operation=operation,
        target=target,
        node_count=count,
        seconds=elapsed / 1e9,
        milliseconds=elapsed // 1_000_000,
        microseconds=elapsed // 1000,
        nanoseconds=elapsed,
    )


def _timed_inserts(
    insert: Callable[[User], None],
    users: Sequence[User],
    structure: str,
    operation: str,
    target: str,
    finish_remainder: bool = True,
) -> list[InsertionResult]:
    """Insert ``users`` and record the elapsed time at every checkpoint."""
    total = len(users)
    grid: list[InsertionResult] = []
    done = 0
    start = time.perf_counter_ns()
    for checkpoint in range(0, total + 1, CHECKPOINT_STEP):
        for user in users[done:checkpoint]:
            insert(user)
        done = max(done, checkpoint)
        grid.append(_record(structure, operation, target, checkpoint, start))
    if finish_remainder and done < total:
        for user in users[done:]:
            insert(user)
        grid.append(_record(structure, operation, target, total, start))
    return grid


def _load_tree(
    tree: Union[IdTree, NameTree],
    path: str | Path,
    limit: int,
    target: str,
    finish_remainder: bool,
) -> TreeLoad:
    read_start = time.perf_counter()
    users = _read_named_users(path, limit)
    if users is None:
        print(f"No se pudo abrir el archivo: {path}", file=sys.stderr)
        return TreeLoad(tree)
    read_seconds = time.perf_counter() - read_start
    insert_start = time.perf_counter()
    grid = _timed_inserts(
        tree.insert, users, "BST", "inserción", target, finish_remainder
    )
    return TreeLoad(tree, grid, read_seconds, time.perf_counter() - insert_start)


def load_id_tree(path: str | Path, limit: int = DEFAULT_LIMIT) -> TreeLoad:
    """Read the data file and fill an id tree, timing every 5000 insertions.

    Users left over past the last full checkpoint are inserted and timed too.
    """
    return _load_tree(IdTree(), path, limit, "id", finish_remainder=True)


def load_name_tree(path: str | Path, limit: int = DEFAULT_LIMIT) -> TreeLoad:
    """Read the data file and fill a name tree, timing every 5000 insertions.

    Only whole checkpoints are inserted; users past the last one are left out.
    """
    return _load_tree(NameTree(), path, limit, "nombre", finish_remainder=False)


def _insert_hash(
    table: HashTable, users: Sequence[User], structure: str
) -> tuple[list[InsertionResult], float]:
    start = time.perf_counter()
    grid = _timed_inserts(table.insert, users, structure, "insercion", "id")
    second = type(table)(table.size)
    grid += _timed_inserts(second.insert, users, structure, "insercion", "screenName")
    return grid, time.perf_counter() - start


def insert_open_hash(
    table: OpenHashTable, users: Sequence[User]
) -> tuple[list[InsertionResult], float]:
    """Fill ``table`` and a second table of the same size, timing both.

    Returns the checkpoints and the total seconds taken.
    """
    return _insert_hash(table, users, "HashAbierto")


def insert_closed_hash(
    table: ClosedHashTable, users: Sequence[User]
) -> tuple[list[InsertionResult], float]:
    """Fill ``table`` and a second table of the same size, timing both.

    Returns the checkpoints and the total seconds taken.
    """
    return _insert_hash(table, users, "HashCerrado")


def _mean_lookup_ns(lookup: Callable[[object], bool], keys: Sequence[object]) -> float:
    found = False
    start = time.perf_counter_ns()
    for key in keys:
        found |= lookup(key)
    elapsed = time.perf_counter_ns() - start
    return elapsed / len(keys)


def _search_batches(
    contains_id: Callable[[int], bool],
    contains_name: Callable[[str], bool],
    users: Sequence[User],
    size: int,
    rng: random.Random,
) -> list[SearchResult]:
    ids = [users[rng.randint(0, size - 1)].id for _ in range(SEARCHES_PER_SIZE)]
    results = [
        SearchResult(size, "id", "exitosa", _mean_lookup_ns(contains_id, ids))
    ]
    missing_ids = [-1 - i for i in range(SEARCHES_PER_SIZE)]
    results.append(
        SearchResult(size, "id", "fallida", _mean_lookup_ns(contains_id, missing_ids))
    )
    names = [
        users[rng.randint(0, size - 1)].screen_name for _ in range(SEARCHES_PER_SIZE)
    ]
    results.append(
        SearchResult(
            size, "screenName", "exitosa", _mean_lookup_ns(contains_name, names)
        )
    )
    missing_names = [f"inexistente_user_{i}" for i in range(SEARCHES_PER_SIZE)]
    results.append(
        SearchResult(
            size, "screenName", "fallida", _mean_lookup_ns(contains_name, missing_names)
        )
    )
    return results


def search_bst(
    id_tree: IdTree,
    name_tree: NameTree,
    users: Sequence[User],
    rng: Optional[random.Random] = None,
) -> list[SearchResult]:
    """Time hits and misses by id and by name for each size the users allow."""
    rng = rng if rng is not None else random.Random()
    results: list[SearchResult] = []
    for size in SEARCH_SIZES:
        if len(users) < size:
            break
        results += _search_batches(
            id_tree.contains, name_tree.contains, users, size, rng
        )
    return results


def search_hash(
    hash_kind: str,
    users: Sequence[User],
    rng: Optional[random.Random] = None,
) -> list[SearchResult]:
    """Build a table of ``2n + 1`` slots for each size and time its lookups.

    ``hash_kind`` is ``"abierto"`` or ``"cerrado"``; anything else raises ValueError.
    """
    try:
        factory = _HASH_KINDS[hash_kind]
    except KeyError:
        raise ValueError(f"unknown hash kind: {hash_kind!r}") from None
    rng = rng if rng is not None else random.Random()
    results: list[SearchResult] = []
    for size in SEARCH_SIZES:
        if len(users) < size:
            break
        table = factory(size * 2 + 1)
        for user in users[:size]:
            table.insert(user)
        results += _search_batches(
            table.contains_id, table.contains_name, users, size, rng
        )
    return results