"""Hash tables of users: separate chaining and linear probing."""

from __future__ import annotations

import struct
from collections.abc import Iterator
from typing import Optional

from .models import User

_MASK = (1 << 64) - 1
_MUL = 0xC6A4A7935BD1E995
_STRING_SEED = 0xC70F6907


def _shift_mix(value: int) -> int:
    return value ^ (value >> 47)


def id_hash(user_id: int) -> int:
    """Hash an id the way a 64-bit identity hash does: its two's complement bits."""
    return user_id & _MASK


def name_hash(name: str) -> int:
    """Hash a screen name with the 64-bit Murmur-style byte hash over its UTF-8 bytes."""
    data = name.encode("utf-8")
    length = len(data)
    value = (_STRING_SEED ^ (length * _MUL)) & _MASK
    aligned = length & ~7
    for (word,) in struct.iter_unpack("<Q", data[:aligned]):
        mixed = (_shift_mix((word * _MUL) & _MASK) * _MUL) & _MASK
        value = ((value ^ mixed) * _MUL) & _MASK
    tail = data[aligned:]
    if tail:
        value = ((value ^ int.from_bytes(tail, "little")) * _MUL) & _MASK
    value = (_shift_mix(value) * _MUL) & _MASK
    return _shift_mix(value)


def _check_size(size: int) -> int:
    if size <= 0:
        raise ValueError(f"table size must be positive, got {size}")
    return size


class OpenHashTable:
    """Users stored in buckets chosen by id; collisions share a bucket."""

    def __init__(self, size: int) -> None:
        self.size = _check_size(size)
        self.buckets: list[list[User]] = [[] for _ in range(self.size)]

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self.buckets)

    def insert(self, user: User) -> None:
        """Append ``user`` to the bucket of its id."""
        self.buckets[id_hash(user.id) % self.size].append(user)

    def contains_id(self, user_id: int) -> bool:
        """Tell whether the bucket of ``user_id`` holds a user with that id."""
        bucket = self.buckets[id_hash(user_id) % self.size]
        return any(user.id == user_id for user in bucket)

    def contains_name(self, name: str) -> bool:
        """Tell whether the bucket that ``name`` hashes to holds a user so named."""
        bucket = self.buckets[name_hash(name) % self.size]
        return any(user.screen_name == name for user in bucket)


class ClosedHashTable:
    """Users stored in slots chosen by id, with linear probing on collision."""

    def __init__(self, size: int) -> None:
        self.size = _check_size(size)
        self.slots: list[Optional[User]] = [None] * self.size
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def _probe(self, start: int) -> Iterator[int]:
        for step in range(self.size):
            yield (start + step) % self.size

    def insert(self, user: User) -> None:
        """Put ``user`` in the first free slot from the one of its id.

        Raises OverflowError when every slot is taken.
        """
        for index in self._probe(id_hash(user.id) % self.size):
            if self.slots[index] is None:
                self.slots[index] = user
                self._count += 1
                return
        raise OverflowError("hash table is full")

    def _scan(self, start: int, matches) -> bool:
        for index in self._probe(start):
            slot = self.slots[index]
            if slot is None:
                return False
            if matches(slot):
                return True
        return False

    def contains_id(self, user_id: int) -> bool:
        """Probe from the slot of ``user_id`` until an empty slot or a full cycle."""
        return self._scan(id_hash(user_id) % self.size, lambda user: user.id == user_id)

    def contains_name(self, name: str) -> bool:
        """Probe from the slot ``name`` hashes to until an empty slot or a full cycle."""
        return self._scan(
            name_hash(name) % self.size, lambda user: user.screen_name == name
        )