"""Unbalanced binary search trees of users keyed by id or by screen name."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from .models import User


@dataclass(slots=True)
class _Node:
    user: User
    left: Optional["_Node"] = None
    right: Optional["_Node"] = None


class _UserTree:
    """A binary search tree over users; a key already present is not inserted again."""

    def __init__(self, key: Callable[[User], Any]) -> None:
        self.root: Optional[_Node] = None
        self._size = 0
        self._key = key

    def __len__(self) -> int:
        return self._size

    def _insert(self, user: User) -> None:
        key = self._key(user)
        if self.root is None:
            self.root = _Node(user)
            self._size += 1
            return
        node = self.root
        while True:
            current = self._key(node.user)
            if key < current:
                if node.left is None:
                    node.left = _Node(user)
                    self._size += 1
                    return
                node = node.left
            elif key > current:
                if node.right is None:
                    node.right = _Node(user)
                    self._size += 1
                    return
                node = node.right
            else:
                return

    def _find(self, key: Any) -> Optional[User]:
        node = self.root
        while node is not None:
            current = self._key(node.user)
            if key == current:
                return node.user
            node = node.left if key < current else node.right
        return None

    def _find_where(self, predicate: Callable[[User], bool]) -> Optional[User]:
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            if predicate(node.user):
                return node.user
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)
        return None

    def __contains__(self, key: object) -> bool:
        return self._find(key) is not None


class IdTree(_UserTree):
    """Users ordered by numeric id."""

    def __init__(self) -> None:
        super().__init__(lambda user: user.id)

    def insert(self, user: User) -> None:
        """Add ``user`` unless a user with the same id is already stored."""
        self._insert(user)

    def contains(self, user_id: int) -> bool:
        """Tell whether a user with ``user_id`` is stored."""
        return self._find(user_id) is not None

    def find(self, user_id: int) -> Optional[User]:
        """Return the user with ``user_id``, or None."""
        return self._find(user_id)

    def find_where(self, predicate: Callable[[User], bool]) -> Optional[User]:
        """Return the first user in pre-order that satisfies ``predicate``, or None."""
        return self._find_where(predicate)


class NameTree(_UserTree):
    """Users ordered by screen name."""

    def __init__(self) -> None:
        super().__init__(lambda user: user.screen_name)

    def insert(self, user: User) -> None:
        """Add ``user`` unless a user with the same screen name is already stored."""
        self._insert(user)

    def contains(self, name: str) -> bool:
        """Tell whether a user called ``name`` is stored."""
        return self._find(name) is not None

    def find(self, name: str) -> Optional[User]:
        """Return the user called ``name``, or None."""
        return self._find(name)

    def find_where(self, predicate: Callable[[User], bool]) -> Optional[User]:
        """Return the first user in pre-order that satisfies ``predicate``, or None."""
        return self._find_where(predicate)