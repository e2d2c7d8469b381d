"""Parsing of user rows from the comma separated data file."""

from __future__ import annotations

import re
from pathlib import Path

from .models import User

DEFAULT_LIMIT = 40000
FIELD_COUNT = 10

_DIGITS = re.compile(r"[0-9]+")
_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")

_INT32 = (-(2**31), 2**31 - 1)
_INT64 = (-(2**63), 2**63 - 1)


def _checked(value: int, bounds: tuple[int, int]) -> int:
    low, high = bounds
    if not low <= value <= high:
        raise ValueError(f"integer out of range: {value}")
    return value


def _digits_or_zero(text: str, bounds: tuple[int, int]) -> int:
    """Return the number if ``text`` is all ASCII digits, else 0."""
    if _DIGITS.fullmatch(text):
        return _checked(int(text), bounds)
    return 0


def clean_field(text: str) -> str:
    """Remove every double quote and space from a field."""
    return text.replace('"', "").replace(" ", "")


def _list_items(field: str) -> list[str]:
    cleaned = clean_field(field)
    if len(cleaned) > 2 and cleaned.startswith("[") and cleaned.endswith("]"):
        return [item for item in cleaned[1:-1].split(",") if item]
    return []


def parse_tags(field: str) -> list[str]:
    """Parse a bracketed list such as ``["a", "b"]`` into its items."""
    return _list_items(field)


def parse_friends(field: str) -> list[int]:
    """Parse a bracketed list of ids, skipping items that are not numbers."""
    friends = []
    for item in _list_items(field):
        match = _LEADING_INT.match(item)
        if match is None:
            continue
        value = int(match.group(1))
        if _INT64[0] <= value <= _INT64[1]:
            friends.append(value)
    return friends


def parse_user(fields: list[str]) -> User:
    """Build a user from the ten fields of one row.

    Raises IndexError when fewer than ten fields are given and ValueError
    when an all-digit number does not fit its integer type.
    """
    return User(
        id=_digits_or_zero(clean_field(fields[0]), _INT64),
        screen_name=clean_field(fields[1]),
        tags=parse_tags(fields[2]),
        avatar=clean_field(fields[3]),
        followers_count=_digits_or_zero(fields[4], _INT32),
        friends_count=_digits_or_zero(fields[5], _INT32),
        lang=clean_field(fields[6]),
        last_seen=_digits_or_zero(fields[7], _INT64),
        tweet_id=_digits_or_zero(clean_field(fields[8]), _INT64),
        friends=parse_friends(fields[9]),
    )


def split_csv_fields(line: str, expected: int = FIELD_COUNT) -> list[str]:
    """Split on commas into at most ``expected`` fields; the last keeps the rest."""
    return line.split(",", expected - 1 if expected > 0 else -1)


def read_valid_users(path: str | Path, limit: int = DEFAULT_LIMIT) -> list[User]:
    """Read users with a positive id and a screen name, up to ``limit`` of them.

    The first line is a header. A file that cannot be opened yields no users.
    """
    users: list[User] = []
    try:
        handle = open(path, encoding="utf-8", errors="replace", newline="\n")
    except OSError:
        return users
    with handle:
        handle.readline()
        for raw in handle:
            line = raw[:-1] if raw.endswith("\n") else raw
            fields = split_csv_fields(line, FIELD_COUNT)
            if len(fields) < FIELD_COUNT:
                continue
            user = parse_user(fields)
            if user.id > 0 and user.screen_name:
                users.append(user)
            if len(users) >= limit:
                break
    return users