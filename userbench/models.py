"""Records shared by the loaders, the data structures and the benchmarks."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class User:
    """One user row from the data file."""

    id: int = 0
    screen_name: str = ""
    tags: list[str] = field(default_factory=list)
    avatar: str = ""
    followers_count: int = 0
    friends_count: int = 0
    lang: str = ""
    last_seen: int = 0
    tweet_id: int = 0
    friends: list[int] = field(default_factory=list)


@dataclass
class InsertionResult:
    """Elapsed time after inserting ``node_count`` records into a structure."""

    structure: str
    operation: str
    target: str
    node_count: int
    seconds: float
    milliseconds: int
    microseconds: int
    nanoseconds: int


@dataclass
class SearchResult:
    """Mean time per lookup for one batch of searches."""

    user_count: int
    key: str
    search_kind: str
    time_ns: float