"""Search trees, hash tables and timed insertion and lookup runs over user records."""

__version__ = "0.1.0"