"""Sequential integer IDs for listings, categories and accounts.

Every persisted collection assigns ids as max(existing) + 1, so ids of
deleted records at the top of the range are reused. Not safe across tabs:
two writers reading the same collection will hand out the same id.
"""

from collections.abc import Iterable


def next_id(existing_ids: Iterable[int]) -> int:
    """Return max(existing_ids, default 0) + 1 (minimum 1)."""
    return max(existing_ids, default=0) + 1
