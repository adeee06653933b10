"""
LRU eviction for the tag image cache.

Selection is kept separate from removal so ImageCache can apply it to its own
table and size counter in one synchronous step.
"""

from typing import Container, Iterable, List


def exceeds_limits(entry_count: int, total_size: int, max_entries: int, max_size_bytes: int) -> bool:
    """Check whether either cache bound is currently violated."""
    return entry_count > max_entries or total_size > max_size_bytes


def select_evictions(
    entries: Iterable,
    total_size: int,
    max_entries: int,
    max_size_bytes: int,
    protected: Container[str] = (),
) -> List[str]:
    """
    Pick the tags to drop so the cache fits inside both bounds.

    Entries are visited least-recently-accessed first. Tags in ``protected``
    (those with a fetch in flight) are skipped even when they are the oldest.
    Selection stops as soon as both bounds hold, or when nothing removable is
    left, in which case the cache may stay over its limits.

    Args:
        entries: CacheEntry objects currently in the table
        total_size: Current running total of estimated bytes
        max_entries: Entry count bound
        max_size_bytes: Aggregate estimated size bound
        protected: Tags that must not be evicted

    Returns:
        Tags to remove, in eviction order.
    """
    entries = list(entries)
    entry_count = len(entries)

    if not exceeds_limits(entry_count, total_size, max_entries, max_size_bytes):
        return []

    # sorted() is stable, so ties keep table order
    ordered = sorted(entries, key=lambda e: e.last_accessed_at or 0.0)

    evicted = []
    for entry in ordered:
        if not exceeds_limits(entry_count, total_size, max_entries, max_size_bytes):
            break
        if entry.tag in protected:
            continue
        evicted.append(entry.tag)
        entry_count -= 1
        total_size -= entry.size_bytes

    return evicted
