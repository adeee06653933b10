"""
Tag Image Cache

In-memory cache of image lists fetched by tag from the remote image provider.

- One entry per tag, refreshed after CACHE_DURATION
- Concurrent requests for the same tag share one upstream fetch
- LRU eviction bounded by entry count and estimated size
- Background sweep of expired tags
- Serves stale images when a refresh fails, empty list when there is nothing

All table mutations happen on the event loop between awaits, so there are no
locks. The only suspension point is awaiting the provider.
"""

import asyncio
import math
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Protocol, Tuple

from core.eviction import exceeds_limits, select_evictions
from core.sweeper import PeriodicTask
from utils.logging_config import get_logger

logger = get_logger('ImageCache')

DEFAULT_CACHE_DURATION = 5 * 60  # seconds
DEFAULT_MAX_ENTRIES = 20
DEFAULT_MAX_SIZE_BYTES = 50 * 1024 * 1024
DEFAULT_IMAGE_SIZE_ESTIMATE = 1024  # bytes per image record
DEFAULT_SWEEP_INTERVAL = 60  # seconds
DEFAULT_IMAGE_LIMIT = 400


class ImageProvider(Protocol):
    """Anything that can list image records for a tag."""

    async def fetch_by_tag(self, tag: str, limit: int) -> List[dict]:
        ...


@dataclass
class CacheEntry:
    """Cached image list for one tag."""
    tag: str
    images: List[dict] = field(default_factory=list)
    last_fetched_at: Optional[float] = None   # None until the first fetch succeeds
    last_accessed_at: Optional[float] = None
    size_bytes: int = 0

    @property
    def image_count(self) -> int:
        return len(self.images)

    def age(self, now: float) -> Optional[float]:
        if self.last_fetched_at is None:
            return None
        return now - self.last_fetched_at

    def is_fresh(self, now: float, cache_duration: float) -> bool:
        age = self.age(now)
        return age is not None and age < cache_duration


class ImageCache:
    """
    Owns the tag table, the in-flight fetch registry and the size counter.

    Construct one per process and call start() once the event loop is running
    so the expiry sweeper gets scheduled; call shutdown() to cancel it.
    """

    def __init__(
        self,
        provider: ImageProvider,
        cache_duration: float = DEFAULT_CACHE_DURATION,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        max_size_bytes: int = DEFAULT_MAX_SIZE_BYTES,
        image_size_estimate: int = DEFAULT_IMAGE_SIZE_ESTIMATE,
        sweep_interval: float = DEFAULT_SWEEP_INTERVAL,
        clock: Callable[[], float] = time.time,
    ):
        self._provider = provider
        self.cache_duration = float(cache_duration)
        self.max_entries = int(max_entries)
        self.max_size_bytes = int(max_size_bytes)
        self.image_size_estimate = int(image_size_estimate)
        self._clock = clock

        self._entries: Dict[str, CacheEntry] = {}
        self._inflight: Dict[str, asyncio.Task] = {}
        self._total_size = 0
        # Bumped by clear(); fetches from an older generation don't write back
        self._generation = 0

        self._sweeper = PeriodicTask(self.sweep_expired, sweep_interval, name="image-cache-sweeper")

    # ==================== LIFECYCLE ====================

    def start(self) -> bool:
        """Schedule the expiry sweeper. Must be called from a running event loop."""
        started = self._sweeper.start()
        if started:
            logger.info(
                f"Image cache ready (duration {self.cache_duration:g}s, "
                f"max {self.max_entries} entries / {self.max_size_bytes // (1024 * 1024)}MB)"
            )
        return started

    async def shutdown(self):
        """Cancel the expiry sweeper. In-flight fetches are left to finish."""
        await self._sweeper.stop()

    @property
    def sweeper_running(self) -> bool:
        return self._sweeper.running

    # ==================== READ PATH ====================

    def now(self) -> float:
        return self._clock()

    @property
    def total_size(self) -> int:
        return self._total_size

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, tag: str) -> bool:
        return tag in self._entries

    def get_entry(self, tag: str) -> Optional[CacheEntry]:
        return self._entries.get(tag)

    def has_active_request(self, tag: str) -> bool:
        return tag in self._inflight

    async def get_images(self, tag: str, limit: int = DEFAULT_IMAGE_LIMIT) -> List[dict]:
        """
        Return the image list for a tag, fetching at most once concurrently.

        Never raises: provider failures fall back to stale images or an empty
        list, and so does anything unexpected in the cache itself.
        """
        try:
            return await self._get_images(tag, limit)
        except Exception:
            logger.exception(f"Unexpected error getting images for {tag}")
            return []

    async def _get_images(self, tag: str, limit: int) -> List[dict]:
        now = self._clock()
        entry = self._entries.get(tag)

        if entry is not None and entry.is_fresh(now, self.cache_duration):
            entry.last_accessed_at = now
            logger.debug(f"Using cached images for {tag} ({entry.image_count} images)")
            return list(entry.images)

        task = self._inflight.get(tag)
        if task is None:
            task = self._start_fetch(tag, limit, entry)
        else:
            logger.debug(f"Joining in-flight fetch for {tag}")

        # Shielded so one waiter being cancelled doesn't cancel the shared fetch
        return await asyncio.shield(task)

    # ==================== FETCH ====================

    def _start_fetch(self, tag: str, limit: int, entry: Optional[CacheEntry]) -> asyncio.Task:
        if entry is None:
            entry = CacheEntry(tag=tag)
            self._entries[tag] = entry
        stale = list(entry.images)

        task = asyncio.create_task(
            self._fetch(tag, limit, stale, self._generation),
            name=f"image-fetch:{tag}",
        )
        self._inflight[tag] = task
        return task

    async def _fetch(self, tag: str, limit: int, stale: List[dict], generation: int) -> List[dict]:
        logger.info(f"Fetching fresh images for {tag} (limit: {limit})")
        try:
            images = list(await self._provider.fetch_by_tag(tag, limit))
        except Exception as e:
            return self._fetch_failed(tag, stale, generation, e)
        return self._fetch_succeeded(tag, images, generation)

    def _fetch_succeeded(self, tag: str, images: List[dict], generation: int) -> List[dict]:
        if generation != self._generation:
            logger.info(f"Discarding fetch for {tag}: cache was cleared while it was in flight")
            return images

        self._inflight.pop(tag, None)
        now = self._clock()

        entry = self._entries.get(tag)
        if entry is None:
            entry = CacheEntry(tag=tag)
            self._entries[tag] = entry

        previous_count = entry.image_count if entry.last_fetched_at is not None else None

        self._total_size -= entry.size_bytes
        entry.images = images
        entry.size_bytes = len(images) * self.image_size_estimate
        entry.last_fetched_at = now
        entry.last_accessed_at = now
        self._total_size += entry.size_bytes

        if previous_count is not None and previous_count != len(images):
            logger.info(f"Image count changed for {tag}: {previous_count} -> {len(images)}")

        self.enforce_limits()
        return list(images)

    def _fetch_failed(self, tag: str, stale: List[dict], generation: int, error: Exception) -> List[dict]:
        logger.warning(f"Error fetching {tag} tagged images: {error}")

        if generation == self._generation:
            self._inflight.pop(tag, None)
            entry = self._entries.get(tag)
            if entry is not None and entry.last_fetched_at is None:
                # Placeholder that never held data
                self._remove(tag)

        if stale:
            logger.info(f"Using stale cache for {tag} due to error ({len(stale)} images)")
        return list(stale)

    # ==================== EVICTION / EXPIRY ====================

    def _remove(self, tag: str) -> Optional[CacheEntry]:
        entry = self._entries.pop(tag, None)
        if entry is not None:
            self._total_size -= entry.size_bytes
        return entry

    def enforce_limits(self) -> List[str]:
        """Evict least-recently-accessed tags until both bounds hold."""
        evicted = select_evictions(
            self._entries.values(),
            self._total_size,
            self.max_entries,
            self.max_size_bytes,
            protected=self._inflight,
        )
        for tag in evicted:
            self._remove(tag)

        if evicted:
            logger.info(f"LRU evicted {len(evicted)} entries: {', '.join(evicted)}")
        elif exceeds_limits(len(self._entries), self._total_size, self.max_entries, self.max_size_bytes):
            logger.warning("Cache is over its limits but every remaining entry has a fetch in flight")
        return evicted

    def sweep_expired(self) -> int:
        """Remove entries older than the cache duration. Returns how many were removed."""
        now = self._clock()
        expired = [
            tag for tag, entry in list(self._entries.items())
            if tag not in self._inflight
            and entry.last_fetched_at is not None
            and now - entry.last_fetched_at > self.cache_duration
        ]
        for tag in expired:
            self._remove(tag)

        if expired:
            logger.info(f"Swept {len(expired)} expired cache entries")
        return len(expired)

    # ==================== ADMIN ====================

    def snapshot(self) -> List[dict]:
        """
        Point-in-time view of every entry, safe to read after the table changes.

        A tag whose first fetch is still pending is listed with no images, None
        for both timestamps and the age, and expired=True.
        """
        now = self._clock()
        rows = []
        for tag, entry in list(self._entries.items()):
            age = entry.age(now)
            rows.append({
                "tag": tag,
                "image_count": entry.image_count,
                "size_bytes": entry.size_bytes,
                "last_fetched_at": entry.last_fetched_at,
                "last_accessed_at": entry.last_accessed_at,
                "age_seconds": math.floor(age) if age is not None else None,
                "expired": not entry.is_fresh(now, self.cache_duration),
                "has_active_request": tag in self._inflight,
            })
        return rows

    def clear(self) -> Tuple[int, int]:
        """
        Drop every entry.

        Fetches already in flight keep running and still answer the callers
        waiting on them, but their results are not written into the table.

        Returns:
            (entries removed, estimated bytes removed)
        """
        entries_cleared = len(self._entries)
        size_cleared = self._total_size
        detached = len(self._inflight)

        self._entries.clear()
        self._inflight.clear()
        self._total_size = 0
        self._generation += 1

        logger.info(
            f"Image cache cleared ({entries_cleared} entries, {size_cleared // 1024}KB"
            + (f", {detached} in-flight fetches detached)" if detached else ")")
        )
        return entries_cleared, size_cleared
