"""
Operator view over the image cache: status and reset, gated by a static bearer token.
"""

import secrets
from datetime import datetime, timezone
from typing import Optional

from core.image_cache import ImageCache
from utils.logging_config import get_logger

logger = get_logger('CacheAdmin')


def to_iso(timestamp: Optional[float]) -> Optional[str]:
    """Epoch seconds to ISO8601 UTC with millisecond precision and a Z suffix."""
    if timestamp is None:
        return None
    dt = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return dt.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class CacheAdmin:
    def __init__(self, cache: ImageCache, secret: Optional[str]):
        self.cache = cache
        self._secret = secret or None

    @property
    def enabled(self) -> bool:
        return self._secret is not None

    def validate_access(self, credential: Optional[str]) -> bool:
        """
        Check a presented bearer token against the configured secret.

        With no secret configured the admin interface is closed to everyone.
        """
        if not self.enabled:
            logger.warning("Cache admin request rejected: CACHE_API_KEY is not configured")
            return False
        if not credential:
            return False
        return secrets.compare_digest(credential.encode(), self._secret.encode())

    def status(self) -> dict:
        """Per-tag cache state plus global totals, in the admin API's JSON shape."""
        entries = [
            {
                "tag": row["tag"],
                "imageCount": row["image_count"],
                "sizeKB": round(row["size_bytes"] / 1024, 2),
                "lastFetched": to_iso(row["last_fetched_at"]),
                "lastAccessed": to_iso(row["last_accessed_at"]),
                "ageSeconds": row["age_seconds"],
                "expired": row["expired"],
                "hasActiveRequest": row["has_active_request"],
            }
            for row in self.cache.snapshot()
        ]
        return {
            "cacheEntries": entries,
            "totalEntries": len(entries),
            "totalSizeMB": round(self.cache.total_size / (1024 * 1024), 2),
            "maxSizeMB": round(self.cache.max_size_bytes / (1024 * 1024), 2),
            "maxEntries": self.cache.max_entries,
            "cacheDurationSeconds": int(self.cache.cache_duration),
        }

    def clear(self) -> dict:
        entries_cleared, size_cleared = self.cache.clear()
        return {
            "message": "Cache cleared successfully",
            "entriesCleared": entries_cleared,
            "sizeCleared": round(size_cleared / 1024, 2),
        }
