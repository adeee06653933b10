"""
Core Module

This module contains the tag image cache: entry table, request coalescing,
LRU eviction and the expiry sweeper.
"""

from .image_cache import CacheEntry, ImageCache, ImageProvider
from .eviction import select_evictions
from .sweeper import PeriodicTask

__all__ = [
    'CacheEntry',
    'ImageCache',
    'ImageProvider',
    'select_evictions',
    'PeriodicTask',
]
