"""
Cache module for shaping a client cache extract into sized entries.
"""

from .models import CacheObjectWithSize
from .objects import build_cache_objects, filter_cache_objects, get_cache_size

__all__ = [
    "CacheObjectWithSize",
    "build_cache_objects",
    "filter_cache_objects",
    "get_cache_size",
]
