"""
Building, sizing and searching cache entries.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from .models import CacheObjectWithSize

logger = logging.getLogger(__name__)


def _value_size(value: Any) -> int:
    """Size in bytes of the value serialized as compact JSON."""
    serialized = json.dumps(value, separators=(",", ":"), default=str)
    return len(serialized.encode("utf-8"))


def build_cache_objects(extract: Optional[Dict[str, Any]]) -> List[CacheObjectWithSize]:
    """
    Turn a cache extract into sized entries.

    Args:
        extract: Normalized cache contents keyed by cache id (e.g. the
            result of ``cache.extract()`` on the client)

    Returns:
        Entries in the extract's key order
    """
    if not extract:
        return []

    objects = [
        CacheObjectWithSize(key=str(key), value=value, value_size=_value_size(value))
        for key, value in extract.items()
    ]
    logger.debug(f"Built {len(objects)} cache objects")
    return objects


def filter_cache_objects(
    objects: List[CacheObjectWithSize], search_key: Optional[str]
) -> List[CacheObjectWithSize]:
    """
    Keep entries whose key contains the search key, ignoring case.

    An empty search key returns the entries unchanged.
    """
    if not search_key:
        return objects

    needle = search_key.lower()
    return [obj for obj in objects if needle in obj.key.lower()]


def get_cache_size(objects: List[CacheObjectWithSize]) -> int:
    """Overall size in bytes of the given entries."""
    return sum(obj.value_size for obj in objects)
