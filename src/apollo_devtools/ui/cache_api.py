"""
Cache API endpoints.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Query
from pydantic import BaseModel

from ..cache import (
    CacheObjectWithSize,
    build_cache_objects,
    filter_cache_objects,
    get_cache_size,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cache", tags=["cache"])


class CacheView(BaseModel):
    """Cache entries matching a search, with the overall cache size."""

    objects: List[CacheObjectWithSize] = []
    count: int = 0
    cache_size: int = 0


@router.post("/objects", response_model=CacheView)
async def get_cache_objects(
    extract: Dict[str, Any] = Body(...),
    search: Optional[str] = Query(None, description="Case-insensitive key filter"),
) -> CacheView:
    """
    Shape a cache extract into sized entries.

    The overall size covers the whole cache, not only matching entries.
    """
    objects = build_cache_objects(extract)
    filtered = filter_cache_objects(objects, search)

    logger.debug(f"Cache view: {len(filtered)}/{len(objects)} objects match {search!r}")

    return CacheView(
        objects=filtered,
        count=len(filtered),
        cache_size=get_cache_size(objects),
    )
