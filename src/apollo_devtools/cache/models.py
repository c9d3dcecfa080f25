"""
Cache entry data models.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class CacheObjectWithSize(BaseModel):
    """
    One normalized cache entry and the size of its serialized value.

    Entries compare by value, so an entry whose value changed between two
    snapshots is seen as a different element.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    value: Any = None
    value_size: int = 0
