"""
Recent activity data models.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ChangeKind(str, Enum):
    """How an element changed between two observations."""

    ADDED = "added"
    REMOVED = "removed"


class RecentActivity(BaseModel):
    """
    A single element entering or leaving the watched collection.

    ``data`` is the element itself as it was seen by the tracker, taken
    from the current snapshot for ADDED and from the reference snapshot
    for REMOVED.
    """

    id: str
    change: ChangeKind
    data: Any = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        json_schema_extra = {
            "example": {
                "id": "5f0c1c7e-2d6b-4a53-9a3c-0d2f1b8f6e21",
                "change": "added",
                "data": {"key": "User:42", "value": {"name": "Ada"}, "value_size": 14},
                "timestamp": "2025-01-15T10:30:00Z",
            }
        }
