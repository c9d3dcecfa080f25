"""
HTTP API consumed by the devtools panel.
"""

__all__ = ["http_server", "recent_activity_api", "cache_api"]
