"""
Recent activity module for recording changes in a watched collection.

Tracks what was added to or removed from the cache (or the watched
queries and mutations) between consecutive observations.
"""

__all__ = ["models", "tracker", "session", "service"]
