"""
Apollo Devtools - GraphQL client cache and operations inspector

This package backs a developer-tools panel that shows the state of a
GraphQL client cache and records what changes in it over time.

Main modules:
- recent_activity: Change tracking between snapshots and recording sessions
- cache: Cache entry shaping, sizing and search
- ui: HTTP API consumed by the panel
- cli: devtoolsctl operational CLI
"""

__version__ = "0.1.0"
__author__ = "Apollo Devtools Team"

import os
from typing import Dict, Any

# Environment configuration defaults
DEFAULT_CONFIG: Dict[str, Any] = {
    "api_url": "http://localhost:8000",
    "log_level": "INFO",
}


def get_api_url() -> str:
    """
    Get the devtools API URL from environment or configuration.

    Priority order:
    1. DEVTOOLS_API_URL environment variable
    2. Default fallback (http://localhost:8000)

    Returns:
        str: The devtools HTTP API URL
    """
    return os.getenv("DEVTOOLS_API_URL", DEFAULT_CONFIG["api_url"])


__all__ = ["__version__", "__author__", "DEFAULT_CONFIG", "get_api_url"]
