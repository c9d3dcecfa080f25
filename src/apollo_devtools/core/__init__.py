"""
Core utilities shared across Apollo Devtools modules.
"""

from .config import AppConfig, get_config, reload_config

__all__ = ["AppConfig", "get_config", "reload_config"]
