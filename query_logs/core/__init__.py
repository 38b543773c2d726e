"""Core: settings and shared constants."""

from query_logs.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
