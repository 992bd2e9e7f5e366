"""Core: config, logging, rate limiting and application bootstrap."""

from nexus_obra.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
