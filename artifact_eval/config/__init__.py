"""Configuration for the artifact evaluation engine."""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
