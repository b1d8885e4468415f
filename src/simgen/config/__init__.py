"""Runtime configuration for simgen."""

from .settings import Settings, get_settings, settings

__all__ = ["Settings", "get_settings", "settings"]
