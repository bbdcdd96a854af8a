"""Runtime settings for license-fetch."""

from .config import Settings, settings

__all__ = ["Settings", "settings"]
