"""Configuration management."""

from content_changelog.config.settings import (
    ContentTypeSettings,
    DatabaseSettings,
    Settings,
    get_settings,
)

__all__ = ["ContentTypeSettings", "DatabaseSettings", "Settings", "get_settings"]
