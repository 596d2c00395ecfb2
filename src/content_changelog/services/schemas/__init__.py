"""Result types returned by service operations."""

from content_changelog.services.schemas.entries import ChangeLogEntry

__all__ = ["ChangeLogEntry"]
