"""Service layer."""

from content_changelog.services.change_log import ChangeLogReader
from content_changelog.services.schemas import ChangeLogEntry

__all__ = ["ChangeLogEntry", "ChangeLogReader"]
