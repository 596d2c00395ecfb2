"""SQLAlchemy ORM models for the content change log."""

from content_changelog.models.base import Base
from content_changelog.models.change_log import CHANGE_LOG_TABLE, ChangeLogRecord

__all__ = [
    "Base",
    "CHANGE_LOG_TABLE",
    "ChangeLogRecord",
]
