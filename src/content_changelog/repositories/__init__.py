"""Repository layer for data access."""

from content_changelog.repositories.base import BaseRepository
from content_changelog.repositories.change_log import ChangeLogRepository
from content_changelog.repositories.options import ChangeLogOptions, coerce_options
from content_changelog.repositories.query_builder import (
    COMPARISON_OPERATORS,
    ChangeLogQueryBuilder,
)

__all__ = [
    "BaseRepository",
    "ChangeLogRepository",
    "ChangeLogOptions",
    "ChangeLogQueryBuilder",
    "COMPARISON_OPERATORS",
    "coerce_options",
]
