"""Repository for ChangeLogRecord."""

from typing import Any, Optional, Sequence

from sqlalchemy.orm import Session

from content_changelog.models import ChangeLogRecord
from content_changelog.repositories.base import BaseRepository
from content_changelog.repositories.query_builder import ChangeLogQueryBuilder


class ChangeLogRepository(BaseRepository[ChangeLogRecord]):
    """Read-only access to the change-log table."""

    model = ChangeLogRecord

    def __init__(self, session: Session, query_builder: ChangeLogQueryBuilder):
        super().__init__(session)
        self.query_builder = query_builder

    def get_ordered(
        self, content_type: Any, content_id: int, id: int, comparison_op: str
    ) -> Optional[ChangeLogRecord]:
        """Entry matching ``id`` (``=``), or the one before (``<``) / after (``>``) it."""
        stmt = self.query_builder.build_ordered_lookup_query(
            content_type, content_id, id, comparison_op
        )
        return self.find_one(stmt)

    def get_change_log(self, options: Any = None) -> Sequence[ChangeLogRecord]:
        """Entries across all content types."""
        return self.find_all(self.query_builder.build_filter_query(None, options))

    def get_by_content_type(self, content_type: Any, options: Any = None) -> Sequence[ChangeLogRecord]:
        """Entries of one content type."""
        return self.find_all(self.query_builder.build_filter_query(content_type, options))

    def count_matching(self, content_type: Any = None, options: Any = None) -> int:
        """Count of entries, optionally restricted to one content type."""
        stmt = self.query_builder.build_count_query(content_type, options)
        return self.session.scalar(stmt) or 0
