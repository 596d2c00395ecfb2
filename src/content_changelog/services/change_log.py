"""
Change-log reader.

Runs change-log queries against the store and maps rows to
``ChangeLogEntry`` values. Every call acquires its own session and closes
it before returning, so a reader can be shared between callers. A count
followed by a page fetch is two separate reads and may drift.
"""

from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog
from sqlalchemy.orm import Session, sessionmaker

from content_changelog.config import get_settings
from content_changelog.registry import ContentTypeRegistry
from content_changelog.repositories import ChangeLogQueryBuilder, ChangeLogRepository
from content_changelog.services.schemas import ChangeLogEntry

logger = structlog.get_logger(__name__)


class ChangeLogReader:
    """Query historical edits of content records."""

    def __init__(
        self,
        session_factory: Optional[sessionmaker[Session]] = None,
        registry: Optional[ContentTypeRegistry] = None,
    ):
        if session_factory is None:
            from content_changelog.database import get_session_factory

            session_factory = get_session_factory()
        self.session_factory = session_factory
        self.registry = registry or ContentTypeRegistry.from_settings(get_settings())
        self.query_builder = ChangeLogQueryBuilder(self.registry)

    @contextmanager
    def _repository(self) -> Generator[ChangeLogRepository, None, None]:
        session = self.session_factory()
        try:
            yield ChangeLogRepository(session, self.query_builder)
        finally:
            session.close()

    # -- ordered lookups ---------------------------------------------------

    def get_entry(self, content_type: Any, content_id: int, id: int) -> Optional[ChangeLogEntry]:
        """Entry ``id`` of the given content record, or None."""
        return self._get_ordered(content_type, content_id, id, "=")

    def get_next_entry(self, content_type: Any, content_id: int, id: int) -> Optional[ChangeLogEntry]:
        """Earliest-dated entry of the content record with an id above ``id``."""
        return self._get_ordered(content_type, content_id, id, ">")

    def get_prev_entry(self, content_type: Any, content_id: int, id: int) -> Optional[ChangeLogEntry]:
        """Latest-dated entry of the content record with an id below ``id``."""
        return self._get_ordered(content_type, content_id, id, "<")

    def _get_ordered(
        self, content_type: Any, content_id: int, id: int, comparison_op: str
    ) -> Optional[ChangeLogEntry]:
        with self._repository() as repo:
            record = repo.get_ordered(content_type, content_id, id, comparison_op)
            if record is None:
                logger.debug(
                    "No change log entry",
                    content_type=content_type,
                    content_id=content_id,
                    comparison=f"id {comparison_op} {id}",
                )
                return None
            return ChangeLogEntry.from_record(record)

    # -- listings ----------------------------------------------------------

    def get_all(self, options: Any = None) -> list[ChangeLogEntry]:
        """Entries across all content types."""
        with self._repository() as repo:
            return [ChangeLogEntry.from_record(r) for r in repo.get_change_log(options)]

    def get_by_content_type(self, content_type: Any, options: Any = None) -> list[ChangeLogEntry]:
        """Entries of one content type, filtered by the ``contentid`` / ``id`` options."""
        with self._repository() as repo:
            records = repo.get_by_content_type(content_type, options)
            return [ChangeLogEntry.from_record(r) for r in records]

    def count(self, content_type: Any = None, options: Any = None) -> int:
        """Number of entries; all content types when ``content_type`` is None."""
        with self._repository() as repo:
            return repo.count_matching(content_type, options)
