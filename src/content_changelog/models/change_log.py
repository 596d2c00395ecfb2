"""ChangeLogRecord model - one historical edit of a content record."""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from content_changelog.config import get_settings
from content_changelog.models.base import Base, utc_now

# Shares DB_TABLE_PREFIX with the content tables, e.g. bolt_log_change
CHANGE_LOG_TABLE = get_settings().database.change_log_table


class ChangeLogRecord(Base):
    """
    Row of the change-log table.

    Rows are written by the content editor and are read-only here.
    Column names follow the legacy schema (``contenttype``, ``contentid``,
    ``ownerid``); attribute names are snake_case.
    """

    __tablename__ = CHANGE_LOG_TABLE

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    date: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utc_now)

    owner_id: Mapped[Optional[int]] = mapped_column("ownerid", Integer, nullable=True)
    title: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)
    content_type: Mapped[str] = mapped_column("contenttype", String(128), nullable=False)
    content_id: Mapped[int] = mapped_column("contentid", Integer, nullable=False)

    # INSERT / UPDATE / DELETE
    mutation_type: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    diff: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index(f"ix_{CHANGE_LOG_TABLE}_content", "contenttype", "contentid"),
    )
