"""Typed change-log entries returned by the reader."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from content_changelog.models import ChangeLogRecord


@dataclass(frozen=True)
class ChangeLogEntry:
    id: int
    content_id: int
    content_type: str
    date: datetime
    title: Optional[str] = None
    owner_id: Optional[int] = None
    mutation_type: Optional[str] = None
    diff: dict[str, Any] = field(default_factory=dict)
    comment: Optional[str] = None

    @classmethod
    def from_record(cls, record: ChangeLogRecord) -> "ChangeLogEntry":
        return cls(
            id=record.id,
            content_id=record.content_id,
            content_type=record.content_type,
            date=record.date,
            title=record.title,
            owner_id=record.owner_id,
            mutation_type=record.mutation_type,
            diff=dict(record.diff or {}),
            comment=record.comment,
        )

    @property
    def changed_fields(self) -> list[str]:
        return sorted(self.diff)

    @property
    def effective_mutation_type(self) -> Optional[str]:
        """``STATUS_CHANGE`` for updates that touch ``status``, else the stored type."""
        if self.mutation_type == "UPDATE" and "status" in self.diff:
            return "STATUS_CHANGE"
        return self.mutation_type
