"""SELECT statement construction for the change-log table.

Every filter value is a bound parameter; the only identifiers that come
from callers (content table name, ORDER BY column) are resolved through
the content type registry and the change-log column allowlist.
"""

import operator
from typing import Any, Optional

import structlog
from sqlalchemy import Select, and_, func, select
from sqlalchemy.orm import InstrumentedAttribute

from content_changelog.errors import InvalidArgumentError
from content_changelog.models import ChangeLogRecord
from content_changelog.registry import ContentTypeRegistry
from content_changelog.repositories.options import ChangeLogOptions, coerce_options

logger = structlog.get_logger(__name__)

COMPARISON_OPERATORS = {
    "=": operator.eq,
    "<": operator.lt,
    ">": operator.gt,
}


def _orderable_columns() -> dict[str, InstrumentedAttribute]:
    """Attribute and column names of the change-log table, both accepted for ORDER BY."""
    columns: dict[str, InstrumentedAttribute] = {}
    for attr in ChangeLogRecord.__mapper__.column_attrs:
        instrumented = getattr(ChangeLogRecord, attr.key)
        columns[attr.key] = instrumented
        for col in attr.columns:
            columns[col.name] = instrumented
    return columns


ORDERABLE_COLUMNS = _orderable_columns()


class ChangeLogQueryBuilder:
    """Builds filtered, ordered and paginated change-log queries."""

    def __init__(self, registry: ContentTypeRegistry):
        self.registry = registry

    def build_count_query(self, content_type: Any = None, options: Any = None) -> Select:
        """``COUNT`` of matching entries; ``content_type=None`` counts every entry."""
        opts = coerce_options(options)
        stmt = select(func.count(ChangeLogRecord.id)).select_from(ChangeLogRecord)
        if content_type is not None:
            # Resolve so that an unknown type fails instead of counting zero
            slug = self.registry.get(content_type).slug
            stmt = self._set_where(stmt, slug, opts)
        return stmt

    def build_filter_query(self, content_type: Any = None, options: Any = None) -> Select:
        """
        Select change-log rows.

        With a content type the rows are left joined to the content table and
        filtered by the type, ``contentid`` and ``id`` options. Without one,
        only ordering and paging apply.
        """
        opts = coerce_options(options)
        stmt = select(ChangeLogRecord)
        if content_type is not None:
            ct = self.registry.get(content_type)
            content = self.registry.table(ct)
            stmt = stmt.outerjoin(content, content.c.id == ChangeLogRecord.content_id)
            stmt = self._set_where(stmt, ct.slug, opts)
        return self._set_limit_order(stmt, opts)

    def build_ordered_lookup_query(
        self,
        content_type: Any,
        content_id: int,
        id: int,
        comparison_op: str,
    ) -> Select:
        """
        Select at most one entry of a content record relative to ``id``.

        ``=`` selects the entry itself. ``<`` selects, among entries with a
        lower id, the one with the latest date; ``>`` selects, among entries
        with a higher id, the one with the earliest date. Equal dates fall
        back to id order.
        """
        cmp = COMPARISON_OPERATORS.get(comparison_op)
        if cmp is None:
            raise InvalidArgumentError(f"Invalid comparison operator: {comparison_op}")

        ct = self.registry.get(content_type)
        content = self.registry.table(ct)

        stmt = (
            select(ChangeLogRecord)
            .outerjoin(content, content.c.id == ChangeLogRecord.content_id)
            .where(
                and_(
                    cmp(ChangeLogRecord.id, id),
                    ChangeLogRecord.content_id == content_id,
                    ChangeLogRecord.content_type == ct.slug,
                )
            )
            .limit(1)
        )

        if comparison_op == "<":
            stmt = stmt.order_by(ChangeLogRecord.date.desc(), ChangeLogRecord.id.desc())
        elif comparison_op == ">":
            stmt = stmt.order_by(ChangeLogRecord.date.asc(), ChangeLogRecord.id.asc())

        logger.debug(
            "Ordered lookup",
            content_type=ct.slug,
            content_id=content_id,
            comparison=f"id {comparison_op} {id}",
        )
        return stmt

    def _set_where(self, stmt: Select, slug: str, options: ChangeLogOptions) -> Select:
        conditions = [ChangeLogRecord.content_type == slug]
        if options.contentid is not None:
            conditions.append(ChangeLogRecord.content_id == options.contentid)
        if options.id is not None:
            conditions.append(ChangeLogRecord.id == options.id)
        return stmt.where(and_(*conditions))

    def _set_limit_order(self, stmt: Select, options: ChangeLogOptions) -> Select:
        order_col = self._order_column(options.order)
        if order_col is None:
            stmt = stmt.order_by(ChangeLogRecord.id.asc())
        else:
            descending = options.direction == "DESC"
            stmt = stmt.order_by(order_col.desc() if descending else order_col.asc())
            if order_col is not ChangeLogRecord.id:
                stmt = stmt.order_by(
                    ChangeLogRecord.id.desc() if descending else ChangeLogRecord.id.asc()
                )

        if options.limit is not None:
            stmt = stmt.limit(options.limit)
            if options.offset is not None:
                stmt = stmt.offset(options.offset)
        return stmt

    @staticmethod
    def _order_column(order: Optional[str]) -> Optional[InstrumentedAttribute]:
        if order is None:
            return None
        name = order.strip()
        # Accept "log.date" as written by callers of the legacy API
        if name.startswith("log."):
            name = name[len("log."):]
        try:
            return ORDERABLE_COLUMNS[name]
        except KeyError:
            raise InvalidArgumentError(f"Cannot order change log by {order!r}") from None
