"""Content type registry: slug → storage table."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterable, Optional

import structlog
from sqlalchemy import column, table
from sqlalchemy.sql.expression import TableClause

from content_changelog.config import Settings
from content_changelog.errors import ContentTypeNotFoundError, InvalidArgumentError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ContentType:
    slug: str
    table_name: str


def normalize_content_type(content_type: Any) -> str:
    """
    Reduce a content type argument to its slug.

    Accepts a slug string, a mapping with a ``slug`` key, or any object
    with a ``slug`` attribute (e.g. a ``ContentType``).
    """
    if isinstance(content_type, str):
        slug = content_type
    elif isinstance(content_type, Mapping):
        slug = content_type.get("slug")
    else:
        slug = getattr(content_type, "slug", None)

    if not isinstance(slug, str) or not slug.strip():
        raise InvalidArgumentError(f"Invalid content type: {content_type!r}")
    return slug.strip()


class ContentTypeRegistry:
    """In-process map of content type slugs to their tables."""

    def __init__(self, table_prefix: str = "", content_types: Iterable[ContentType] = ()):
        self.table_prefix = table_prefix
        self._types: dict[str, ContentType] = {}
        for ct in content_types:
            self._types[ct.slug] = ct

    @classmethod
    def from_settings(cls, settings: Settings) -> "ContentTypeRegistry":
        registry = cls(table_prefix=settings.database.table_prefix)
        overrides = settings.content_types.tables
        for slug in settings.content_types.slug_list:
            registry.register(slug, overrides.get(slug))
        # Overrides may name slugs missing from the list
        for slug, table_name in overrides.items():
            if slug not in registry:
                registry.register(slug, table_name)
        return registry

    def register(self, slug: str, table_name: Optional[str] = None) -> ContentType:
        """Register a content type; the table defaults to ``<prefix><slug>``."""
        slug = normalize_content_type(slug)
        ct = ContentType(slug=slug, table_name=table_name or f"{self.table_prefix}{slug}")
        self._types[slug] = ct
        logger.debug("Registered content type", slug=slug, table=ct.table_name)
        return ct

    def get(self, content_type: Any) -> ContentType:
        slug = normalize_content_type(content_type)
        try:
            return self._types[slug]
        except KeyError:
            raise ContentTypeNotFoundError(slug) from None

    def table_name(self, content_type: Any) -> str:
        return self.get(content_type).table_name

    def table(self, content_type: Any) -> TableClause:
        """Lightweight table construct for joining; only ``id`` and ``title`` are needed."""
        return table(self.table_name(content_type), column("id"), column("title"))

    def slugs(self) -> list[str]:
        return sorted(self._types)

    def __contains__(self, slug: object) -> bool:
        return slug in self._types
