"""Shared exception hierarchy for the change-log reader.

Store failures (``sqlalchemy.exc.SQLAlchemyError``) are not wrapped and
reach the caller unchanged.
"""


class ChangeLogError(Exception):
    """Base exception for change-log errors."""


class InvalidArgumentError(ChangeLogError):
    """An argument or option has an unsupported value."""


class ContentTypeNotFoundError(ChangeLogError):
    """No content type is registered under the given slug."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Unknown content type: {slug!r}")
