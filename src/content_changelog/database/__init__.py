"""Database connection and session management."""

from content_changelog.database.connection import (
    get_engine,
    get_session_factory,
    init_database,
    verify_required_tables,
)

__all__ = [
    "get_engine",
    "get_session_factory",
    "init_database",
    "verify_required_tables",
]
