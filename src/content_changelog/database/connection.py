"""Engine and session factory for the change-log store."""

import logging

from sqlalchemy import create_engine, event, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from content_changelog.config import DatabaseSettings, get_settings
from content_changelog.models import ChangeLogRecord

logger = logging.getLogger(__name__)

_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def _engine_options(db: DatabaseSettings, echo: bool) -> dict:
    opts: dict = {"echo": echo}
    if db._use_server_db():
        opts.update(
            pool_size=db.pool_size,
            pool_timeout=db.pool_timeout,
            pool_recycle=db.pool_recycle,
            pool_pre_ping=True,
        )
    return opts


def _tune_sqlite(engine: Engine) -> None:
    # Readers share the file with the content editor that writes the log
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_conn, connection_record):
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA journal_mode=WAL")
        cur.execute("PRAGMA busy_timeout=30000")
        cur.close()


def get_engine() -> Engine:
    """Shared engine, created on first use."""
    global _engine

    if _engine is None:
        settings = get_settings()
        db = settings.database
        _engine = create_engine(db.url, **_engine_options(db, settings.debug))
        if not db._use_server_db():
            _tune_sqlite(_engine)
        logger.info("Change log store: %s (table %s)", db.db_info_for_logging(), db.change_log_table)

    return _engine


def get_session_factory() -> sessionmaker[Session]:
    """Shared factory for the short read sessions opened by ``ChangeLogReader``."""
    global _session_factory

    if _session_factory is None:
        _session_factory = sessionmaker(
            bind=get_engine(),
            autoflush=False,
            expire_on_commit=False,
        )
    return _session_factory


def verify_required_tables(engine: Engine | None = None) -> list[str]:
    """Names of required tables missing from the store."""
    if engine is None:
        engine = get_engine()
    existing = set(inspect(engine).get_table_names())
    return [name for name in (ChangeLogRecord.__tablename__,) if name not in existing]


def init_database(engine: Engine | None = None, drop: bool = False) -> list[str]:
    """
    Create the change-log table if it is missing and return what was created.

    Content tables belong to the content store and are never touched here.
    ``drop=True`` drops the change-log table first.
    """
    if engine is None:
        engine = get_engine()
    table = ChangeLogRecord.__table__

    if drop:
        table.drop(engine, checkfirst=True)
        logger.warning("Dropped table %s", table.name)

    missing = verify_required_tables(engine)
    table.create(engine, checkfirst=True)

    still_missing = verify_required_tables(engine)
    if still_missing:
        raise RuntimeError(f"Schema init failed: missing tables {still_missing}")

    logger.info("Schema init: created %s", missing or "nothing")
    return missing
