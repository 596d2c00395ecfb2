"""Shared fixtures: in-memory SQLite DB with the change log and two content tables."""

from collections.abc import Generator
from datetime import datetime

import pytest
from sqlalchemy import Column, Integer, MetaData, String, Table, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from content_changelog.models import Base, ChangeLogRecord
from content_changelog.registry import ContentTypeRegistry
from content_changelog.services import ChangeLogReader

content_metadata = MetaData()

pages_table = Table(
    "bolt_pages",
    content_metadata,
    Column("id", Integer, primary_key=True),
    Column("title", String(256)),
)

entries_table = Table(
    "bolt_entries",
    content_metadata,
    Column("id", Integer, primary_key=True),
    Column("title", String(256)),
)


class TrackingSession(Session):
    """Session that remembers whether it was closed."""

    closed: bool = False

    def close(self) -> None:
        super().close()
        self.closed = True


def _record(id: int, content_type: str, content_id: int, date: datetime, **kwargs) -> ChangeLogRecord:
    return ChangeLogRecord(
        id=id,
        content_type=content_type,
        content_id=content_id,
        date=date,
        **kwargs,
    )


# pages/42 has ids 1..5 whose dates do not follow id order
SEED_RECORDS = [
    dict(id=1, content_type="pages", content_id=42, date=datetime(2024, 1, 1, 9, 0),
         title="About", owner_id=1, mutation_type="INSERT", diff={}),
    dict(id=2, content_type="pages", content_id=42, date=datetime(2024, 1, 5, 9, 0),
         title="About us", owner_id=1, mutation_type="UPDATE",
         diff={"title": ["About", "About us"]}, comment="Rename"),
    dict(id=3, content_type="pages", content_id=42, date=datetime(2024, 1, 3, 9, 0),
         title="About us", owner_id=2, mutation_type="UPDATE",
         diff={"status": ["draft", "published"]}),
    dict(id=4, content_type="pages", content_id=42, date=datetime(2024, 1, 2, 9, 0),
         title="About us", owner_id=2, mutation_type="UPDATE",
         diff={"body": ["a", "b"], "teaser": ["", "c"]}),
    dict(id=5, content_type="pages", content_id=42, date=datetime(2024, 1, 4, 9, 0),
         title="About us", owner_id=1, mutation_type="UPDATE", diff={"body": ["b", "d"]}),
    dict(id=6, content_type="pages", content_id=7, date=datetime(2024, 2, 1, 9, 0),
         title="Contact", owner_id=3, mutation_type="INSERT", diff={}),
    dict(id=7, content_type="pages", content_id=7, date=datetime(2024, 2, 2, 9, 0),
         title="Contact", owner_id=3, mutation_type="DELETE", diff={}),
    dict(id=8, content_type="entries", content_id=42, date=datetime(2024, 3, 1, 9, 0),
         title="Hello world", owner_id=1, mutation_type="INSERT", diff={}),
    dict(id=9, content_type="entries", content_id=42, date=datetime(2024, 3, 2, 9, 0),
         title="Hello, world", owner_id=1, mutation_type="UPDATE",
         diff={"title": ["Hello world", "Hello, world"]}),
]


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    eng: Engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(eng)
    content_metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine,
        class_=TrackingSession,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture()
def seeded(engine: Engine, session_factory: sessionmaker[Session]) -> list[dict]:
    with engine.begin() as conn:
        conn.execute(pages_table.insert(), [
            {"id": 42, "title": "About us"},
            {"id": 7, "title": "Contact"},
        ])
        conn.execute(entries_table.insert(), [{"id": 42, "title": "Hello, world"}])

    session: Session = session_factory()
    session.add_all([_record(**row) for row in SEED_RECORDS])
    session.commit()
    session.close()
    return SEED_RECORDS


@pytest.fixture()
def registry() -> ContentTypeRegistry:
    reg = ContentTypeRegistry(table_prefix="bolt_")
    reg.register("pages")
    reg.register("entries")
    # Registered, but its table was never created
    reg.register("ghosts")
    return reg


@pytest.fixture()
def reader(session_factory: sessionmaker[Session], registry: ContentTypeRegistry, seeded) -> ChangeLogReader:
    return ChangeLogReader(session_factory=session_factory, registry=registry)
