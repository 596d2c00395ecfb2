"""Base repository with common read operations."""

from typing import Generic, Optional, Sequence, Type, TypeVar

from sqlalchemy import Select
from sqlalchemy.orm import Session

from content_changelog.models.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Base repository running prepared statements for one model.

    Subclasses set ``model`` and build the statements they execute.
    """

    model: Type[T]

    def __init__(self, session: Session):
        self.session = session

    def find_one(self, stmt: Select) -> Optional[T]:
        """First entity of a statement, or None."""
        return self.session.scalars(stmt).first()

    def find_all(self, stmt: Select) -> Sequence[T]:
        """All entities of a statement."""
        return self.session.scalars(stmt).all()
