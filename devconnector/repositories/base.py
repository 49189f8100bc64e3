"""Shared repository base."""

from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from devconnector.db import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Session-bound data access for one model.

    Usage:
        class PostRepository(BaseRepository[Post]):
            model = Post

        post = PostRepository(session).get_by_id(1)
    """

    model: type[T]

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, id: int) -> T | None:
        return self.session.get(self.model, id)

    def exists_where(self, **filters) -> bool:
        """True if a row matches every filter (column == value)."""
        query = self.session.query(self.model).filter_by(**filters)
        return bool(self.session.query(query.exists()).scalar())
