"""
Author repository implementation for the Library System API.

Authors are identified by first and last name, compared case-insensitively
with runs of whitespace collapsed. ``BookRepository.create_with_author``
resolves authors through the same ``author_name_filter``.
"""

from sqlalchemy import func, select

from ..models.author import Author as AuthorModel
from .repository import BaseRepository
from .schema import Author as AuthorDB
from .schema import Book as BookDB
from .session import safe_query


def normalize_name(name: str) -> str:
    return " ".join(name.split())


def author_name_filter(first_name: str, last_name: str):
    """WHERE clauses matching an author by name."""
    return (
        func.lower(AuthorDB.first_name) == normalize_name(first_name).lower(),
        func.lower(AuthorDB.last_name) == normalize_name(last_name).lower(),
    )


class AuthorRepository(BaseRepository[AuthorDB, AuthorModel]):
    """Repository for author data access."""

    @property
    def model_class(self):
        return AuthorDB

    @property
    def response_schema(self):
        return AuthorModel

    @property
    def id_field(self) -> str:
        return "author_id"

    def get_by_name(self, first_name: str, last_name: str) -> AuthorModel | None:
        """Find an author by first and last name, ignoring case and extra spaces."""
        query = select(AuthorDB).where(*author_name_filter(first_name, last_name))
        result = safe_query(
            self.session,
            lambda s: s.execute(query).scalars().first(),
            "Failed to get author by name",
        )
        if result is None:
            return None
        return self._to_response_model(result)

    def exists_by_name(self, first_name: str, last_name: str) -> bool:
        query = (
            select(func.count())
            .select_from(AuthorDB)
            .where(*author_name_filter(first_name, last_name))
        )
        count = safe_query(
            self.session, lambda s: s.execute(query).scalar(), "Failed to check author existence"
        )
        return bool(count)

    def get_by_book_id(self, book_id: int) -> AuthorModel | None:
        """Find the author of a given book."""
        query = (
            select(AuthorDB)
            .join(BookDB, BookDB.author_id == AuthorDB.author_id)
            .where(BookDB.book_id == book_id)
        )
        result = safe_query(
            self.session,
            lambda s: s.execute(query).scalar_one_or_none(),
            "Failed to get author by book ID",
        )
        if result is None:
            return None
        return self._to_response_model(result)

