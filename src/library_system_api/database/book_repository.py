"""
Book repository implementation for the Library System API.

Beyond the shared CRUD operations this repository covers:

1. **Lookups**: by title, by ISBN, author id of a book
2. **State transitions**: condition and availability status
3. **Listing**: the ``BookSummary`` projection joined with author names
4. **Insert with author**: the author row is resolved (or added) in the same
   transaction as the book
"""

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..models.book import AvailabilityStatus, BookCondition, BookSummary
from ..models.book import Book as BookModel
from .author_repository import author_name_filter, normalize_name
from .repository import BaseRepository, DuplicateError, PersistenceError
from .schema import Author as AuthorDB
from .schema import Book as BookDB
from .session import safe_query


def normalize_isbn(isbn: str) -> str:
    """Strip hyphens and spaces so equivalent ISBNs compare equal."""
    return isbn.replace("-", "").replace(" ", "").upper()


class BookRepository(BaseRepository[BookDB, BookModel]):
    """Repository for book data access."""

    @property
    def model_class(self):
        return BookDB

    @property
    def response_schema(self):
        return BookModel

    @property
    def id_field(self) -> str:
        return "book_id"

    def get_by_title(self, title: str) -> BookModel | None:
        """
        Get a book by exact title (case-insensitive).

        When several editions share a title the oldest row wins.
        """
        query = (
            select(BookDB)
            .where(func.lower(BookDB.title) == title.strip().lower())
            .order_by(BookDB.book_id)
        )
        result = safe_query(
            self.session,
            lambda s: s.execute(query).scalars().first(),
            "Failed to get book by title",
        )
        if result is None:
            return None
        return self._to_response_model(result)

    def isbn_exists(self, isbn: str) -> bool:
        query = (
            select(func.count())
            .select_from(BookDB)
            .where(BookDB.isbn == normalize_isbn(isbn))
        )
        count = safe_query(
            self.session, lambda s: s.execute(query).scalar(), "Failed to check ISBN"
        )
        return bool(count)

    def get_author_id(self, book_id: int) -> int | None:
        """Return the author id of a book, or None if the book does not exist."""
        query = select(BookDB.author_id).where(BookDB.book_id == book_id)
        return safe_query(
            self.session,
            lambda s: s.execute(query).scalar_one_or_none(),
            "Failed to get author ID",
        )

    def create_with_author(
        self, data: BookModel, author_first_name: str, author_last_name: str
    ) -> BookModel:
        """
        Insert a book, resolving its author by name.

        The author lookup, the optional author insert and the book insert are
        committed together.

        Raises:
            DuplicateError: If the ISBN is already catalogued
            PersistenceError: On other database errors
        """
        author_query = select(AuthorDB).where(
            *author_name_filter(author_first_name, author_last_name)
        )

        try:
            author = self.session.execute(author_query).scalars().first()
            if author is None:
                author = AuthorDB(
                    first_name=normalize_name(author_first_name),
                    last_name=normalize_name(author_last_name),
                )
                self.session.add(author)
                self.session.flush()

            values = self._column_values(data)
            values["isbn"] = normalize_isbn(data.isbn)
            db_book = BookDB(**values, author_id=author.author_id)
            self.session.add(db_book)
            self.session.commit()
            self.session.refresh(db_book)
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateError(f"Book violates a constraint: {e.orig!s}") from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise PersistenceError(f"Failed to create book: {e!s}") from e

        return self._to_response_model(db_book)

    def set_condition(self, book_id: int, condition: BookCondition) -> bool:
        return self._set_columns(book_id, "set book condition", condition=int(condition))

    def set_availability_status(self, book_id: int, status: AvailabilityStatus) -> bool:
        return self._set_columns(
            book_id, "set book availability", availability_status=int(status)
        )

    def get_all_summaries(self) -> list[BookSummary]:
        """All books with their author's full name, ordered by title."""
        query = (
            select(
                BookDB.book_id,
                BookDB.title,
                BookDB.genre,
                BookDB.isbn,
                (AuthorDB.first_name + " " + AuthorDB.last_name).label("author_name"),
                BookDB.condition,
                BookDB.availability_status,
                BookDB.language,
            )
            .join(AuthorDB, BookDB.author_id == AuthorDB.author_id)
            .order_by(BookDB.title, BookDB.book_id)
        )
        rows = safe_query(
            self.session, lambda s: s.execute(query).all(), "Failed to list books"
        )
        return [BookSummary.model_validate(dict(row._mapping)) for row in rows]
