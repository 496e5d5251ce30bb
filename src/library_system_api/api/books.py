"""
Books endpoints.

Literal path segments (``All``, ``Book``, ``UpdateCondition`` ...) are
registered before the parameterised routes they would otherwise collide with.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status

from .. import validation
from ..database import BookRepository, RepositoryException
from ..models import Book, BookSummary
from .dependencies import get_book_repository
from .errors import bad_request, not_found, server_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/Books", tags=["Books"])


@router.get("/All", response_model=list[BookSummary])
def get_all_books(repo: BookRepository = Depends(get_book_repository)):
    books = repo.get_all_summaries()
    if not books:
        raise not_found("Books are not found")
    return books


@router.get("/Book/{title}", response_model=Book)
def get_book_by_title(title: str, repo: BookRepository = Depends(get_book_repository)):
    if not validation.has_text(title):
        raise bad_request()

    book = repo.get_by_title(title)
    if book is None:
        raise not_found(f"Book with title {title} is not found")
    return book


@router.get("/DoesISBNExist/{isbn}", response_model=bool)
def does_isbn_exist(isbn: str, repo: BookRepository = Depends(get_book_repository)):
    if not validation.has_text(isbn):
        raise bad_request()
    return repo.isbn_exists(isbn)


@router.get("/AuthorID/{book_id}", response_model=int)
def get_author_id(book_id: int, repo: BookRepository = Depends(get_book_repository)):
    if not validation.is_valid_id(book_id):
        raise bad_request("ID is invalid")

    author_id = repo.get_author_id(book_id)
    if author_id is None:
        raise not_found(f"Book with id {book_id} is not found")
    return author_id


@router.get("/{book_id}", response_model=Book, name="get_book")
def get_book(book_id: int, repo: BookRepository = Depends(get_book_repository)):
    if not validation.is_valid_id(book_id):
        raise bad_request()

    book = repo.get_by_id(book_id)
    if book is None:
        raise not_found(f"Book with id {book_id} is not found")
    return book


@router.post("", response_model=Book, status_code=status.HTTP_201_CREATED)
def add_book(
    book: Book,
    request: Request,
    response: Response,
    author_first_name: str | None = None,
    author_last_name: str | None = None,
    repo: BookRepository = Depends(get_book_repository),
):
    """Add a book; its author is looked up by name and created when missing."""
    if not validation.is_valid_book(book) or not validation.is_valid_author_name(
        author_first_name, author_last_name
    ):
        raise bad_request()

    try:
        created = repo.create_with_author(book, author_first_name, author_last_name)
    except RepositoryException:
        return server_error("An error occurred while adding the new book.")

    logger.info("Added book %s (%s)", created.book_id, created.title)
    response.headers["Location"] = str(request.url_for("get_book", book_id=created.book_id))
    return created


@router.patch("/UpdateCondition/{book_id}/{condition}", response_model=bool)
def set_condition(
    book_id: int, condition: int, repo: BookRepository = Depends(get_book_repository)
):
    """Set the condition: 1 = Good, 2 = Damaged."""
    if not validation.is_valid_id(book_id):
        raise bad_request("ID is invalid")
    if not validation.is_valid_condition(condition):
        raise bad_request("Input is invalid, condition must be either 1 or 2.")
    if not repo.exists(book_id):
        raise not_found(f"Book with id {book_id} is not found")

    return repo.set_condition(book_id, condition)


@router.patch("/{book_id}/{availability_status}", response_model=bool)
def set_availability_status(
    book_id: int,
    availability_status: int,
    repo: BookRepository = Depends(get_book_repository),
):
    """Set the availability: 1 = Available, 2 = Borrowed, 3 = Reserved."""
    if not validation.is_valid_id(book_id):
        raise bad_request("ID is invalid")
    if not validation.is_valid_availability_status(availability_status):
        raise bad_request("Input is invalid, availability status must be either 1, 2, or 3.")
    if not repo.exists(book_id):
        raise not_found(f"Book with id {book_id} is not found")

    return repo.set_availability_status(book_id, availability_status)


@router.delete("/{book_id}")
def delete_book(book_id: int, repo: BookRepository = Depends(get_book_repository)):
    if not validation.is_valid_id(book_id):
        raise bad_request("ID is invalid")

    if not repo.delete(book_id):
        raise not_found(f"Book with id {book_id} is not found")

    logger.info("Deleted book %s", book_id)
    return "Book is deleted successfully"
