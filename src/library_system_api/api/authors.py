"""Authors endpoints. Authors are created implicitly when books are added."""

from fastapi import APIRouter, Depends

from .. import validation
from ..database import AuthorRepository
from ..models import Author
from .dependencies import get_author_repository
from .errors import bad_request, not_found

router = APIRouter(prefix="/Authors", tags=["Authors"])


@router.get("/IsAuthorExists/{first_name}/{last_name}", response_model=bool)
def is_author_exists(
    first_name: str, last_name: str, repo: AuthorRepository = Depends(get_author_repository)
):
    if not validation.is_valid_author_name(first_name, last_name):
        raise bad_request()
    return repo.exists_by_name(first_name, last_name)


@router.get("/{book_id}", response_model=Author)
def get_author_by_book_id(book_id: int, repo: AuthorRepository = Depends(get_author_repository)):
    """Author of the given book."""
    if not validation.is_valid_id(book_id):
        raise bad_request("ID is invalid")

    author = repo.get_by_book_id(book_id)
    if author is None:
        raise not_found(f"Author with book id {book_id} is not found")
    return author


@router.get("/{first_name}/{last_name}", response_model=Author)
def get_author_by_name(
    first_name: str, last_name: str, repo: AuthorRepository = Depends(get_author_repository)
):
    if not validation.is_valid_author_name(first_name, last_name):
        raise bad_request()

    author = repo.get_by_name(first_name, last_name)
    if author is None:
        raise not_found(
            f"Author with first name {first_name} and last name {last_name} is not found"
        )
    return author
