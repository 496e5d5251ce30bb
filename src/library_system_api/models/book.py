"""
Book models for the Library System API.

A book is exposed in two shapes:
- ``Book``: the full record returned by ``GET /Books/{id}`` and accepted by ``POST /Books``
- ``BookSummary``: the list projection returned by ``GET /Books/All``

The two shapes are declared independently so either can evolve without
dragging the other along.
"""

import enum
from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class BookCondition(enum.IntEnum):
    """Physical state of a copy."""

    GOOD = 1
    DAMAGED = 2


class AvailabilityStatus(enum.IntEnum):
    """Circulation state of a copy."""

    AVAILABLE = 1
    BORROWED = 2
    RESERVED = 3


class Book(BaseModel):
    """
    Represents a book in the library catalog.

    ``book_id`` is assigned by the store; callers submitting a new book leave
    it at ``-1``.
    """

    book_id: int = Field(
        default=-1,
        description="Store-assigned identifier (-1 before persistence)",
        examples=[1, 42],
    )

    title: str = Field(
        default="",
        description="The title of the book",
        max_length=500,
        examples=["Dune", "The Left Hand of Darkness"],
    )

    genre: str = Field(
        default="",
        description="Literary genre or category of the book",
        max_length=100,
        examples=["Science Fiction", "Biography"],
    )

    isbn: str = Field(
        default="",
        description="International Standard Book Number (10 or 13 digits)",
        max_length=17,
        examples=["0441013597", "978-0-441-01359-3"],
    )

    condition: BookCondition = Field(
        default=BookCondition.GOOD,
        description="1 = Good, 2 = Damaged",
    )

    publication_date: date = Field(
        ...,
        description="Date the edition was published",
        examples=["1965-08-01"],
    )

    availability_status: AvailabilityStatus = Field(
        default=AvailabilityStatus.AVAILABLE,
        description="1 = Available, 2 = Borrowed, 3 = Reserved",
    )

    language: str = Field(
        default="",
        description="Language the edition is written in",
        max_length=50,
        examples=["English", "Arabic"],
    )

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "book_id": -1,
                "title": "Dune",
                "genre": "Science Fiction",
                "isbn": "0441013597",
                "condition": 1,
                "publication_date": "1965-08-01",
                "availability_status": 1,
                "language": "English",
            }
        },
    )


class BookSummary(BaseModel):
    """List projection of a book, joined with its author's name."""

    book_id: int
    title: str
    genre: str
    isbn: str
    author_name: str
    condition: BookCondition
    availability_status: AvailabilityStatus
    language: str

    model_config = ConfigDict(from_attributes=True)
