"""
Author model for the Library System API.

Authors are never created directly through the API: a book insert looks the
author up by first and last name and adds the row when it is missing.
"""

from pydantic import BaseModel, ConfigDict, Field


class Author(BaseModel):
    """Represents an author of one or more books."""

    author_id: int = Field(
        default=-1,
        description="Store-assigned identifier (-1 before persistence)",
    )

    first_name: str = Field(
        ...,
        description="Author's first name",
        max_length=100,
        examples=["Frank", "Ursula"],
    )

    last_name: str = Field(
        ...,
        description="Author's last name",
        max_length=100,
        examples=["Herbert", "Le Guin"],
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {"author_id": 3, "first_name": "Frank", "last_name": "Herbert"}
        },
    )
