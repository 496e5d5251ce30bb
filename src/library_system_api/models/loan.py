"""
Loan models for the Library System API.

A loan records a book borrowed by a member. ``return_date`` stays ``None``
while the book is out; it is never filled with a placeholder date.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class Loan(BaseModel):
    """Full loan record."""

    loan_id: int = Field(
        default=-1,
        description="Store-assigned identifier (-1 before persistence)",
    )

    book_id: int
    member_id: int

    borrow_date: datetime = Field(default_factory=datetime.now)
    due_date: date
    return_date: datetime | None = Field(
        default=None,
        description="When the book came back; absent while outstanding",
    )

    created_by_user_id: int = Field(..., description="User who registered the loan")

    @property
    def is_returned(self) -> bool:
        return self.return_date is not None

    @property
    def is_overdue(self) -> bool:
        return not self.is_returned and self.due_date < date.today()

    model_config = ConfigDict(from_attributes=True)


class LoanSummary(BaseModel):
    """List projection of a loan with book title and member name."""

    loan_id: int
    book_title: str
    member_name: str
    borrow_date: datetime
    due_date: date
    return_date: datetime | None

    model_config = ConfigDict(from_attributes=True)
