"""
Loan repository implementation for the Library System API.

This repository manages circulation records:

1. **Loans**: creating a loan with the configured loan period
2. **Returns**: stamping the return date, once
3. **Extensions**: moving the due date of an outstanding, not-yet-overdue loan
4. **Listing**: the ``LoanSummary`` projection with book titles and member names

Note: all dates use the server's local time, matching the library's opening
hours and due dates.
"""

import logging
from datetime import date, datetime, timedelta

from sqlalchemy import desc, select, update

from ..models.loan import Loan as LoanModel
from ..models.loan import LoanSummary
from .member_repository import member_full_name
from .repository import BaseRepository
from .schema import Book as BookDB
from .schema import Loan as LoanDB
from .schema import Member as MemberDB
from .session import safe_commit, safe_query

logger = logging.getLogger(__name__)


def can_extend(loan: LoanModel, today: date | None = None) -> bool:
    """A loan can be extended while it is outstanding and not yet overdue."""
    today = today or date.today()
    return loan.return_date is None and loan.due_date >= today


class LoanRepository(BaseRepository[LoanDB, LoanModel]):
    """Repository for loan data access."""

    @property
    def model_class(self):
        return LoanDB

    @property
    def response_schema(self):
        return LoanModel

    @property
    def id_field(self) -> str:
        return "loan_id"

    def create_loan(
        self, book_id: int, member_id: int, created_by_user_id: int, loan_period_days: int
    ) -> LoanModel:
        """
        Register a new loan starting now.

        Args:
            book_id: Borrowed book
            member_id: Borrowing member
            created_by_user_id: Staff user registering the loan
            loan_period_days: Days until the loan is due

        Raises:
            DuplicateError: If a referenced book, member or user does not exist
            PersistenceError: On other database errors
        """
        now = datetime.now()
        loan = LoanModel(
            book_id=book_id,
            member_id=member_id,
            borrow_date=now,
            due_date=now.date() + timedelta(days=loan_period_days),
            created_by_user_id=created_by_user_id,
        )
        return self.create(loan)

    def get_latest_by_member_id(self, member_id: int) -> LoanModel | None:
        """The member's most recent loan, or None if they never borrowed."""
        query = (
            select(LoanDB)
            .where(LoanDB.member_id == member_id)
            .order_by(desc(LoanDB.borrow_date), desc(LoanDB.loan_id))
            .limit(1)
            .execution_options(populate_existing=True)
        )
        result = safe_query(
            self.session,
            lambda s: s.execute(query).scalar_one_or_none(),
            "Failed to get loan by member ID",
        )
        if result is None:
            return None
        return self._to_response_model(result)

    def can_return(self, loan_id: int) -> bool:
        """True only for an existing loan that has not been returned."""
        loan = self.get_by_id(loan_id)
        return loan is not None and loan.return_date is None

    def can_extend(self, loan_id: int) -> bool:
        loan = self.get_by_id(loan_id)
        return loan is not None and can_extend(loan)

    def return_loan(self, loan_id: int) -> bool:
        """
        Stamp the return date on an outstanding loan.

        The guard on ``return_date IS NULL`` lives in the UPDATE itself, so a
        second return of the same loan changes nothing and reports False.
        """
        statement = (
            update(LoanDB)
            .where(LoanDB.loan_id == loan_id, LoanDB.return_date.is_(None))
            .values(return_date=datetime.now())
            .execution_options(synchronize_session=False)
        )
        result = safe_query(self.session, lambda s: s.execute(statement), "Failed to return loan")
        safe_commit(self.session, "return loan")
        if result.rowcount == 0:
            logger.info("Loan %s was not returned: missing or already returned", loan_id)
            return False
        return True

    def extend_due_date(self, loan_id: int, new_due_date: date) -> bool:
        """
        Move the due date of an extendable loan to a later date.

        Returns:
            False if the loan does not exist, is returned, is overdue, or the
            new date is not after the current due date
        """
        today = date.today()
        statement = (
            update(LoanDB)
            .where(
                LoanDB.loan_id == loan_id,
                LoanDB.return_date.is_(None),
                LoanDB.due_date >= today,
                LoanDB.due_date < new_due_date,
            )
            .values(due_date=new_due_date)
            .execution_options(synchronize_session=False)
        )
        result = safe_query(
            self.session, lambda s: s.execute(statement), "Failed to extend loan"
        )
        safe_commit(self.session, "extend loan due date")
        return result.rowcount > 0

    def get_all_summaries(self) -> list[LoanSummary]:
        """All loans with book title and member name, newest first."""
        query = (
            select(
                LoanDB.loan_id,
                BookDB.title.label("book_title"),
                member_full_name().label("member_name"),
                LoanDB.borrow_date,
                LoanDB.due_date,
                LoanDB.return_date,
            )
            .join(BookDB, LoanDB.book_id == BookDB.book_id)
            .join(MemberDB, LoanDB.member_id == MemberDB.member_id)
            .order_by(desc(LoanDB.borrow_date), desc(LoanDB.loan_id))
        )
        rows = safe_query(
            self.session, lambda s: s.execute(query).all(), "Failed to list loans"
        )
        return [LoanSummary.model_validate(dict(row._mapping)) for row in rows]
