"""
Member repository implementation for the Library System API.

This repository manages library members and provides:

1. **Member Management**: create, full update, lookup
2. **Membership State**: cancel/uncancel and renewal by plan duration
3. **Circulation Status**: number of books a member currently holds
4. **Listing**: the ``MemberSummary`` projection with plan names
"""

import logging
from datetime import date, timedelta

from sqlalchemy import func, select, update

from ..models.member import Member as MemberModel
from ..models.member import MemberSummary
from .repository import BaseRepository, PersistenceError
from .schema import Loan as LoanDB
from .schema import Member as MemberDB
from .schema import MembershipType as MembershipTypeDB
from .session import safe_commit, safe_query

logger = logging.getLogger(__name__)

RENEWAL_ATTEMPTS = 3


def member_full_name():
    """SQL expression for a member's display name (third name optional)."""
    return (
        MemberDB.first_name
        + " "
        + MemberDB.second_name
        + func.coalesce(" " + MemberDB.third_name, "")
        + " "
        + MemberDB.last_name
    )


def renewed_expiry(current_expiry: date, duration_days: int, today: date | None = None) -> date:
    """
    Expiry date after one renewal.

    The new term starts from whichever is later, the current expiry or today,
    so renewing a lapsed membership does not back-date it.
    """
    today = today or date.today()
    return max(current_expiry, today) + timedelta(days=duration_days)


class MemberRepository(BaseRepository[MemberDB, MemberModel]):
    """Repository for member data access."""

    @property
    def model_class(self):
        return MemberDB

    @property
    def response_schema(self):
        return MemberModel

    @property
    def id_field(self) -> str:
        return "member_id"

    def set_cancelled(self, member_id: int, is_cancelled: bool) -> bool:
        """Flag or unflag a membership as cancelled."""
        return self._set_columns(
            member_id, "update membership cancellation", is_cancelled=is_cancelled
        )

    def renew_membership(self, member_id: int) -> bool:
        """
        Extend a member's expiry date by one term of their membership type.

        The UPDATE only applies while the expiry date is still the one the new
        term was computed from; a renewal that loses that race re-reads and
        tries again, so concurrent renewals each add a full term.

        Returns:
            True if renewed, False if the member does not exist

        Raises:
            PersistenceError: If the expiry date kept changing underneath
        """
        query = (
            select(MemberDB.expiry_date, MembershipTypeDB.duration_days)
            .join(
                MembershipTypeDB,
                MemberDB.membership_type_id == MembershipTypeDB.membership_type_id,
            )
            .where(MemberDB.member_id == member_id)
        )

        for _ in range(RENEWAL_ATTEMPTS):
            row = safe_query(
                self.session,
                lambda s: s.execute(query).one_or_none(),
                "Failed to get member for renewal",
            )
            if row is None:
                return False

            current_expiry, duration_days = row
            statement = (
                update(MemberDB)
                .where(MemberDB.member_id == member_id, MemberDB.expiry_date == current_expiry)
                .values(expiry_date=renewed_expiry(current_expiry, duration_days))
                .execution_options(synchronize_session=False)
            )
            result = safe_query(
                self.session, lambda s: s.execute(statement), "Failed to renew membership"
            )
            safe_commit(self.session, "renew membership")
            if result.rowcount > 0:
                return True
            logger.info("Expiry of member %s changed during renewal, retrying", member_id)

        raise PersistenceError(f"Could not renew membership of member {member_id}")

    def count_borrowed_books(self, member_id: int) -> int | None:
        """
        Number of loans the member has not returned yet.

        Returns:
            The count, or None if the member does not exist
        """
        if not self.exists(member_id):
            return None

        query = (
            select(func.count())
            .select_from(LoanDB)
            .where(LoanDB.member_id == member_id, LoanDB.return_date.is_(None))
        )
        return safe_query(
            self.session, lambda s: s.execute(query).scalar(), "Failed to count borrowed books"
        )

    def get_all_summaries(self) -> list[MemberSummary]:
        """All members with their plan name, ordered by id."""
        query = (
            select(
                MemberDB.member_id,
                member_full_name().label("full_name"),
                MemberDB.phone,
                MemberDB.email,
                MembershipTypeDB.name.label("membership_type_name"),
                MemberDB.expiry_date,
                MemberDB.is_cancelled,
            )
            .join(
                MembershipTypeDB,
                MemberDB.membership_type_id == MembershipTypeDB.membership_type_id,
            )
            .order_by(MemberDB.member_id)
        )
        rows = safe_query(
            self.session, lambda s: s.execute(query).all(), "Failed to list members"
        )
        return [MemberSummary.model_validate(dict(row._mapping)) for row in rows]
