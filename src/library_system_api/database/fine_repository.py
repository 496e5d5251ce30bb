"""
Fine repository implementation for the Library System API.

Fines are created against a loan and settled later. Settling stamps
``paid_at``; reopening a fine clears it again.
"""

from datetime import datetime

from sqlalchemy import func, select, update

from ..models.fine import Fine as FineModel
from .repository import BaseRepository
from .schema import Fine as FineDB
from .session import safe_commit, safe_query


class FineRepository(BaseRepository[FineDB, FineModel]):
    """Repository for fine data access."""

    @property
    def model_class(self):
        return FineDB

    @property
    def response_schema(self):
        return FineModel

    @property
    def id_field(self) -> str:
        return "fine_id"

    def create_fine(self, data: FineModel) -> FineModel:
        """
        Insert a fine. A fine created as paid is stamped with ``paid_at``; an
        unpaid one never carries it.

        Raises:
            DuplicateError: If the member or loan does not exist
            PersistenceError: On other database errors
        """
        paid_at = (data.paid_at or datetime.now()) if data.is_paid else None
        return self.create(data.model_copy(update={"paid_at": paid_at}))

    def update_payment_status(self, fine_id: int, is_paid: bool) -> bool:
        """Mark a fine paid or unpaid. Returns False if the fine does not exist."""
        return self._set_columns(
            fine_id,
            "update fine payment status",
            is_paid=is_paid,
            paid_at=datetime.now() if is_paid else None,
        )

    def pay(self, fine_id: int) -> bool:
        """
        Settle an outstanding fine.

        Returns:
            False if the fine does not exist or is already paid
        """
        statement = (
            update(FineDB)
            .where(FineDB.fine_id == fine_id, FineDB.is_paid.is_(False))
            .values(is_paid=True, paid_at=datetime.now())
            .execution_options(synchronize_session=False)
        )
        result = safe_query(self.session, lambda s: s.execute(statement), "Failed to pay fine")
        safe_commit(self.session, "pay fine")
        return result.rowcount > 0

    def get_unpaid_total(self, member_id: int) -> float:
        """Sum of the member's unpaid fines; 0.0 when there are none."""
        query = select(func.coalesce(func.sum(FineDB.fine_amount), 0.0)).where(
            FineDB.member_id == member_id, FineDB.is_paid.is_(False)
        )
        total = safe_query(
            self.session, lambda s: s.execute(query).scalar(), "Failed to total unpaid fines"
        )
        return float(total)
