"""Fines endpoints."""

import logging

from fastapi import APIRouter, Depends

from .. import validation
from ..database import FineRepository, RepositoryException
from ..models import Fine
from .dependencies import get_fine_repository
from .errors import bad_request, server_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/Fines", tags=["Fines"])


@router.post("", response_model=Fine)
def add_fine(fine: Fine, repo: FineRepository = Depends(get_fine_repository)):
    """Add a fine to a loan that was not returned by its due date."""
    if not validation.is_valid_fine(fine):
        raise bad_request()

    try:
        created = repo.create_fine(fine)
    except RepositoryException:
        return server_error("An error occurred while adding the new fine.")

    logger.info("Fine %s of %.2f for loan %s", created.fine_id, created.fine_amount, fine.loan_id)
    return created


@router.get("/All", response_model=list[Fine])
def get_all_fines(repo: FineRepository = Depends(get_fine_repository)):
    return repo.get_all()


@router.patch("/PaymentStatus/{fine_id}/{is_paid}", response_model=bool)
def update_payment_status(
    fine_id: int, is_paid: bool, repo: FineRepository = Depends(get_fine_repository)
):
    if not validation.is_valid_id(fine_id):
        raise bad_request()
    return repo.update_payment_status(fine_id, is_paid)


@router.patch("/Pay/{fine_id}", response_model=bool)
def pay_fine(fine_id: int, repo: FineRepository = Depends(get_fine_repository)):
    """Settle a fine; ``false`` if it is unknown or already paid."""
    if not validation.is_valid_id(fine_id):
        raise bad_request()

    paid = repo.pay(fine_id)
    if paid:
        logger.info("Fine %s paid", fine_id)
    return paid


@router.get("/UnpaidFees/{member_id}", response_model=float)
def get_member_unpaid_fees(member_id: int, repo: FineRepository = Depends(get_fine_repository)):
    """Total of the member's unpaid fines, 0 when there are none."""
    if not validation.is_valid_id(member_id):
        raise bad_request()
    return repo.get_unpaid_total(member_id)
