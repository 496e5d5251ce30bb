"""
Loans endpoints.

A loan is registered with ``POST /Loans?book_id=..&member_id=..&created_by_user_id=..``;
its due date follows the configured loan period.
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, Request, Response, status

from .. import validation
from ..config import ApiConfig, get_config
from ..database import LoanRepository, RepositoryException
from ..models import Loan, LoanSummary
from .dependencies import get_loan_repository
from .errors import bad_request, not_found, server_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/Loans", tags=["Loans"])


@router.get("", response_model=list[LoanSummary])
def get_all_loans(repo: LoanRepository = Depends(get_loan_repository)):
    loans = repo.get_all_summaries()
    if not loans:
        raise not_found("Loans are not found")
    return loans


@router.post("", response_model=Loan, status_code=status.HTTP_201_CREATED)
def add_loan(
    book_id: int,
    member_id: int,
    created_by_user_id: int,
    request: Request,
    response: Response,
    repo: LoanRepository = Depends(get_loan_repository),
    config: ApiConfig = Depends(get_config),
):
    if not all(validation.is_valid_id(i) for i in (book_id, member_id, created_by_user_id)):
        raise bad_request()

    try:
        loan = repo.create_loan(book_id, member_id, created_by_user_id, config.loan_period_days)
    except RepositoryException:
        return server_error("An error occurred while adding the new loan.")

    logger.info("Loan %s: book %s to member %s", loan.loan_id, book_id, member_id)
    response.headers["Location"] = str(request.url_for("get_loan", loan_id=loan.loan_id))
    return loan


@router.get("/Loan/{member_id}", response_model=Loan)
def get_loan_by_member_id(member_id: int, repo: LoanRepository = Depends(get_loan_repository)):
    """The member's most recent loan."""
    if not validation.is_valid_id(member_id):
        raise bad_request()

    loan = repo.get_latest_by_member_id(member_id)
    if loan is None:
        raise not_found(f"Loan with member id {member_id} is not found")
    return loan


@router.patch("/Return/{loan_id}", response_model=bool)
def return_loan(loan_id: int, repo: LoanRepository = Depends(get_loan_repository)):
    """Returns ``false`` when the loan was already returned."""
    if not validation.is_valid_id(loan_id):
        raise bad_request()
    if not repo.exists(loan_id):
        raise not_found(f"Loan with id {loan_id} is not found")

    returned = repo.return_loan(loan_id)
    if returned:
        logger.info("Loan %s returned", loan_id)
    return returned


@router.get("/CanReturnBook/{loan_id}", response_model=bool)
def can_return_book(loan_id: int, repo: LoanRepository = Depends(get_loan_repository)):
    if not validation.is_valid_id(loan_id):
        raise bad_request()
    return repo.can_return(loan_id)


@router.get("/CanExtendLoan/{loan_id}", response_model=bool)
def can_extend_loan(loan_id: int, repo: LoanRepository = Depends(get_loan_repository)):
    if not validation.is_valid_id(loan_id):
        raise bad_request()
    return repo.can_extend(loan_id)


@router.patch("/ExtendDueDate/{loan_id}/{due_date}", response_model=bool)
def extend_due_date(
    loan_id: int, due_date: date, repo: LoanRepository = Depends(get_loan_repository)
):
    if not validation.is_valid_id(loan_id):
        raise bad_request()

    extended = repo.extend_due_date(loan_id, due_date)
    if extended:
        logger.info("Loan %s now due %s", loan_id, due_date)
    return extended


@router.get("/{loan_id}", response_model=Loan, name="get_loan")
def get_loan(loan_id: int, repo: LoanRepository = Depends(get_loan_repository)):
    if not validation.is_valid_id(loan_id):
        raise bad_request("Input is not valid")

    loan = repo.get_by_id(loan_id)
    if loan is None:
        raise not_found(f"Loan with id {loan_id} is not found")
    return loan
