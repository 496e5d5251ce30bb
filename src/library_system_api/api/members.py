"""
Members endpoints.

Members are never deleted; a membership is cancelled with
``PATCH /{member_id}/{is_cancelled}`` and extended with ``RenewMembership``.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status

from .. import validation
from ..database import MemberRepository, RepositoryException
from ..models import Member, MemberSummary
from .dependencies import get_member_repository
from .errors import bad_request, not_found, server_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/Members", tags=["Members"])


@router.get("/All", response_model=list[MemberSummary])
def get_all_members(repo: MemberRepository = Depends(get_member_repository)):
    members = repo.get_all_summaries()
    if not members:
        raise not_found("Members are not found")
    return members


@router.get("/GetNumberOfBorrowedBook/{member_id}", response_model=int)
def get_number_of_borrowed_books(
    member_id: int, repo: MemberRepository = Depends(get_member_repository)
):
    """Loans the member has not returned yet."""
    if not validation.is_valid_id(member_id):
        raise bad_request()

    count = repo.count_borrowed_books(member_id)
    if count is None:
        raise not_found(f"Member with id {member_id} is not found")
    return count


@router.patch("/RenewMembership/{member_id}", response_model=bool)
def renew_membership(member_id: int, repo: MemberRepository = Depends(get_member_repository)):
    if not validation.is_valid_id(member_id):
        raise bad_request()

    renewed = repo.renew_membership(member_id)
    if renewed:
        logger.info("Renewed membership of member %s", member_id)
    return renewed


@router.get("/{member_id}", response_model=Member, name="get_member")
def get_member(member_id: int, repo: MemberRepository = Depends(get_member_repository)):
    if not validation.is_valid_id(member_id):
        raise bad_request()

    member = repo.get_by_id(member_id)
    if member is None:
        raise not_found(f"Member with id {member_id} is not found")
    return member


@router.post("", response_model=Member, status_code=status.HTTP_201_CREATED)
def add_member(
    member: Member,
    request: Request,
    response: Response,
    repo: MemberRepository = Depends(get_member_repository),
):
    if not validation.is_valid_member(member):
        raise bad_request()

    try:
        created = repo.create(member)
    except RepositoryException:
        return server_error("An error occurred while adding the new member.")

    logger.info("Added member %s", created.member_id)
    response.headers["Location"] = str(request.url_for("get_member", member_id=created.member_id))
    return created


@router.put("/{member_id}", response_model=Member)
def update_member(
    member_id: int, member: Member, repo: MemberRepository = Depends(get_member_repository)
):
    """Replace every field of a member with the submitted values."""
    if not validation.is_valid_id(member_id) or not validation.is_valid_member(member):
        raise bad_request()
    if not repo.exists(member_id):
        raise not_found(f"Member with id {member_id} is not found")

    try:
        repo.update(member_id, member)
        updated = repo.get_by_id(member_id)
    except RepositoryException:
        return server_error("An error occurred while updating the member.")

    logger.info("Updated member %s", member_id)
    return updated


@router.patch("/{member_id}/{is_cancelled}", response_model=bool)
def update_cancelled(
    member_id: int, is_cancelled: bool, repo: MemberRepository = Depends(get_member_repository)
):
    if not validation.is_valid_id(member_id):
        raise bad_request()
    return repo.set_cancelled(member_id, is_cancelled)
