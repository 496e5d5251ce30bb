"""Membership types endpoints (read-only)."""

from fastapi import APIRouter, Depends

from .. import validation
from ..database import MembershipTypeRepository
from ..models import MembershipType
from .dependencies import get_membership_type_repository
from .errors import bad_request, not_found

router = APIRouter(prefix="/MembershipTypes", tags=["MembershipTypes"])


@router.get("/All", response_model=list[MembershipType])
def get_all_membership_types(
    repo: MembershipTypeRepository = Depends(get_membership_type_repository),
):
    membership_types = repo.get_all()
    if not membership_types:
        raise not_found("Membership types are not found")
    return membership_types


@router.get("/{membership_type_id}", response_model=MembershipType)
def get_membership_type(
    membership_type_id: int,
    repo: MembershipTypeRepository = Depends(get_membership_type_repository),
):
    if not validation.is_valid_id(membership_type_id):
        raise bad_request("Id is not valid")

    membership_type = repo.get_by_id(membership_type_id)
    if membership_type is None:
        raise not_found(f"Membership type with id {membership_type_id} is not found.")
    return membership_type
