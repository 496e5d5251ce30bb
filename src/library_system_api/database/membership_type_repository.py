"""Membership type repository implementation for the Library System API."""

from ..models.membership_type import MembershipType as MembershipTypeModel
from .repository import BaseRepository
from .schema import MembershipType as MembershipTypeDB


class MembershipTypeRepository(BaseRepository[MembershipTypeDB, MembershipTypeModel]):
    """Read access to membership plans; plans are managed by tooling."""

    @property
    def model_class(self):
        return MembershipTypeDB

    @property
    def response_schema(self):
        return MembershipTypeModel

    @property
    def id_field(self) -> str:
        return "membership_type_id"
