"""
Member models for the Library System API.

Members hold a membership of a given ``MembershipType`` that runs from
``start_date`` to ``expiry_date``; renewing pushes the expiry forward by the
type's duration. Cancellation is a flag, members are never deleted.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class Member(BaseModel):
    """Full member record."""

    member_id: int = Field(
        default=-1,
        description="Store-assigned identifier (-1 before persistence)",
    )

    first_name: str = Field(default="", max_length=50, examples=["Layla"])
    second_name: str = Field(default="", max_length=50, examples=["Omar"])
    third_name: str | None = Field(default=None, max_length=50)
    last_name: str = Field(default="", max_length=50, examples=["Haddad"])

    date_of_birth: date = Field(..., examples=["1994-03-12"])

    address: str = Field(default="", max_length=200)
    phone: str = Field(default="", max_length=20, examples=["+962-7-9555-0101"])
    email: str | None = Field(default=None, max_length=100)
    image_path: str | None = Field(default=None, max_length=250)

    membership_type_id: int = Field(
        ...,
        description="Identifier of the membership plan",
    )

    start_date: date = Field(..., description="First day of the current membership")
    expiry_date: date = Field(..., description="Last day of the current membership")

    is_cancelled: bool = Field(default=False)

    @property
    def full_name(self) -> str:
        parts = [self.first_name, self.second_name, self.third_name, self.last_name]
        return " ".join(part for part in parts if part)

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "member_id": -1,
                "first_name": "Layla",
                "second_name": "Omar",
                "third_name": None,
                "last_name": "Haddad",
                "date_of_birth": "1994-03-12",
                "address": "12 Rainbow St, Amman",
                "phone": "+962-7-9555-0101",
                "email": "layla@example.com",
                "image_path": None,
                "membership_type_id": 1,
                "start_date": "2026-01-01",
                "expiry_date": "2026-01-31",
                "is_cancelled": False,
            }
        },
    )


class MemberSummary(BaseModel):
    """List projection of a member."""

    member_id: int
    full_name: str
    phone: str
    email: str | None
    membership_type_name: str
    expiry_date: date
    is_cancelled: bool

    model_config = ConfigDict(from_attributes=True)


class CourseMember(BaseModel):
    """A member as listed on a course roster."""

    member_id: int
    full_name: str
    phone: str
    email: str | None
    enrollment_date: date

    model_config = ConfigDict(from_attributes=True)
