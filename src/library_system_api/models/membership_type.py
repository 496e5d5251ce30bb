"""Membership type model for the Library System API."""

from pydantic import BaseModel, ConfigDict, Field


class MembershipType(BaseModel):
    """A membership plan: how long a term lasts and what it costs."""

    membership_type_id: int
    name: str = Field(..., examples=["Monthly", "Annual"])
    duration_days: int = Field(..., description="Length of one term in days", gt=0)
    fees: float = Field(..., description="Price of one term", ge=0)

    model_config = ConfigDict(from_attributes=True)
