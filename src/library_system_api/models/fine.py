"""Fine model for the Library System API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Fine(BaseModel):
    """A monetary penalty tied to a loan and the member who holds it."""

    fine_id: int = Field(
        default=-1,
        description="Store-assigned identifier (-1 before persistence)",
    )

    member_id: int
    loan_id: int

    fine_amount: float = Field(..., description="Amount owed", examples=[2.5, 10.0])
    is_paid: bool = Field(default=False)
    paid_at: datetime | None = Field(default=None, description="When the fine was settled")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "fine_id": -1,
                "member_id": 4,
                "loan_id": 17,
                "fine_amount": 3.5,
                "is_paid": False,
            }
        },
    )
