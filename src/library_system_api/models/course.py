"""
Course models for the Library System API.

Courses are tutored sessions members can enrol in, up to ``max_participants``.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class Course(BaseModel):
    """Full course record."""

    course_id: int = Field(
        default=-1,
        description="Store-assigned identifier (-1 before persistence)",
    )

    course_name: str = Field(default="", max_length=100, examples=["Intro to Archiving"])
    tutor_first_name: str = Field(default="", max_length=50)
    tutor_last_name: str = Field(default="", max_length=50)

    enrollment_fees: float = Field(default=0.0, description="Fee charged per participant")
    max_participants: int = Field(default=0, description="Seats available on the course")

    start_date: date
    end_date: date

    notes: str | None = Field(default=None, max_length=500)

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "course_id": -1,
                "course_name": "Intro to Archiving",
                "tutor_first_name": "Sami",
                "tutor_last_name": "Nasser",
                "enrollment_fees": 25.0,
                "max_participants": 12,
                "start_date": "2026-11-02",
                "end_date": "2026-11-30",
                "notes": "Bring a notebook",
            }
        },
    )


class CourseSummary(BaseModel):
    """List projection of a course with its current head count."""

    course_id: int
    course_name: str
    tutor_name: str
    start_date: date
    end_date: date
    max_participants: int
    enrolled_count: int

    model_config = ConfigDict(from_attributes=True)
