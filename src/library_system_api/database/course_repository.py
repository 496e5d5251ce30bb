"""
Course repository implementation for the Library System API.

Enrollment is capacity-checked inside the insert itself: the association row
is written by ``INSERT ... SELECT`` guarded by the current head count, so two
concurrent enrollments cannot both take the last seat on a store that
serializes writes.
"""

from datetime import date

from sqlalchemy import func, insert, literal, select
from sqlalchemy.exc import IntegrityError

from ..models.course import Course as CourseModel
from ..models.course import CourseSummary
from ..models.member import CourseMember
from .member_repository import member_full_name
from .repository import BaseRepository
from .schema import Course as CourseDB
from .schema import CourseEnrollment as EnrollmentDB
from .schema import Member as MemberDB
from .session import safe_commit, safe_query


class CourseRepository(BaseRepository[CourseDB, CourseModel]):
    """Repository for course data access."""

    @property
    def model_class(self):
        return CourseDB

    @property
    def response_schema(self):
        return CourseModel

    @property
    def id_field(self) -> str:
        return "course_id"

    def enroll_member(self, member_id: int, course_id: int) -> bool:
        """
        Enroll a member in a course if a seat is free.

        Returns:
            True if the member was enrolled; False if the course is full,
            the member is already enrolled, or either id is unknown
        """
        enrolled = (
            select(func.count())
            .select_from(EnrollmentDB)
            .where(EnrollmentDB.course_id == course_id)
            .scalar_subquery()
        )
        seat_available = select(
            literal(course_id), literal(member_id), literal(date.today())
        ).where(CourseDB.course_id == course_id, enrolled < CourseDB.max_participants)

        statement = insert(EnrollmentDB.__table__).from_select(
            ["course_id", "member_id", "enrollment_date"], seat_available
        )

        try:
            result = self.session.execute(statement)
        except IntegrityError:
            self.session.rollback()
            return False

        if result.rowcount == 0:
            self.session.rollback()
            return False

        safe_commit(self.session, "enroll member in course")
        return True

    def get_members(self, course_id: int) -> list[CourseMember]:
        """Members enrolled in a course, ordered by enrollment date."""
        query = (
            select(
                MemberDB.member_id,
                member_full_name().label("full_name"),
                MemberDB.phone,
                MemberDB.email,
                EnrollmentDB.enrollment_date,
            )
            .join(EnrollmentDB, EnrollmentDB.member_id == MemberDB.member_id)
            .where(EnrollmentDB.course_id == course_id)
            .order_by(EnrollmentDB.enrollment_date, MemberDB.member_id)
        )
        rows = safe_query(
            self.session, lambda s: s.execute(query).all(), "Failed to list course members"
        )
        return [CourseMember.model_validate(dict(row._mapping)) for row in rows]

    def get_all_summaries(self) -> list[CourseSummary]:
        """All courses with their enrolled head count, ordered by start date."""
        enrolled = (
            select(func.count())
            .select_from(EnrollmentDB)
            .where(EnrollmentDB.course_id == CourseDB.course_id)
            .correlate(CourseDB)
            .scalar_subquery()
        )
        query = select(
            CourseDB.course_id,
            CourseDB.course_name,
            (CourseDB.tutor_first_name + " " + CourseDB.tutor_last_name).label("tutor_name"),
            CourseDB.start_date,
            CourseDB.end_date,
            CourseDB.max_participants,
            enrolled.label("enrolled_count"),
        ).order_by(CourseDB.start_date, CourseDB.course_id)
        rows = safe_query(
            self.session, lambda s: s.execute(query).all(), "Failed to list courses"
        )
        return [CourseSummary.model_validate(dict(row._mapping)) for row in rows]
