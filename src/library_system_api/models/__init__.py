"""
Library System API models.

Pydantic models for every entity the API exposes. Each entity that has a list
endpoint carries two independent shapes: the full record and a summary used
for listings.
"""

from .author import Author
from .book import AvailabilityStatus, Book, BookCondition, BookSummary
from .course import Course, CourseSummary
from .fine import Fine
from .loan import Loan, LoanSummary
from .member import CourseMember, Member, MemberSummary
from .membership_type import MembershipType
from .user import User, UserCreate, UserRole, UserSummary

__all__ = [
    "Author",
    "AvailabilityStatus",
    "Book",
    "BookCondition",
    "BookSummary",
    "Course",
    "CourseMember",
    "CourseSummary",
    "Fine",
    "Loan",
    "LoanSummary",
    "Member",
    "MemberSummary",
    "MembershipType",
    "User",
    "UserCreate",
    "UserRole",
    "UserSummary",
]
