"""
Input validation rules for the Library System API.

Every rule is a pure predicate: it looks only at the values it is given and
returns ``True`` when they are structurally acceptable. Request handlers call
these before any create/update reaches a repository, and answer 400 when one
returns ``False``.
"""

from datetime import date

from .models.book import AvailabilityStatus, Book, BookCondition
from .models.course import Course
from .models.fine import Fine
from .models.member import Member
from .models.user import UserCreate, UserRole


def is_valid_id(value: int) -> bool:
    """Identifiers and foreign keys are non-negative."""
    return value >= 0


def has_text(value: str | None) -> bool:
    """Required strings must contain something other than whitespace."""
    return value is not None and value.strip() != ""


def is_valid_condition(value: int) -> bool:
    return value in {c.value for c in BookCondition}


def is_valid_availability_status(value: int) -> bool:
    return value in {s.value for s in AvailabilityStatus}


def is_valid_isbn(isbn: str) -> bool:
    """ISBN-10 or ISBN-13, hyphens and spaces allowed; ISBN-10 may end in X."""
    digits = isbn.replace("-", "").replace(" ", "")
    if len(digits) == 13:
        return digits.isdigit()
    if len(digits) == 10:
        return digits[:9].isdigit() and (digits[9].isdigit() or digits[9] in "xX")
    return False


def is_valid_book(book: Book) -> bool:
    return (
        has_text(book.title)
        and has_text(book.genre)
        and has_text(book.language)
        and has_text(book.isbn)
        and is_valid_isbn(book.isbn)
        and is_valid_condition(book.condition)
        and is_valid_availability_status(book.availability_status)
        and book.publication_date <= date.today()
    )


def is_valid_author_name(first_name: str | None, last_name: str | None) -> bool:
    return has_text(first_name) and has_text(last_name)


def is_valid_member(member: Member) -> bool:
    return (
        has_text(member.first_name)
        and has_text(member.second_name)
        and has_text(member.last_name)
        and has_text(member.address)
        and has_text(member.phone)
        and member.date_of_birth < date.today()
        and is_valid_id(member.membership_type_id)
        and member.expiry_date >= member.start_date
    )


def is_valid_course(course: Course) -> bool:
    return (
        has_text(course.course_name)
        and has_text(course.tutor_first_name)
        and has_text(course.tutor_last_name)
        and course.enrollment_fees >= 0
        and course.max_participants > 0
        and course.end_date >= course.start_date
    )


def is_valid_fine(fine: Fine) -> bool:
    return is_valid_id(fine.member_id) and is_valid_id(fine.loan_id) and fine.fine_amount > 0


def is_valid_password(password: str | None) -> bool:
    """Non-blank and within the 72 bytes bcrypt accepts."""
    return has_text(password) and len(password.encode("utf-8")) <= 72


def is_valid_user(user: UserCreate) -> bool:
    return (
        has_text(user.username)
        and is_valid_password(user.password)
        and user.role in {r.value for r in UserRole}
        and user.permissions >= -1
    )
