"""
SQLAlchemy database schema for the Library System API.

Every table uses an integer surrogate key assigned by the store on insert.
Relationships are plain foreign keys resolved per query; the ORM classes do
not declare relationship collections, so no entity ever drags an in-memory
graph of other entities along with it.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class Author(Base):
    """Authors table - looked up by first and last name when books are added."""

    __tablename__ = "authors"

    author_id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)

    created_at = Column(DateTime, nullable=False, default=func.now())

    __table_args__ = (
        UniqueConstraint("first_name", "last_name", name="unique_author_name"),
        Index("idx_author_last_name", "last_name"),
    )


class Book(Base):
    """Books table - the catalog."""

    __tablename__ = "books"

    book_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(500), nullable=False)
    genre = Column(String(100), nullable=False)
    isbn = Column(String(17), nullable=False, unique=True)
    condition = Column(SmallInteger, nullable=False, default=1)
    publication_date = Column(Date, nullable=False)
    availability_status = Column(SmallInteger, nullable=False, default=1)
    language = Column(String(50), nullable=False)
    author_id = Column(Integer, ForeignKey("authors.author_id"), nullable=False)

    created_at = Column(DateTime, nullable=False, default=func.now())
    updated_at = Column(DateTime, nullable=False, default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("idx_book_title", "title"),
        Index("idx_book_author", "author_id"),
        CheckConstraint("condition IN (1, 2)", name="check_book_condition"),
        CheckConstraint("availability_status IN (1, 2, 3)", name="check_book_availability"),
    )


class MembershipType(Base):
    """Membership plans - read-only through the API, seeded by tooling."""

    __tablename__ = "membership_types"

    membership_type_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False, unique=True)
    duration_days = Column(Integer, nullable=False)
    fees = Column(Float, nullable=False, default=0.0)

    __table_args__ = (
        CheckConstraint("duration_days > 0", name="check_duration_positive"),
        CheckConstraint("fees >= 0", name="check_fees_non_negative"),
    )


class Member(Base):
    """Members table - library members and their current membership term."""

    __tablename__ = "members"

    member_id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(50), nullable=False)
    second_name = Column(String(50), nullable=False)
    third_name = Column(String(50), nullable=True)
    last_name = Column(String(50), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    address = Column(String(200), nullable=False)
    phone = Column(String(20), nullable=False)
    email = Column(String(100), nullable=True)
    image_path = Column(String(250), nullable=True)
    membership_type_id = Column(
        Integer, ForeignKey("membership_types.membership_type_id"), nullable=False
    )
    start_date = Column(Date, nullable=False)
    expiry_date = Column(Date, nullable=False)
    is_cancelled = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, nullable=False, default=func.now())
    updated_at = Column(DateTime, nullable=False, default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("idx_member_last_name", "last_name"),
        CheckConstraint("expiry_date >= start_date", name="check_member_term"),
    )


class Course(Base):
    """Courses table."""

    __tablename__ = "courses"

    course_id = Column(Integer, primary_key=True, autoincrement=True)
    course_name = Column(String(100), nullable=False)
    tutor_first_name = Column(String(50), nullable=False)
    tutor_last_name = Column(String(50), nullable=False)
    enrollment_fees = Column(Float, nullable=False, default=0.0)
    max_participants = Column(Integer, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    notes = Column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint("max_participants > 0", name="check_max_participants_positive"),
        CheckConstraint("enrollment_fees >= 0", name="check_enrollment_fees_non_negative"),
        CheckConstraint("end_date >= start_date", name="check_course_dates"),
    )


class CourseEnrollment(Base):
    """Member-course association rows."""

    __tablename__ = "course_enrollments"

    course_id = Column(Integer, ForeignKey("courses.course_id"), primary_key=True)
    member_id = Column(Integer, ForeignKey("members.member_id"), primary_key=True)
    enrollment_date = Column(Date, nullable=False, default=func.current_date())

    __table_args__ = (Index("idx_enrollment_member", "member_id"),)


class User(Base):
    """Staff accounts. Only bcrypt hashes are stored."""

    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), nullable=False, unique=True)
    password_hash = Column(String(60), nullable=False)
    role = Column(SmallInteger, nullable=False, default=2)
    is_active = Column(Boolean, nullable=False, default=True)
    permissions = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, nullable=False, default=func.now())

    __table_args__ = (CheckConstraint("role IN (1, 2, 3)", name="check_user_role"),)


class UserPasswordHistory(Base):
    """Hashes a user has used before their current one."""

    __tablename__ = "user_password_history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    password_hash = Column(String(60), nullable=False)
    changed_at = Column(DateTime, nullable=False, default=func.now())

    __table_args__ = (Index("idx_password_history_user", "user_id"),)


class Loan(Base):
    """Loans table - a book borrowed by a member."""

    __tablename__ = "loans"

    loan_id = Column(Integer, primary_key=True, autoincrement=True)
    book_id = Column(Integer, ForeignKey("books.book_id"), nullable=False)
    member_id = Column(Integer, ForeignKey("members.member_id"), nullable=False)
    borrow_date = Column(DateTime, nullable=False, default=func.now())
    due_date = Column(Date, nullable=False)
    return_date = Column(DateTime, nullable=True)
    created_by_user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)

    __table_args__ = (
        Index("idx_loan_member", "member_id"),
        Index("idx_loan_book", "book_id"),
        Index("idx_loan_due_date", "due_date"),
    )


class Fine(Base):
    """Fines table - penalties attached to a loan."""

    __tablename__ = "fines"

    fine_id = Column(Integer, primary_key=True, autoincrement=True)
    member_id = Column(Integer, ForeignKey("members.member_id"), nullable=False)
    loan_id = Column(Integer, ForeignKey("loans.loan_id"), nullable=False)
    fine_amount = Column(Float, nullable=False)
    is_paid = Column(Boolean, nullable=False, default=False)
    paid_at = Column(DateTime, nullable=True)

    __table_args__ = (
        Index("idx_fine_member", "member_id"),
        CheckConstraint("fine_amount > 0", name="check_fine_positive"),
    )
