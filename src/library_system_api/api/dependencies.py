"""
FastAPI dependency providers.

Every request gets a fresh session from ``get_session``; repositories are
built on top of it so handlers only ever see the repository interface.
Tests swap the store by overriding ``get_session``.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from ..config import ApiConfig, get_config
from ..database import (
    AuthorRepository,
    BookRepository,
    CourseRepository,
    FineRepository,
    LoanRepository,
    MemberRepository,
    MembershipTypeRepository,
    UserRepository,
    get_session,
)


def get_author_repository(session: Session = Depends(get_session)) -> AuthorRepository:
    return AuthorRepository(session)


def get_book_repository(session: Session = Depends(get_session)) -> BookRepository:
    return BookRepository(session)


def get_course_repository(session: Session = Depends(get_session)) -> CourseRepository:
    return CourseRepository(session)


def get_fine_repository(session: Session = Depends(get_session)) -> FineRepository:
    return FineRepository(session)


def get_loan_repository(session: Session = Depends(get_session)) -> LoanRepository:
    return LoanRepository(session)


def get_member_repository(session: Session = Depends(get_session)) -> MemberRepository:
    return MemberRepository(session)


def get_membership_type_repository(
    session: Session = Depends(get_session),
) -> MembershipTypeRepository:
    return MembershipTypeRepository(session)


def get_user_repository(
    session: Session = Depends(get_session),
    config: ApiConfig = Depends(get_config),
) -> UserRepository:
    return UserRepository(session, bcrypt_rounds=config.bcrypt_rounds)
