"""
Database package for the Library System API.

This package provides:
- SQLAlchemy schema definitions (schema.py)
- Session management and connection handling (session.py)
- One repository per entity, built on ``BaseRepository``
- Seeding of membership plans and demo data (seed.py)
"""

from .author_repository import AuthorRepository
from .book_repository import BookRepository, normalize_isbn
from .course_repository import CourseRepository
from .fine_repository import FineRepository
from .loan_repository import LoanRepository
from .member_repository import MemberRepository
from .membership_type_repository import MembershipTypeRepository
from .repository import (
    BaseRepository,
    DuplicateError,
    PersistenceError,
    RepositoryException,
)
from .schema import Base
from .seed import seed_membership_types, seed_sample_data
from .session import (
    DatabaseManager,
    get_db_manager,
    get_session,
    reset_db_manager,
    safe_commit,
    safe_query,
)
from .user_repository import UserRepository

__all__ = [
    "AuthorRepository",
    "Base",
    "BaseRepository",
    "BookRepository",
    "CourseRepository",
    "DatabaseManager",
    "DuplicateError",
    "FineRepository",
    "LoanRepository",
    "MemberRepository",
    "MembershipTypeRepository",
    "PersistenceError",
    "RepositoryException",
    "UserRepository",
    "get_db_manager",
    "get_session",
    "normalize_isbn",
    "reset_db_manager",
    "safe_commit",
    "safe_query",
    "seed_membership_types",
    "seed_sample_data",
]
