"""Test configuration and fixtures for the Library System API.

1. Isolated databases - every test gets its own in-memory SQLite store
2. Configuration overrides - cheap bcrypt rounds, no files on disk
3. Repositories over the test session
4. An HTTP client whose ``get_session`` dependency is the test session
"""

from collections.abc import Generator
from datetime import date, timedelta
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from library_system_api.app import create_app
from library_system_api.config import ApiConfig, reset_config
from library_system_api.database import (
    AuthorRepository,
    Base,
    BookRepository,
    CourseRepository,
    FineRepository,
    LoanRepository,
    MemberRepository,
    MembershipTypeRepository,
    UserRepository,
    get_session,
    reset_db_manager,
    seed_membership_types,
)
from library_system_api.models import Book, Course, Member, UserCreate

# === Test Database Fixtures ===


@pytest.fixture
def test_engine() -> Generator[Engine, None, None]:
    """In-memory SQLite engine with foreign keys enforced."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ARG001
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(test_engine: Engine) -> Generator[Session, None, None]:
    """Session over a fresh schema, with the default membership plans seeded.

    Plans get ids 1 (Monthly, 30 days), 2 (Quarterly, 90 days) and
    3 (Annual, 365 days).
    """
    session_local = sessionmaker(
        bind=test_engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = session_local()
    seed_membership_types(session)
    session.commit()

    try:
        yield session
    finally:
        session.close()


# === Configuration Fixtures ===


@pytest.fixture
def test_config(tmp_path: Path) -> Generator[ApiConfig, None, None]:
    """Test configuration: in-memory store and the cheapest bcrypt cost."""
    reset_config()

    config = ApiConfig(
        app_name="test-library-api",
        app_version="0.0.1-test",
        database_path=tmp_path / "test_library.db",
        database_url="sqlite://",
        bcrypt_rounds=4,
        debug=True,
        log_level="DEBUG",
    )

    yield config

    reset_config()
    reset_db_manager()


# === Repository Fixtures ===


@pytest.fixture
def author_repo(db_session: Session) -> AuthorRepository:
    return AuthorRepository(db_session)


@pytest.fixture
def book_repo(db_session: Session) -> BookRepository:
    return BookRepository(db_session)


@pytest.fixture
def member_repo(db_session: Session) -> MemberRepository:
    return MemberRepository(db_session)


@pytest.fixture
def course_repo(db_session: Session) -> CourseRepository:
    return CourseRepository(db_session)


@pytest.fixture
def loan_repo(db_session: Session) -> LoanRepository:
    return LoanRepository(db_session)


@pytest.fixture
def fine_repo(db_session: Session) -> FineRepository:
    return FineRepository(db_session)


@pytest.fixture
def membership_type_repo(db_session: Session) -> MembershipTypeRepository:
    return MembershipTypeRepository(db_session)


@pytest.fixture
def user_repo(db_session: Session) -> UserRepository:
    return UserRepository(db_session, bcrypt_rounds=4)


# === Sample Data ===


@pytest.fixture
def book_data() -> dict:
    """JSON body for ``POST /Books``."""
    return {
        "title": "Dune",
        "genre": "Science Fiction",
        "isbn": "0441013597",
        "condition": 1,
        "publication_date": "1965-08-01",
        "availability_status": 1,
        "language": "English",
    }


@pytest.fixture
def member_data() -> dict:
    """JSON body for ``POST /Members`` on a Monthly plan."""
    today = date.today()
    return {
        "first_name": "Layla",
        "second_name": "Omar",
        "third_name": None,
        "last_name": "Haddad",
        "date_of_birth": "1994-03-12",
        "address": "12 Rainbow St, Amman",
        "phone": "0795550101",
        "email": "layla@example.com",
        "membership_type_id": 1,
        "start_date": today.isoformat(),
        "expiry_date": (today + timedelta(days=30)).isoformat(),
        "is_cancelled": False,
    }


@pytest.fixture
def course_data() -> dict:
    """JSON body for ``POST /Courses`` with two seats."""
    today = date.today()
    return {
        "course_name": "Intro to Archiving",
        "tutor_first_name": "Sami",
        "tutor_last_name": "Nasser",
        "enrollment_fees": 25.0,
        "max_participants": 2,
        "start_date": (today + timedelta(days=7)).isoformat(),
        "end_date": (today + timedelta(days=35)).isoformat(),
        "notes": None,
    }


@pytest.fixture
def book(book_repo: BookRepository, book_data: dict) -> Book:
    """A persisted book by Frank Herbert."""
    return book_repo.create_with_author(Book(**book_data), "Frank", "Herbert")


@pytest.fixture
def member(member_repo: MemberRepository, member_data: dict) -> Member:
    return member_repo.create(Member(**member_data))


@pytest.fixture
def course(course_repo: CourseRepository, course_data: dict) -> Course:
    return course_repo.create(Course(**course_data))


@pytest.fixture
def user(user_repo: UserRepository):
    """A persisted librarian whose password is ``s3cret-pass``."""
    return user_repo.create_user(UserCreate(username="amal.k", password="s3cret-pass"))


@pytest.fixture
def loan(loan_repo: LoanRepository, book, member, user):
    """An outstanding loan on the standard 14-day period."""
    return loan_repo.create_loan(book.book_id, member.member_id, user.user_id, 14)


# === HTTP Client ===


@pytest.fixture
def client(test_config: ApiConfig, db_session: Session) -> Generator[TestClient, None, None]:
    """HTTP client over the app, sharing ``db_session`` with the test."""
    app = create_app(test_config)

    def override_get_session() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[get_session] = override_get_session

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def api_prefix(test_config: ApiConfig) -> str:
    return test_config.api_prefix
