"""Tests for the application factory and the HTTP error mapping."""

import logging
from unittest.mock import Mock, patch

import pytest
from fastapi.testclient import TestClient

from library_system_api import __version__
from library_system_api.api.dependencies import (
    get_author_repository,
    get_book_repository,
    get_course_repository,
    get_fine_repository,
    get_loan_repository,
    get_member_repository,
    get_membership_type_repository,
    get_user_repository,
)
from library_system_api.app import (
    PasswordPathFilter,
    create_app,
    main,
    redact_password_path,
)
from library_system_api.config import set_config
from library_system_api.database import (
    AuthorRepository,
    BookRepository,
    CourseRepository,
    FineRepository,
    LoanRepository,
    MemberRepository,
    MembershipTypeRepository,
    PersistenceError,
    UserRepository,
)

REPOSITORIES = {
    get_author_repository: AuthorRepository,
    get_book_repository: BookRepository,
    get_course_repository: CourseRepository,
    get_fine_repository: FineRepository,
    get_loan_repository: LoanRepository,
    get_member_repository: MemberRepository,
    get_membership_type_repository: MembershipTypeRepository,
    get_user_repository: UserRepository,
}


def provide(repo):
    def dependency():
        return repo

    return dependency


@pytest.fixture
def mocked_repos(test_config):
    """App whose repositories are mocks; yields (client, repos by class)."""
    app = create_app(test_config)
    repos = {}
    for dependency, repo_class in REPOSITORIES.items():
        repos[repo_class] = Mock(spec=repo_class)
        app.dependency_overrides[dependency] = provide(repos[repo_class])

    yield TestClient(app), repos

    app.dependency_overrides.clear()


class TestApplication:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": __version__}

    def test_lifespan_creates_schema(self, test_config):
        with TestClient(create_app(test_config)) as client:
            response = client.get(f"{test_config.api_prefix}/Books/All")
            assert response.status_code == 404

    def test_routes_are_mounted_under_prefix(self, client, api_prefix):
        assert api_prefix == "/api/Library"
        assert client.get("/Books/All").status_code == 404
        assert client.get(f"{api_prefix}/MembershipTypes/All").status_code == 200

    def test_openapi_lists_every_resource(self, client):
        paths = client.get("/openapi.json").json()["paths"]
        for resource in (
            "Authors",
            "Books",
            "Courses",
            "Fines",
            "Loans",
            "Members",
            "MembershipTypes",
            "Users",
        ):
            assert any(path.startswith(f"/api/Library/{resource}") for path in paths)


class TestInputRejection:
    @pytest.mark.parametrize(
        ("method", "path", "repo_class"),
        [
            ("get", "/Books/-1", BookRepository),
            ("delete", "/Books/-1", BookRepository),
            ("patch", "/Books/UpdateCondition/-1/1", BookRepository),
            ("get", "/Books/AuthorID/-1", BookRepository),
            ("patch", "/Books/-1/1", BookRepository),
            ("get", "/Authors/-1", AuthorRepository),
            ("get", "/Members/-1", MemberRepository),
            ("patch", "/Members/RenewMembership/-1", MemberRepository),
            ("get", "/Members/GetNumberOfBorrowedBook/-1", MemberRepository),
            ("patch", "/Members/-1/true", MemberRepository),
            ("get", "/Courses/-1", CourseRepository),
            ("get", "/Courses/EnrollMember/1/-1", CourseRepository),
            ("get", "/Courses/MembersForCourse/-1", CourseRepository),
            ("get", "/Loans/-1", LoanRepository),
            ("get", "/Loans/Loan/-1", LoanRepository),
            ("patch", "/Loans/Return/-1", LoanRepository),
            ("get", "/Loans/CanExtendLoan/-1", LoanRepository),
            ("get", "/Loans/CanReturnBook/-1", LoanRepository),
            ("patch", "/Loans/ExtendDueDate/-1/2030-01-01", LoanRepository),
            ("patch", "/Fines/PaymentStatus/-1/true", FineRepository),
            ("patch", "/Fines/Pay/-1", FineRepository),
            ("get", "/Fines/UnpaidFees/-1", FineRepository),
            ("get", "/MembershipTypes/-1", MembershipTypeRepository),
            ("get", "/Users/-1", UserRepository),
            ("put", "/Users/-1/new-pass", UserRepository),
            ("get", "/Users/IsPasswordUsedByUser/-1/x", UserRepository),
        ],
    )
    def test_negative_id_never_reaches_store(
        self, mocked_repos, api_prefix, method, path, repo_class
    ):
        client, repos = mocked_repos
        response = client.request(method.upper(), f"{api_prefix}{path}")

        assert response.status_code == 400
        assert repos[repo_class].method_calls == []

    @pytest.mark.parametrize(
        ("path", "body_fixture", "repo_class"),
        [
            ("/Members/-1", "member_data", MemberRepository),
            ("/Courses/-1", "course_data", CourseRepository),
        ],
    )
    def test_negative_id_with_valid_body_never_reaches_store(
        self, mocked_repos, api_prefix, request, path, body_fixture, repo_class
    ):
        client, repos = mocked_repos
        body = request.getfixturevalue(body_fixture)

        response = client.put(f"{api_prefix}{path}", json=body)

        assert response.status_code == 400
        assert repos[repo_class].method_calls == []

    def test_non_integer_id(self, mocked_repos, api_prefix):
        client, repos = mocked_repos
        response = client.get(f"{api_prefix}/Members/first")

        assert response.status_code == 400
        assert "detail" in response.json()
        assert repos[MemberRepository].method_calls == []

    def test_malformed_body(self, mocked_repos, api_prefix):
        client, repos = mocked_repos
        response = client.post(f"{api_prefix}/Courses", json={"course_name": "No dates"})

        assert response.status_code == 400
        assert repos[CourseRepository].method_calls == []


class TestServerErrors:
    def test_escaping_store_error_is_generic(self, mocked_repos, api_prefix):
        client, repos = mocked_repos
        repos[BookRepository].get_by_id.side_effect = PersistenceError("disk I/O error")

        response = client.get(f"{api_prefix}/Books/3")

        assert response.status_code == 500
        assert response.json() == {
            "message": "An unexpected error occurred while processing the request."
        }

    def test_failed_create_names_the_operation(
        self, mocked_repos, api_prefix, course_data
    ):
        client, repos = mocked_repos
        repos[CourseRepository].create.side_effect = PersistenceError("database is locked")

        response = client.post(f"{api_prefix}/Courses", json=course_data)

        assert response.status_code == 500
        assert response.json() == {"message": "An error occurred while adding the new course."}

    def test_failed_password_update_names_the_operation(self, mocked_repos, api_prefix):
        client, repos = mocked_repos
        repos[UserRepository].exists.return_value = True
        repos[UserRepository].update_password.side_effect = PersistenceError("database is locked")

        response = client.put(f"{api_prefix}/Users/5/new-pass")

        assert response.status_code == 500
        assert response.json() == {"message": "An error occurred while updating the password."}


class TestAccessLogRedaction:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/api/Library/Users/amal.k/s3cret", "/api/Library/Users/amal.k/***"),
            ("/api/Library/Users/5/s3cret", "/api/Library/Users/5/***"),
            (
                "/api/Library/Users/IsPasswordUsedByUser/5/s3cret",
                "/api/Library/Users/IsPasswordUsedByUser/5/***",
            ),
            ("/api/Library/Users/amal.k/s3cret?x=1", "/api/Library/Users/amal.k/***?x=1"),
        ],
    )
    def test_password_segment_is_masked(self, path, expected):
        assert redact_password_path(path) == expected

    @pytest.mark.parametrize(
        "path",
        [
            "/api/Library/Users/All",
            "/api/Library/Users/5",
            "/api/Library/Users/DoesUsernameExist/amal.k",
            "/api/Library/Books/UpdateCondition/3/1",
        ],
    )
    def test_other_paths_are_untouched(self, path):
        assert redact_password_path(path) == path

    def test_filter_rewrites_access_record(self):
        record = logging.LogRecord(
            "uvicorn.access",
            logging.INFO,
            __file__,
            0,
            '%s - "%s %s HTTP/%s" %d',
            ("127.0.0.1:5000", "GET", "/api/Library/Users/amal.k/s3cret", "1.1", 200),
            None,
        )

        assert PasswordPathFilter().filter(record) is True
        assert "s3cret" not in record.getMessage()
        assert "/api/Library/Users/amal.k/***" in record.getMessage()

    def test_main_installs_filter(self, test_config):
        access_logger = logging.getLogger("uvicorn.access")
        with patch("library_system_api.app.uvicorn.Server") as server:
            set_config(test_config)
            main()
        try:
            server.return_value.run.assert_called_once()
            assert any(isinstance(f, PasswordPathFilter) for f in access_logger.filters)
        finally:
            for log_filter in list(access_logger.filters):
                if isinstance(log_filter, PasswordPathFilter):
                    access_logger.removeFilter(log_filter)
