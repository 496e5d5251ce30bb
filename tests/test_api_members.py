"""Tests for the Members, MembershipTypes and Courses endpoints."""

from datetime import date, timedelta

import pytest


@pytest.fixture
def members_url(api_prefix: str) -> str:
    return f"{api_prefix}/Members"


@pytest.fixture
def courses_url(api_prefix: str) -> str:
    return f"{api_prefix}/Courses"


@pytest.fixture
def posted_member(client, members_url, member_data) -> dict:
    response = client.post(members_url, json=member_data)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def posted_course(client, courses_url, course_data) -> dict:
    response = client.post(courses_url, json=course_data)
    assert response.status_code == 201
    return response.json()


class TestMembers:
    def test_post_and_get(self, client, members_url, posted_member):
        assert posted_member["member_id"] > 0

        response = client.get(f"{members_url}/{posted_member['member_id']}")
        assert response.status_code == 200
        assert response.json() == posted_member

    def test_post_missing_first_name(self, client, members_url, member_data):
        del member_data["first_name"]
        assert client.post(members_url, json=member_data).status_code == 400

    def test_post_unknown_membership_type(self, client, members_url, member_data):
        response = client.post(members_url, json={**member_data, "membership_type_id": 42})
        assert response.status_code == 500
        assert response.json() == {"message": "An error occurred while adding the new member."}

    def test_put_replaces_fields(self, client, members_url, posted_member):
        member_id = posted_member["member_id"]
        updated = {**posted_member, "address": "3 Garden St", "third_name": "Nabil"}

        response = client.put(f"{members_url}/{member_id}", json=updated)
        assert response.status_code == 200
        assert response.json()["address"] == "3 Garden St"

        fetched = client.get(f"{members_url}/{member_id}").json()
        assert fetched["address"] == "3 Garden St"
        assert fetched["third_name"] == "Nabil"

    def test_put_unknown_member(self, client, members_url, member_data):
        assert client.put(f"{members_url}/55", json=member_data).status_code == 404

    def test_put_invalid_member(self, client, members_url, posted_member):
        response = client.put(
            f"{members_url}/{posted_member['member_id']}", json={**posted_member, "phone": ""}
        )
        assert response.status_code == 400

    def test_get_unknown_member(self, client, members_url):
        assert client.get(f"{members_url}/55").status_code == 404

    def test_cancel(self, client, members_url, posted_member):
        member_id = posted_member["member_id"]
        response = client.patch(f"{members_url}/{member_id}/true")
        assert response.status_code == 200
        assert response.json() is True
        assert client.get(f"{members_url}/{member_id}").json()["is_cancelled"] is True

        assert client.patch(f"{members_url}/55/true").json() is False

    def test_renew(self, client, members_url, posted_member):
        member_id = posted_member["member_id"]
        response = client.patch(f"{members_url}/RenewMembership/{member_id}")
        assert response.status_code == 200
        assert response.json() is True

        expiry = date.fromisoformat(client.get(f"{members_url}/{member_id}").json()["expiry_date"])
        assert expiry == date.fromisoformat(posted_member["expiry_date"]) + timedelta(days=30)

    def test_renew_unknown_member(self, client, members_url):
        response = client.patch(f"{members_url}/RenewMembership/55")
        assert response.status_code == 200
        assert response.json() is False

    def test_all_members(self, client, members_url, posted_member):
        response = client.get(f"{members_url}/All")
        assert response.status_code == 200
        assert response.json()[0]["membership_type_name"] == "Monthly"

    def test_all_members_empty(self, client, members_url):
        assert client.get(f"{members_url}/All").status_code == 404

    def test_borrowed_books(self, client, members_url, loan):
        response = client.get(f"{members_url}/GetNumberOfBorrowedBook/{loan.member_id}")
        assert response.status_code == 200
        assert response.json() == 1

    def test_borrowed_books_unknown_member(self, client, members_url):
        assert client.get(f"{members_url}/GetNumberOfBorrowedBook/55").status_code == 404


class TestMembershipTypes:
    def test_all(self, client, api_prefix):
        response = client.get(f"{api_prefix}/MembershipTypes/All")
        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Monthly", "Quarterly", "Annual"]

    def test_by_id(self, client, api_prefix):
        response = client.get(f"{api_prefix}/MembershipTypes/3")
        assert response.status_code == 200
        assert response.json()["duration_days"] == 365
        assert client.get(f"{api_prefix}/MembershipTypes/9").status_code == 404


class TestCourses:
    def test_post_and_get(self, client, courses_url, posted_course):
        response = client.get(f"{courses_url}/{posted_course['course_id']}")
        assert response.status_code == 200
        assert response.json() == posted_course

    def test_post_invalid_course(self, client, courses_url, course_data):
        response = client.post(courses_url, json={**course_data, "max_participants": 0})
        assert response.status_code == 400

    def test_put(self, client, courses_url, posted_course):
        course_id = posted_course["course_id"]
        updated = {**posted_course, "course_name": "Advanced Archiving"}
        response = client.put(f"{courses_url}/{course_id}", json=updated)
        assert response.status_code == 200
        assert response.json() == {**updated, "course_id": course_id}

    def test_put_unknown_course(self, client, courses_url, course_data):
        assert client.put(f"{courses_url}/31", json=course_data).status_code == 404

    def test_enroll_until_full(self, client, courses_url, members_url, member_data, posted_course):
        course_id = posted_course["course_id"]
        member_ids = [
            client.post(members_url, json={**member_data, "phone": f"079111111{i}"}).json()[
                "member_id"
            ]
            for i in range(3)
        ]

        results = [
            client.get(f"{courses_url}/EnrollMember/{member_id}/{course_id}").json()
            for member_id in member_ids
        ]
        assert results == [True, True, False]

        roster = client.get(f"{courses_url}/MembersForCourse/{course_id}")
        assert roster.status_code == 200
        assert [m["member_id"] for m in roster.json()] == member_ids[:2]

        summary = client.get(f"{courses_url}/All").json()[0]
        assert summary["enrolled_count"] == 2

    def test_enroll_unknown_course(self, client, courses_url, posted_member):
        response = client.get(f"{courses_url}/EnrollMember/{posted_member['member_id']}/99")
        assert response.status_code == 200
        assert response.json() is False

    def test_members_for_empty_course(self, client, courses_url, posted_course):
        response = client.get(f"{courses_url}/MembersForCourse/{posted_course['course_id']}")
        assert response.status_code == 404

    def test_all_courses_empty(self, client, courses_url):
        assert client.get(f"{courses_url}/All").status_code == 404
