"""Tests for the Users endpoints."""

import pytest

SECRET = "S3cret-Hunter2"


@pytest.fixture
def users_url(api_prefix: str) -> str:
    return f"{api_prefix}/Users"


@pytest.fixture
def posted_user(client, users_url) -> dict:
    response = client.post(users_url, json={"username": "omar.f", "password": "first-pass"})
    assert response.status_code == 201
    return response.json()


class TestAddUser:
    def test_post_never_returns_password(self, client, users_url):
        response = client.post(
            users_url, json={"username": "omar.f", "password": "first-pass", "role": 1}
        )
        assert response.status_code == 201

        body = response.json()
        assert body["username"] == "omar.f"
        assert body["role"] == 1
        assert "password" not in body
        assert "password_hash" not in body
        assert response.headers["location"].endswith(f"{users_url}/{body['user_id']}")

    def test_post_without_password(self, client, users_url):
        assert client.post(users_url, json={"username": "omar.f"}).status_code == 400

    @pytest.mark.parametrize(
        "body",
        [
            {"username": "amal", "password": SECRET + "x" * 70, "role": 2},
            [{"username": "amal", "password": SECRET}],
        ],
        ids=["password-too-long", "body-not-an-object"],
    )
    def test_rejected_password_is_neither_echoed_nor_logged(
        self, client, users_url, caplog, body
    ):
        response = client.post(users_url, json=body)

        assert response.status_code == 400
        assert response.json()["detail"]
        assert SECRET not in response.text
        assert "Invalid request" in caplog.text
        assert SECRET not in caplog.text

    def test_post_duplicate_username(self, client, users_url, posted_user):
        response = client.post(users_url, json={"username": "omar.f", "password": "other-pass"})
        assert response.status_code == 500
        assert response.json() == {"message": "An error occurred while adding the new user."}


class TestUserLookups:
    def test_by_id(self, client, users_url, posted_user):
        response = client.get(f"{users_url}/{posted_user['user_id']}")
        assert response.status_code == 200
        assert response.json() == posted_user
        assert client.get(f"{users_url}/77").status_code == 404

    def test_by_credentials(self, client, users_url, posted_user):
        response = client.get(f"{users_url}/omar.f/first-pass")
        assert response.status_code == 200
        assert response.json()["user_id"] == posted_user["user_id"]

        assert client.get(f"{users_url}/omar.f/wrong-pass").status_code == 404
        assert client.get(f"{users_url}/nobody/first-pass").status_code == 404

    def test_does_username_exist(self, client, users_url, posted_user):
        assert client.get(f"{users_url}/DoesUsernameExist/omar.f").json() is True
        assert client.get(f"{users_url}/DoesUsernameExist/nobody").json() is False
        assert client.get(f"{users_url}/DoesUsernameExist/%20").status_code == 400

    def test_all_users(self, client, users_url, posted_user, user):
        response = client.get(f"{users_url}/All")
        assert response.status_code == 200
        assert [u["username"] for u in response.json()] == ["amal.k", "omar.f"]

    def test_all_users_empty(self, client, users_url):
        assert client.get(f"{users_url}/All").status_code == 404


class TestPasswords:
    def test_update_password(self, client, users_url, posted_user):
        user_id = posted_user["user_id"]
        response = client.put(f"{users_url}/{user_id}/second-pass")
        assert response.status_code == 200
        assert response.json() == "Password is updated successfully"

        assert client.get(f"{users_url}/omar.f/second-pass").status_code == 200
        assert client.get(f"{users_url}/omar.f/first-pass").status_code == 404

    def test_update_password_unknown_user(self, client, users_url):
        assert client.put(f"{users_url}/77/second-pass").status_code == 404

    def test_update_password_too_long(self, client, users_url, posted_user):
        response = client.put(f"{users_url}/{posted_user['user_id']}/{'x' * 73}")
        assert response.status_code == 400

    def test_password_history(self, client, users_url, posted_user):
        user_id = posted_user["user_id"]
        url = f"{users_url}/IsPasswordUsedByUser/{user_id}"

        assert client.get(f"{url}/first-pass").json() is True
        assert client.get(f"{url}/second-pass").json() is False

        client.put(f"{users_url}/{user_id}/second-pass")
        assert client.get(f"{url}/first-pass").json() is True
        assert client.get(f"{url}/second-pass").json() is True
        assert client.get(f"{url}/third-pass").json() is False
