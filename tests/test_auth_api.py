"""
Tests for login, sign-up, logout, profile and password change endpoints.
"""
from fakes import API, DEFAULT_PASSWORD, bearer


def signup_form(**overrides):
    form = {
        "name": "Freshly Signed Up Customer",
        "email": "fresh@example.com",
        "password": "Passw0rd!",
        "address": "8 Signup Street",
    }
    form.update(overrides)
    return form


class TestLogin:
    def test_login_returns_tokens_and_profile(self, client, backend):
        res = client.post(
            f"{API}/auth/login",
            json={"email": "owner@example.com", "password": DEFAULT_PASSWORD},
        )

        assert res.status_code == 200
        body = res.json()
        assert body["access_token"] == f"token-{backend.owner['id']}"
        assert body["refresh_token"]
        assert body["user"]["role"] == "store_owner"

    def test_wrong_password(self, client):
        res = client.post(
            f"{API}/auth/login",
            json={"email": "owner@example.com", "password": "nope"},
        )
        assert res.status_code == 400
        assert res.json()["errors"] == {"submit": "Invalid login credentials"}

    def test_token_from_login_works(self, client):
        body = client.post(
            f"{API}/auth/login",
            json={"email": "user@example.com", "password": DEFAULT_PASSWORD},
        ).json()

        me = client.get(
            f"{API}/auth/me",
            headers={"Authorization": f"Bearer {body['access_token']}"},
        )
        assert me.json()["email"] == "user@example.com"


class TestSignup:
    def test_signup_opens_session(self, client, backend):
        res = client.post(f"{API}/auth/signup", json=signup_form())

        assert res.status_code == 201
        body = res.json()
        assert body["confirmation_required"] is False
        assert body["user"]["role"] == "user"
        assert body["user"]["email"] == "fresh@example.com"

    def test_signup_with_email_confirmation(self, client, backend):
        backend.auto_confirm = False

        body = client.post(f"{API}/auth/signup", json=signup_form()).json()

        assert body["confirmation_required"] is True
        assert body["user"] is None
        assert body["user_id"]

    def test_signup_cannot_pick_role(self, client):
        res = client.post(f"{API}/auth/signup", json=signup_form(role="admin"))
        assert res.status_code == 422
        assert "role" in res.json()["errors"]

    def test_duplicate_email(self, client):
        res = client.post(f"{API}/auth/signup", json=signup_form(email="user@example.com"))
        assert res.status_code == 400
        assert res.json()["errors"]["submit"] == "User already registered"

    def test_invalid_fields(self, client, backend):
        res = client.post(f"{API}/auth/signup", json=signup_form(address="", email="bad@"))

        assert res.status_code == 422
        assert set(res.json()["errors"]) == {"address", "email"}
        assert "fresh@example.com" not in backend.accounts


class TestLogout:
    def test_logout(self, client, backend):
        res = client.post(f"{API}/auth/logout", headers=bearer(backend.normal))
        assert res.status_code == 204

    def test_logout_anonymous(self, client):
        assert client.post(f"{API}/auth/logout").status_code == 204


class TestChangePassword:
    def test_change_with_full_session(self, client, backend):
        headers = {**bearer(backend.normal), "X-Refresh-Token": "refresh"}

        res = client.post(
            f"{API}/auth/password",
            json={"new_password": "NewPass#1", "confirm_password": "NewPass#1"},
            headers=headers,
        )

        assert res.status_code == 204
        assert backend.clients[-1].auth.updated_passwords == [(backend.normal["id"], "NewPass#1")]

    def test_change_without_refresh_token(self, client, backend):
        res = client.post(
            f"{API}/auth/password",
            json={"new_password": "NewPass#1", "confirm_password": "NewPass#1"},
            headers=bearer(backend.normal),
        )
        assert res.status_code == 400
        assert res.json()["errors"]["submit"] == "Auth session missing!"

    def test_mismatch(self, client, backend):
        res = client.post(
            f"{API}/auth/password",
            json={"new_password": "NewPass#1", "confirm_password": "Other#123"},
            headers=bearer(backend.normal),
        )
        assert res.status_code == 422
        assert res.json()["errors"] == {"confirm_password": "Passwords do not match"}

    def test_requires_login(self, client):
        res = client.post(
            f"{API}/auth/password",
            json={"new_password": "NewPass#1", "confirm_password": "NewPass#1"},
        )
        assert res.status_code == 401
