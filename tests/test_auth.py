"""API tests for login, /me and bearer token handling."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from dashboard.core.security import create_access_token
from helpers import (
    ADMIN_CREDENTIALS,
    TEST_JWT_SECRET,
    USER_CREDENTIALS,
    bearer,
    login,
    make_settings,
    start_client,
)


class TestLogin(unittest.TestCase):
    """POST /api/login issues a token for valid credentials only."""

    def setUp(self) -> None:
        self.client = start_client(self)

    def test_admin_login_returns_token_and_user(self) -> None:
        resp = self.client.post("/api/login", json=ADMIN_CREDENTIALS)
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["user"], {"id": 1, "username": "admin", "role": "admin"})
        payload = jwt.decode(body["token"], TEST_JWT_SECRET, algorithms=["HS256"])
        self.assertEqual(payload["sub"], "1")
        self.assertEqual(payload["role"], "admin")
        self.assertEqual(payload["exp"] - payload["iat"], 3600)

    def test_user_login_returns_user_role(self) -> None:
        resp = self.client.post("/api/login", json=USER_CREDENTIALS)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["user"]["role"], "user")

    def test_wrong_password_and_unknown_user_are_indistinguishable(self) -> None:
        wrong_pw = self.client.post("/api/login", json={"username": "admin", "password": "nope"})
        no_user = self.client.post("/api/login", json={"username": "ghost", "password": "nope"})
        self.assertEqual(wrong_pw.status_code, 401)
        self.assertEqual(wrong_pw.status_code, no_user.status_code)
        self.assertEqual(wrong_pw.json(), no_user.json())
        self.assertEqual(wrong_pw.json(), {"message": "Invalid credentials"})

    def test_missing_fields_is_bad_request(self) -> None:
        resp = self.client.post("/api/login", json={"username": "admin"})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("password", resp.json()["message"])

    def test_empty_password_is_bad_request(self) -> None:
        resp = self.client.post("/api/login", json={"username": "admin", "password": ""})
        self.assertEqual(resp.status_code, 400)


class TestMe(unittest.TestCase):
    """GET /api/me returns the identity embedded in the token."""

    def setUp(self) -> None:
        self.client = start_client(self)

    def test_me_with_valid_token(self) -> None:
        token = login(self.client, **USER_CREDENTIALS)
        resp = self.client.get("/api/me", headers=bearer(token))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"user": {"id": 2, "username": "user", "role": "user"}})

    def test_missing_token_is_401(self) -> None:
        resp = self.client.get("/api/me")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json(), {"message": "No token provided"})
        self.assertEqual(resp.headers.get("www-authenticate"), "Bearer")

    def test_non_bearer_scheme_counts_as_missing(self) -> None:
        resp = self.client.get("/api/me", headers={"Authorization": "Basic abc"})
        self.assertEqual(resp.status_code, 401)

    def test_garbage_token_is_403(self) -> None:
        resp = self.client.get("/api/me", headers=bearer("not-a-jwt"))
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json(), {"message": "Invalid token"})

    def test_token_signed_with_other_secret_is_403(self) -> None:
        other = make_settings(JWT_SECRET="another-secret-key-that-is-also-long-enough")
        token = create_access_token(1, "admin", "admin", other)
        resp = self.client.get("/api/me", headers=bearer(token))
        self.assertEqual(resp.status_code, 403)

    def test_expired_token_is_403(self) -> None:
        issued = datetime.now(UTC) - timedelta(hours=2)
        token = create_access_token(1, "admin", "admin", make_settings(), now=issued)
        resp = self.client.get("/api/me", headers=bearer(token))
        self.assertEqual(resp.status_code, 403)

    def test_token_with_unknown_role_is_403(self) -> None:
        token = create_access_token(1, "admin", "superuser", make_settings())
        resp = self.client.get("/api/me", headers=bearer(token))
        self.assertEqual(resp.status_code, 403)


class TestRoot(unittest.TestCase):
    def test_root(self) -> None:
        client = start_client(self)
        self.assertEqual(client.get("/").json(), {"message": "Record Dashboard API"})


if __name__ == "__main__":
    unittest.main()
