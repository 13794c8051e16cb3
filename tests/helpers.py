"""Shared test setup: an isolated in-memory app per test case, seeded with the default accounts."""

from fastapi.testclient import TestClient

from dashboard.core.config import Settings
from dashboard.main import create_app

TEST_JWT_SECRET = "test-secret-key-that-is-long-enough-for-hs256"

ADMIN_CREDENTIALS = {"username": "admin", "password": "admin123"}
USER_CREDENTIALS = {"username": "user", "password": "user123"}


def make_settings(**overrides: object) -> Settings:
    """Settings for tests: in-memory SQLite, cheap bcrypt, fixed secret, no .env."""
    values: dict[str, object] = {
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET": TEST_JWT_SECRET,
        "BCRYPT_ROUNDS": 4,
        "SEED_ON_STARTUP": True,
        "AUTO_CREATE_TABLES": True,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def start_client(testcase, **overrides: object) -> TestClient:
    """Create an app, run its lifespan (tables + seed) and close it when the test ends."""
    app = create_app(make_settings(**overrides))
    client = TestClient(app)
    client.__enter__()
    testcase.addCleanup(client.__exit__, None, None, None)
    return client


def login(client: TestClient, username: str, password: str) -> str:
    resp = client.post("/api/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
