"""
Shared pytest fixtures for the BlogHub test suite.

Each test gets a fresh SQLite database file, an app built against it and a
TestClient. Helpers create users, promote admins and seed posts through the
public API.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from bloghub.core.config import Settings
from bloghub.db.session import Database
from bloghub.main import create_app
from bloghub.services.auth_service import promote_to_admin

DEFAULT_PASSWORD = "secret123"


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'bloghub_test.db'}",
        AUTO_CREATE_TABLES=True,
        JWT_SECRET_KEY="test-secret-key-do-not-use-in-production",
        ENVIRONMENT="test",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def client(test_settings):
    app = create_app(test_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def run_db(test_settings):
    """Run ``fn(session)`` against the test database outside the app."""

    def run(fn):
        async def _go():
            db = Database(test_settings)
            try:
                async with db.session_maker() as session:
                    result = await fn(session)
                    await session.commit()
                    return result
            finally:
                await db.dispose()

        return asyncio.run(_go())

    return run


@pytest.fixture
def signup(client):
    """Register a user and return ``{"user", "token", "headers"}``."""

    def _signup(name: str, email: str, password: str = DEFAULT_PASSWORD) -> dict:
        response = client.post(
            "/api/auth/signup",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        return {
            "user": data["user"],
            "token": data["token"],
            "headers": {"Authorization": f"Bearer {data['token']}"},
        }

    return _signup


@pytest.fixture
def make_admin(signup, run_db):
    def _make_admin(name: str = "Admin", email: str = "admin@blog.io") -> dict:
        account = signup(name, email)
        run_db(lambda session: promote_to_admin(session, email))
        return account

    return _make_admin


@pytest.fixture
def create_post(client):
    def _create_post(headers: dict, **overrides) -> dict:
        payload = {
            "title": "A post title",
            "content": "Some content that is long enough.",
            "tags": [],
        }
        payload.update(overrides)
        response = client.post("/api/posts", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]["post"]

    return _create_post


@pytest.fixture
def alice(signup):
    return signup("Alice Writer", "alice@blog.io")


@pytest.fixture
def bob(signup):
    return signup("Bob Reader", "bob@blog.io")
