from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from itertools import count
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

os.environ.setdefault("SECRET_KEY", "test-secret-key")

from themeboard.core.settings import Settings
from themeboard.main import create_app
from themeboard.models import Theme

TEST_DB_URL = "sqlite://"
THEME_ID = "t1"

_USER_COUNTER = count(1)


@pytest.fixture()
def test_settings() -> Settings:
    """Settings for an isolated in-memory application."""
    return Settings(
        SECRET_KEY="test-secret-key",
        DATABASE_URL=TEST_DB_URL,
        PASSWORD_HASH_ITERATIONS=1_000,
        POSTS_PAGE_SIZE=3,
        DEFAULT_THEMES=["General", "Questions"],
    )


@pytest.fixture()
def app(test_settings: Settings) -> Iterator[FastAPI]:
    application = create_app(test_settings)
    try:
        yield application
    finally:
        application.state.engine.dispose()


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def db_session(app: FastAPI, client: TestClient) -> Iterator[Session]:
    """A session closed before the client shuts the app down and disposes the engine."""
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def theme(db_session: Session) -> Theme:
    """A theme with a fixed, well-known id."""
    theme = Theme(id=THEME_ID, name="Test Theme")
    db_session.add(theme)
    db_session.commit()
    return theme


def auth_headers(auth: dict[str, Any]) -> dict[str, str]:
    """Build the two identity headers from a register/login response."""
    return {"Authorization": f"Bearer {auth['token']}", "id": auth["userId"]}


@pytest.fixture()
def register(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Register a fresh user through the API and return the auth response."""

    def _register(username: str | None = None, password: str = "password") -> dict[str, Any]:
        username = username or f"user{next(_USER_COUNTER)}"
        response = client.post(
            "/auth/register",
            json={"username": username, "email": f"{username}@example.com", "password": password},
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _register


@pytest.fixture()
def user_auth(register: Callable[..., dict[str, Any]]) -> dict[str, Any]:
    return register()


@pytest.fixture()
def other_auth(register: Callable[..., dict[str, Any]]) -> dict[str, Any]:
    return register()


@pytest.fixture()
def user_headers(user_auth: dict[str, Any]) -> dict[str, str]:
    return auth_headers(user_auth)


@pytest.fixture()
def other_headers(other_auth: dict[str, Any]) -> dict[str, str]:
    return auth_headers(other_auth)


def post_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "message": "hi",
        "images": [],
        "anonymous": False,
        "themeId": THEME_ID,
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def test_post(client: TestClient, theme: Theme, user_headers: dict[str, str]) -> dict[str, Any]:
    """A post created by the primary user."""
    response = client.post("/post", json=post_payload(message="First post"), headers=user_headers)
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture()
def test_comment(
    client: TestClient,
    test_post: dict[str, Any],
    user_headers: dict[str, str],
) -> dict[str, Any]:
    """A comment by the primary user on ``test_post``."""
    response = client.post(
        f"/comment/{test_post['id']}",
        json={"message": "First comment", "images": [], "anonymous": False},
        headers=user_headers,
    )
    assert response.status_code == 200, response.text
    return response.json()
