"""Test configuration and fixtures for the backend test suite."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

# The package reads its settings on import.
os.environ.setdefault("AUTH_SECRET_KEY", "test-secret-key")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from postboard_backend.api import create_api  # noqa: E402
from postboard_backend.database import (  # noqa: E402
    Address,
    Company,
    DatabaseService,
    PostSchema,
    UserSchema,
    get_session,
)
from postboard_backend.settings import get_settings  # noqa: E402

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.orm import Session


@pytest.fixture(autouse=True)
def _mock_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Ensure settings are loaded with predictable values during tests."""
    monkeypatch.setenv("AUTH_SECRET_KEY", "test-secret-key")
    monkeypatch.setenv("AUTH_ENABLED", "false")
    monkeypatch.setenv("AUTH_COOKIE_SECURE", "false")
    monkeypatch.setenv("OIDC_CLIENT_ID", "test-client")
    monkeypatch.setenv("OIDC_ISSUER", "https://idp.example.com/")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def database() -> Iterator[DatabaseService]:
    """In-memory SQLite database shared by every connection of one test."""
    db = DatabaseService(
        "sqlite+pysqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    db.create_schema()
    yield db
    db.dispose()


@pytest.fixture
def session(database: DatabaseService) -> Iterator[Session]:
    with database.session() as session:
        yield session


@pytest.fixture
def client(database: DatabaseService) -> Iterator[TestClient]:
    app = create_api()

    def override_session() -> Iterator[Session]:
        with database.session() as session:
            yield session

    app.dependency_overrides[get_session] = override_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_users() -> list[UserSchema]:
    """Three users in the shape of the public JSONPlaceholder fixtures."""
    return [
        UserSchema(
            name="Leanne Graham",
            username="Bret",
            email="Sincere@april.biz",
            phone="1-770-736-8031",
            website="hildegard.org",
            address=Address("Kulas Light", "Apt. 556", "Gwenborough", "92998-3874"),
            company=Company(
                "Romaguera-Crona",
                "Multi-layered client-server neural-net",
                "harness real-time e-markets",
            ),
        ),
        UserSchema(
            name="Ervin Howell",
            username="Antonette",
            email="Shanna@melissa.tv",
            phone="010-692-6593",
            website="anastasia.net",
            address=Address("Victor Plains", "Suite 879", "Wisokyburgh", "90566-7771"),
            company=Company(
                "Deckow-Crist",
                "Proactive didactic contingency",
                "synergize scalable supply-chains",
            ),
        ),
        UserSchema(
            name="Clementine Bauch",
            username="Samantha",
            email="Nathan@yesenia.net",
            phone="1-463-123-4447",
            website="ramiro.info",
            address=Address(
                "Douglas Extension", "Suite 847", "McKenziehaven", "59590-4157"
            ),
            company=Company(
                "Romaguera-Jacobson",
                "Face to face bifurcated interface",
                "e-enable strategic applications",
            ),
        ),
    ]


@pytest.fixture
def users(session: Session) -> list[UserSchema]:
    records = make_users()
    session.add_all(records)
    session.commit()
    return records


@pytest.fixture
def posts(session: Session, users: list[UserSchema]) -> list[PostSchema]:
    records = [
        PostSchema(
            title="sunt aut facere", content="quia et suscipit", user_id=users[0].id
        ),
        PostSchema(
            title="qui est esse", content="est rerum tempore", user_id=users[0].id
        ),
        PostSchema(
            title="ea molestias", content="et iusto sed quo", user_id=users[1].id
        ),
        PostSchema(
            title="eum et est", content="ullam et saepe", user_id=users[2].id
        ),
    ]
    session.add_all(records)
    session.commit()
    return records
