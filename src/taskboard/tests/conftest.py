"""Shared fixtures: an in-memory database, two users and an API client."""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from taskboard.config import Settings
from taskboard.crud import IdentityProfile, TaskListStorage, TaskStorage, UserStorage
from taskboard.database import Database
from taskboard.main import create_app
from taskboard.services.session import issue_session_token


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        session_secret="test-secret",
        cors_origins=["*"],
        log_level="WARNING",
        provisioning_key="test-provisioning-key",
    )


@pytest.fixture
def database(settings):
    db = Database(settings.database_url)
    db.create_db_and_tables()
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    with Session(database.engine) as session:
        yield session


@pytest.fixture
def alice(session):
    return UserStorage(session).create_user(
        IdentityProfile(external_id="google-alice", email="alice@example.com", name="Alice")
    )


@pytest.fixture
def bob(session):
    return UserStorage(session).create_user(
        IdentityProfile(external_id="google-bob", email="bob@example.com", name="Bob")
    )


@pytest.fixture
def list_storage(session):
    return TaskListStorage(session)


@pytest.fixture
def task_storage(session):
    return TaskStorage(session)


@pytest.fixture
def client(settings, database):
    app = create_app(settings=settings, database=database)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(settings):
    """Build bearer headers for a user."""
    def _headers(user, expires_delta=None):
        token = issue_session_token(user, settings, expires_delta=expires_delta)
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def alice_headers(alice, auth_headers):
    return auth_headers(alice)


@pytest.fixture
def bob_headers(bob, auth_headers):
    return auth_headers(bob)


@pytest.fixture
def expired_headers(alice, auth_headers):
    return auth_headers(alice, expires_delta=timedelta(minutes=-5))
