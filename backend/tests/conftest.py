"""Pytest configuration and shared fixtures."""

import os

# Settings are read at import time; point them at an in-memory database first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENV"] = "test"
os.environ["JWT_SECRET"] = "test-secret-key-for-quizbank-tests"

import random
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from quizbank.core.dependencies import get_rng
from quizbank.core.security import create_access_token
from quizbank.db.base import Base
from quizbank.db.engine import engine
from quizbank.db.session import get_db
from quizbank.main import app
from quizbank.models.user import User
from tests.helpers.seed import create_test_user

RNG_SEED = 20240117


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Fresh schema and session for each test."""
    Base.metadata.create_all(bind=engine)
    session = Session(bind=engine, expire_on_commit=False)
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(RNG_SEED)


@pytest.fixture
def client(db) -> Generator[TestClient, None, None]:
    """FastAPI test client sharing the test session and a seeded RNG."""

    def override_get_db():
        try:
            yield db
        finally:
            pass  # Don't close the session, it's managed by the db fixture

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_rng] = lambda: random.Random(RNG_SEED)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def test_user(db) -> User:
    return create_test_user(db)


@pytest.fixture
def other_user(db) -> User:
    return create_test_user(db)


def auth_header_for(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(str(user.id))}"}


@pytest.fixture
def auth_headers(test_user) -> dict[str, str]:
    """Authorization header for test_user."""
    return auth_header_for(test_user)


@pytest.fixture
def other_auth_headers(other_user) -> dict[str, str]:
    return auth_header_for(other_user)
