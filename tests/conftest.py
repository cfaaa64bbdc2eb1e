"""Shared fixtures: an in-memory database wired into the API."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from student_dashboard.database import get_session, init_db
from student_dashboard.main import app


@pytest.fixture
def engine():
    """Create a fresh in-memory database for each test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def override_session(engine):
    """Point the API's session dependency at the test database."""

    def test_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = test_get_session
    yield
    app.dependency_overrides.pop(get_session, None)


@pytest.fixture
def test_client(override_session):
    """Create a test client backed by the in-memory database."""
    return TestClient(app)
