"""
Shared fixtures: an in-memory SQLite database and an API client bound to it.
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from buildtrack.infrastructure.db.database import Base, get_db
from buildtrack.infrastructure.db import models  # noqa: F401
from buildtrack.infrastructure.auth.dependencies import jwt_handler
from buildtrack.infrastructure.events.event_setup import setup_event_handlers


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Database session against a fresh schema."""
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(engine):
    """API client whose requests use the in-memory database."""
    from buildtrack.main import app

    SessionTesting = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = SessionTesting()
        try:
            yield session
        finally:
            session.close()

    setup_event_handlers()
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    token = jwt_handler.create_access_token("user-123")
    return {"Authorization": f"Bearer {token}"}
