"""
Shared test fixtures.

Every test gets a fresh in-memory SQLite ledger. StaticPool keeps
the single connection alive for the whole test so the schema is
not lost between sessions, and lets TestClient's worker thread
reuse it.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from spent_ledger.main import app
from spent_ledger.models.base import Base, get_db
from spent_ledger.services.category_service import CategoryService
from spent_ledger.services.container_service import ContainerService


engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture(autouse=True)
def ledger_schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """A session on the test ledger for calling services directly."""
    session = TestSessionLocal()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def book(db_session):
    """The default container with the built-in categories seeded."""
    container = ContainerService(db_session).ensure_default()
    CategoryService(db_session).seed_defaults()
    db_session.commit()
    return container


@pytest.fixture
def client(db_session):
    """
    A TestClient whose requests share db_session.

    Routes commit and roll back on this same session, so a test
    can mix HTTP calls with direct service or ORM access.
    """
    app.dependency_overrides[get_db] = lambda: db_session
    yield TestClient(app)
    app.dependency_overrides.clear()
