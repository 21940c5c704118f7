"""Pytest fixtures and configuration for LeeTracker tests."""

import pytest
from datetime import datetime, timedelta
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
from unittest.mock import patch

from leetracker.database.database import Base, get_db
from leetracker.database.repository import ProblemRepository
from leetracker.database.daily_summary_repository import DailySummaryRepository
from leetracker.database.user_repository import UserRepository
from leetracker.database.verification_repository import VerificationRepository
from leetracker.database.vocabulary_repository import (
    DifficultyRepository,
    LanguageRepository,
    TagRepository,
)
from leetracker.models.problem import Problem


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


class FakeProfileClient:
    """Stands in for LeetCodeClient; bios are set per test."""

    def __init__(self):
        self.bios = {}
        self.calls = []

    def fetch_bio(self, username):
        self.calls.append(username)
        return self.bios.get(username)


@pytest.fixture(scope="function")
def db_session(test_user_id):
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test.
    Also creates a test user in the database.
    """
    from leetracker.database.models import UserDB

    # StaticPool keeps the single in-memory connection alive across sessions
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    now = datetime.utcnow()
    session.add(UserDB(id=test_user_id, username="testuser", created_at=now, updated_at=now))
    session.commit()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def test_user_id():
    """Test user ID for multi-user testing."""
    return "test-user-123"


@pytest.fixture
def other_user_id(db_session):
    """A second user, created in the database."""
    return UserRepository(db_session).get_or_create("otheruser").id


@pytest.fixture
def user_repository(db_session: Session):
    return UserRepository(db_session)


@pytest.fixture
def problem_repository(db_session: Session):
    """Create a ProblemRepository instance for testing."""
    return ProblemRepository(db_session)


@pytest.fixture
def summary_repository(db_session: Session):
    return DailySummaryRepository(db_session)


@pytest.fixture
def verification_repository(db_session: Session):
    return VerificationRepository(db_session)


@pytest.fixture
def tag_repository(db_session: Session):
    return TagRepository(db_session)


@pytest.fixture
def language_repository(db_session: Session):
    return LanguageRepository(db_session)


@pytest.fixture
def difficulty_repository(db_session: Session):
    return DifficultyRepository(db_session)


@pytest.fixture
def profile_client():
    return FakeProfileClient()


@pytest.fixture
def sample_problem_base(test_user_id):
    """Base problem data for creating test problems.

    Returns a dict with default problem attributes that can be overridden.
    """
    now = datetime.utcnow()
    return {
        "id": "problem-1",
        "user_id": test_user_id,
        "title": "Two Sum",
        "leetcode_id": 1,
        "difficulty": "Easy",
        "language": "Python",
        "tags": ["Array", "Hash Table"],
        "time_spent_min": 15,
        "solved_at": now,
        "created_at": now,
        "updated_at": now,
    }


@pytest.fixture
def make_problem(sample_problem_base):
    """Factory for in-memory Problem objects (no database)."""
    counter = {"n": 0}

    def _make(**overrides) -> Problem:
        counter["n"] += 1
        data = {**sample_problem_base, "id": f"problem-{counter['n']}", **overrides}
        return Problem(**data)

    return _make


@pytest.fixture
def stored_problem(problem_repository, test_user_id):
    """A problem persisted for the test user."""
    return problem_repository.create(
        user_id=test_user_id,
        title="Two Sum",
        leetcode_id=1,
        difficulty_level="Easy",
        language_name="Python",
        time_spent_min=15,
        tag_names=["Array", "Hash Table"],
        solved_at=datetime.utcnow() - timedelta(hours=1),
    )


@pytest.fixture
def test_client(db_session: Session, profile_client):
    """Create a FastAPI test client with overridden database and profile lookup dependencies."""
    from leetracker.api.app import app
    from leetracker.api.dependencies import get_profile_client

    # Override the get_db dependency to use our test database session
    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_profile_client] = lambda: profile_client

    # Keep startup from touching the configured database
    with patch("leetracker.api.app.init_db"):
        with TestClient(app) as client:
            yield client

    # Clean up dependency overrides
    app.dependency_overrides.clear()
