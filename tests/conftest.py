"""
Pytest configuration.

The app reads DATABASE_URL when app.core.database is imported, so it is
pointed at a throwaway SQLite file before anything from `app` is imported.

Provides fixtures for:
- a fresh schema per test
- a session and repositories bound to it
- a TestClient talking to the app
"""

import os
import tempfile
from datetime import date, timedelta
from pathlib import Path

import pytest

_tmp_dir = tempfile.mkdtemp(prefix="teams-games-")
os.environ["DATABASE_URL"] = f"sqlite:///{Path(_tmp_dir) / 'test.db'}"

from fastapi.testclient import TestClient  # noqa: E402

from app.core.database import Base, SessionLocal, engine  # noqa: E402
from app.main import app  # noqa: E402
from app.models.game import Game  # noqa: E402,F401
from app.models.team import Team  # noqa: E402,F401
from app.repositories.game_repository import GameRepository  # noqa: E402
from app.repositories.team_repository import TeamRepository  # noqa: E402


# ============================================================================
# DATABASE FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def schema():
    """Fresh tables for every test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def team_repo(db):
    return TeamRepository(db)


@pytest.fixture
def game_repo(db):
    return GameRepository(db)


@pytest.fixture
def recent_date():
    """A date safely inside the accepted window."""
    return date.today() - timedelta(days=7)


@pytest.fixture
def two_teams(team_repo):
    home = team_repo.insert("Valur", "valur", "Hlidarendi").value
    away = team_repo.insert("Fram", "fram", None).value
    return home, away


# ============================================================================
# HTTP FIXTURES
# ============================================================================

@pytest.fixture
def client():
    app.dependency_overrides.clear()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
