"""
Pytest configuration and fixtures

Shared fixtures for all tests:
- In-memory SQLite engine/session with the likability tables
- Rollup row factory
- FastAPI TestClient with get_db bound to the test session
- Invalid weight override
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import settings
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models import GameEngagementRollup
from app.services.likability.types import EngagementRollupRow, Genre
from app.services.likability.weights import get_weight_table


# Database fixtures

@pytest.fixture
def engine():
    """In-memory SQLite shared by every session in the test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def add_rollup(db):
    """Insert game_engagement_rollup rows: add_rollup("g1", "runner", sessions=10, ...)"""

    def _add(game_id, genre="arcade", **counters):
        row = GameEngagementRollup(game_id=game_id, genre=genre, **counters)
        db.add(row)
        db.commit()
        return row

    return _add


@pytest.fixture
def client(session_factory):
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def bad_weight_override(monkeypatch):
    """LIKABILITY_WEIGHTS_JSON with a positive abandonment weight (rejected on load)"""
    monkeypatch.setattr(settings, "likability_weights_json", '{"runner": {"abandonmentRate": 0.2}}')
    get_weight_table.cache_clear()
    yield
    monkeypatch.undo()
    get_weight_table.cache_clear()


# Sample data

def rollup_row(game_id="g", genre=Genre.ARCADE, **counters) -> EngagementRollupRow:
    return EngagementRollupRow(game_id=game_id, genre=genre, **counters)


@pytest.fixture
def runner_pair():
    """Two runner games with known counters (A weaker, B stronger)"""
    game_a = dict(sessions=100, completions=40, total_seconds=6000, restarts=20, shares=10, abandons=60, favorites=5)
    game_b = dict(sessions=50, completions=45, total_seconds=9000, restarts=5, shares=25, abandons=5, favorites=20)
    return game_a, game_b


# Test utilities

def assert_normalized_in_unit_range(scored):
    """Every component of every scored game has normalized value in [0, 1]"""
    for game in scored:
        for c in game.components:
            assert 0.0 <= c.normalized_value <= 1.0, (game.game_id, c.key, c.normalized_value)
