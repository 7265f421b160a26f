# tests/conftest.py
from datetime import datetime, timedelta, timezone

import pytest

from core_store.db import models
from core_store.db.session import build_engine, build_session_factory, init_db
from core_store.repositories import CoreEntitiesRepository, UsersRepository
from core_store.services import CoreEntitiesService, UsersService


class FakeClock:
    """Deterministic stand-in for ``core_store.db.models.utcnow``."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture(scope="function")
def engine():
    """In-memory SQLite database with foreign keys enforced."""
    engine = build_engine("sqlite://")
    init_db(engine)
    yield engine
    models.Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture(scope="function")
def session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def clock(monkeypatch):
    """Freezes record timestamps; call ``clock.advance(seconds=...)`` to move on."""
    fake = FakeClock(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))
    monkeypatch.setattr(models, "utcnow", fake)
    return fake


@pytest.fixture
def users_repo(session):
    return UsersRepository(session)


@pytest.fixture
def entities_repo(session):
    return CoreEntitiesRepository(session)


@pytest.fixture
def users_service(session):
    return UsersService.from_session(session)


@pytest.fixture
def entities_service(session):
    return CoreEntitiesService.from_session(session)
