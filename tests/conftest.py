"""
Pytest fixtures for the game collection API.

- ``settings`` / ``app`` / ``client``: an app built by create_app() on a
  temporary SQLite file, driven through FastAPI's TestClient (startup and
  shutdown events run inside the ``with`` block).
- ``session`` / ``repo`` / ``service``: an in-memory database for service
  level tests, with a controllable clock.
"""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from app.core.config import Settings
from app.db.repositories.games import GameRepository
from app.db.session import build_engine, init_db
from app.features.games.services import GameService
from app.main import create_app


class FakeClock:
    """Clock returning a fixed instant until advanced."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture()
def settings(tmp_path):
    return Settings(
        ENV="test",
        DATABASE_URL=f"sqlite:///{tmp_path / 'games_test.db'}",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def api(settings):
    """Prefix of the versioned routes."""
    return settings.API_PREFIX


@pytest.fixture()
def session():
    engine = build_engine("sqlite://")
    init_db(engine)
    with Session(engine) as s:
        yield s
    engine.dispose()


@pytest.fixture()
def repo(session):
    return GameRepository(session)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def service(repo, clock):
    return GameService(repo=repo, clock=clock)


@pytest.fixture()
def hades():
    return {"titre": "Hades", "genre": ["Action"], "plateforme": ["PC"]}
