import os

# must be set before app.database builds its engine
os.environ["DATABASE_URL"] = "sqlite://"

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401  (registers the tables on Base)
from app.clients import ExternalApis
from app.config import Settings
from app.database import Base, get_db
from app.deps import get_external_apis
from app.dispatch import Dispatcher
from app.store import CacheStore

SEATTLE_GEOCODE = {
    "results": [
        {
            "formatted_address": "Seattle, WA, USA",
            "geometry": {"location": {"lat": 47.6062, "lng": -122.3321}},
        }
    ]
}

DARKSKY_DAYS = [
    {"time": 1760832000, "summary": "Light rain throughout the day."},
    {"time": 1760918400, "summary": "Partly cloudy in the morning."},
]

EVENTBRITE_EVENT = {
    "url": "https://www.eventbrite.com/e/seattle-jazz-night-123",
    "name": {"text": "Seattle Jazz Night"},
    "description": {"text": "An evening of live jazz."},
    "start": {"local": "2026-10-24T19:00:00"},
}

INCEPTION = {
    "title": "Inception",
    "overview": "A thief who steals corporate secrets through dream-sharing technology.",
    "vote_average": 8.8,
    "vote_count": 30000,
    "poster_path": "/abc.jpg",
    "popularity": 60.0,
}


def make_settings(**overrides) -> Settings:
    values = dict(
        database_url="sqlite://",
        geocode_api_key="geo-key",
        weather_api_key="sky-key",
        eventbrite_api_key="eb-token",
        movie_api_key="tmdb-key",
        port=3000,
        cors_origins=[],
        http_timeout_seconds=5.0,
        log_level="INFO",
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def store(db_session):
    return CacheStore(db_session)


@pytest.fixture
def apis():
    """Upstream clients replaced by a mock so tests can count outbound calls."""
    return MagicMock(spec=ExternalApis)


@pytest.fixture
def dispatcher(store, apis):
    return Dispatcher(store, apis)


@pytest.fixture
def client(db_session, apis):
    from app.main import app

    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_external_apis] = lambda: apis
    yield TestClient(app)
    app.dependency_overrides.clear()
