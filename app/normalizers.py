"""
Pure transforms from raw upstream items to the cached record shapes.

Each normalizer validates the fields it reads and raises ShapeMismatchError
when the upstream payload doesn't look the way we expect.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

from pydantic import ValidationError

from app.errors import ShapeMismatchError
from app.schemas import Category, EventRecord, LocationRecord, MovieRecord, WeatherRecord

TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w200"

DISPLAY_DATE_FORMAT = "%a %b %d %Y"

_MISSING = object()


def _now_utc() -> datetime:
    # naive UTC, same as the column defaults in app/models.py
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _dig(raw: Any, *path: str | int, category: Category, default: Any = _MISSING) -> Any:
    value = raw
    for step in path:
        try:
            value = value[step]
        except (KeyError, IndexError, TypeError):
            value = None
        if value is None:
            if default is not _MISSING:
                return default
            dotted = ".".join(str(p) for p in path)
            raise ShapeMismatchError(f"{category.value} response is missing {dotted!r}")
    return value


def _build(record_type, category: Category, **fields):
    try:
        return record_type(**fields)
    except ValidationError as exc:
        raise ShapeMismatchError(f"{category.value} response has unexpected field types: {exc}") from exc


def display_date(value: datetime) -> str:
    """Format like "Mon Oct 19 2026"."""
    return value.strftime(DISPLAY_DATE_FORMAT)


def normalize_location(search_query: str, results: Sequence[Mapping[str, Any]]) -> LocationRecord:
    """Take the first geocode result; an empty result list means no match."""
    category = Category.LOCATION
    if not results:
        raise ShapeMismatchError(f"no geocode results for {search_query!r}")
    first = results[0]
    return _build(
        LocationRecord,
        category,
        search_query=search_query,
        formatted_query=_dig(first, "formatted_address", category=category),
        latitude=_dig(first, "geometry", "location", "lat", category=category),
        longitude=_dig(first, "geometry", "location", "lng", category=category),
        created_at=_now_utc(),
    )


def normalize_weather(search_query: str, day: Mapping[str, Any]) -> WeatherRecord:
    category = Category.WEATHER
    timestamp = _dig(day, "time", category=category)
    try:
        when = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError) as exc:
        raise ShapeMismatchError(f"weather time is not a unix timestamp: {timestamp!r}") from exc
    return _build(
        WeatherRecord,
        category,
        time=display_date(when),
        forecast=_dig(day, "summary", category=category),
        search_query=search_query,
        created_at=_now_utc(),
    )


def normalize_event(search_query: str, event: Mapping[str, Any]) -> EventRecord:
    category = Category.EVENTS
    start_local = _dig(event, "start", "local", category=category)
    try:
        starts = datetime.fromisoformat(start_local)
    except (TypeError, ValueError) as exc:
        raise ShapeMismatchError(f"event start is not an ISO date: {start_local!r}") from exc
    return _build(
        EventRecord,
        category,
        link=_dig(event, "url", category=category),
        name=_dig(event, "name", "text", category=category),
        event_date=display_date(starts),
        summary=_dig(event, "description", "text", category=category, default=None),
        search_query=search_query,
        created_at=_now_utc(),
    )


def normalize_movie(search_query: str, movie: Mapping[str, Any]) -> MovieRecord:
    category = Category.MOVIES
    poster_path = _dig(movie, "poster_path", category=category, default=None)
    return _build(
        MovieRecord,
        category,
        title=_dig(movie, "title", category=category),
        overview=_dig(movie, "overview", category=category, default=None),
        average_votes=_dig(movie, "vote_average", category=category, default=None),
        total_votes=_dig(movie, "vote_count", category=category, default=None),
        image_url=f"{TMDB_IMAGE_BASE_URL}{poster_path}" if poster_path else None,
        popularity=_dig(movie, "popularity", category=category, default=None),
        released_on=_dig(movie, "release_date", category=category, default=None) or None,
        search_query=search_query,
        created_at=_now_utc(),
    )
