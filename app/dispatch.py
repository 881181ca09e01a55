"""
Cache-or-fetch dispatch.

For each category: look for rows cached under the search string and return
them untouched; otherwise call the upstream API once, normalize what comes
back, store the batch and return it.
"""
from __future__ import annotations

import logging

from app.clients import ExternalApis
from app.errors import StorageUnavailableError
from app.normalizers import normalize_event, normalize_location, normalize_movie, normalize_weather
from app.schemas import (
    RECORD_TYPES,
    Category,
    EventRecord,
    LocationRecord,
    MovieRecord,
    Record,
    SearchKey,
    WeatherRecord,
)
from app.store import CacheStore

logger = logging.getLogger(__name__)

NEEDS_COORDINATES = {Category.WEATHER, Category.EVENTS}


class Dispatcher:
    def __init__(self, store: CacheStore, apis: ExternalApis) -> None:
        self.store = store
        self.apis = apis

    def resolve(self, category: Category | str, key: SearchKey) -> list[Record]:
        category = Category(category)
        _check_key(category, key)

        rows = self.store.find_by_key(category, key.search_query)
        if rows:
            logger.debug("Cache hit: %s %r (%d rows)", category.value, key.search_query, len(rows))
            record_type = RECORD_TYPES[category]
            return [record_type.model_validate(row) for row in rows]

        logger.info("Cache miss: %s %r", category.value, key.search_query)
        return self.fetch(category, key)

    def fetch(self, category: Category | str, key: SearchKey) -> list[Record]:
        """
        The miss path on its own: call upstream, normalize and store.

        Storing replaces whatever is cached under the key, so a retry or two
        racing requests end up with one batch. A failed write is logged and
        the fresh records are returned anyway.
        """
        category = Category(category)
        _check_key(category, key)

        records = self._fetch_records(category, key)
        try:
            self.store.replace(category, key.search_query, records)
        except StorageUnavailableError:
            logger.exception("Could not cache %s for %r; serving uncached", category.value, key.search_query)
        return records

    def _fetch_records(self, category: Category, key: SearchKey) -> list[Record]:
        query = key.search_query
        if category is Category.LOCATION:
            return [normalize_location(query, self.apis.geocode(query))]
        if category is Category.WEATHER:
            days = self.apis.forecast(key.latitude, key.longitude)
            return [normalize_weather(query, day) for day in days]
        if category is Category.EVENTS:
            events = self.apis.events(key.latitude, key.longitude)
            return [normalize_event(query, event) for event in events]
        return [normalize_movie(query, movie) for movie in self.apis.movies(query)]

    def resolve_location(self, address: str) -> LocationRecord:
        return self.resolve(Category.LOCATION, SearchKey(search_query=address))[0]

    def resolve_weather(self, search_query: str, latitude: float, longitude: float) -> list[WeatherRecord]:
        key = SearchKey(search_query=search_query, latitude=latitude, longitude=longitude)
        return self.resolve(Category.WEATHER, key)

    def resolve_events(self, search_query: str, latitude: float, longitude: float) -> list[EventRecord]:
        key = SearchKey(search_query=search_query, latitude=latitude, longitude=longitude)
        return self.resolve(Category.EVENTS, key)

    def resolve_movies(self, search_query: str) -> list[MovieRecord]:
        return self.resolve(Category.MOVIES, SearchKey(search_query=search_query))


def _check_key(category: Category, key: SearchKey) -> None:
    if category in NEEDS_COORDINATES and not key.has_coordinates:
        raise ValueError(f"{category.value} lookups need latitude and longitude")
