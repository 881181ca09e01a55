"""
Outbound clients for the four upstream APIs.

Every call is a single GET with query parameters encoded by requests; there
are no retries and no pagination. Events and movies are cut to the first
MAX_RESULTS items.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping
from urllib.parse import quote

import requests

from app.config import Settings
from app.errors import ConfigurationError, ShapeMismatchError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
DARKSKY_FORECAST_URL = "https://api.darksky.net/forecast"
EVENTBRITE_SEARCH_URL = "https://www.eventbriteapi.com/v3/events/search/"
TMDB_SEARCH_MOVIE_URL = "https://api.themoviedb.org/3/search/movie"

EVENT_SEARCH_RADIUS = "10mi"
MAX_RESULTS = 20


def _require_api_key(api_key: str | None, env_name: str) -> str:
    if not api_key:
        raise ConfigurationError(f"{env_name} is not set.")
    return api_key


def _request_json(
    session: requests.Session,
    url: str,
    *,
    params: Mapping[str, Any] | None = None,
    timeout_seconds: float = 10.0,
) -> dict[str, Any]:
    headers = {"accept": "application/json"}
    try:
        resp = session.get(url, params=params, headers=headers, timeout=timeout_seconds)
    except requests.RequestException as exc:
        raise UpstreamUnavailableError(f"Request to {url} failed: {exc}") from exc

    if not 200 <= resp.status_code < 300:
        raise UpstreamUnavailableError(
            f"Request to {url} failed with HTTP {resp.status_code}.",
            status_code=resp.status_code,
            body_snippet=(resp.text or "")[:400],
        )

    try:
        payload = resp.json()
    except ValueError as exc:
        raise UpstreamUnavailableError(
            f"{url} returned a non-JSON response.",
            status_code=resp.status_code,
            body_snippet=(resp.text or "")[:400],
        ) from exc

    if not isinstance(payload, dict):
        raise ShapeMismatchError(f"{url} returned unexpected JSON shape (not an object).")
    return payload


def _list_at(payload: Mapping[str, Any], *path: str, source: str) -> list[Any]:
    value: Any = payload
    for key in path:
        value = value.get(key) if isinstance(value, Mapping) else None
    if not isinstance(value, list):
        raise ShapeMismatchError(f"{source} response has no {'.'.join(path)!r} list.")
    return value


class ExternalApis:
    """Holds the API keys and one shared requests session."""

    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        self.settings = settings
        self.session = session or requests.Session()

    def _get(self, url: str, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return _request_json(
            self.session,
            url,
            params=params,
            timeout_seconds=self.settings.http_timeout_seconds,
        )

    def geocode(self, address: str) -> list[dict[str, Any]]:
        api_key = _require_api_key(self.settings.geocode_api_key, "GEOCODE_API_KEY")
        logger.debug("Geocoding %r", address)
        payload = self._get(GEOCODE_URL, {"address": address, "key": api_key})
        return _list_at(payload, "results", source="geocode")

    def forecast(self, latitude: float, longitude: float) -> list[dict[str, Any]]:
        api_key = _require_api_key(self.settings.weather_api_key, "WEATHER_API_KEY")
        logger.debug("Fetching forecast for %s,%s", latitude, longitude)
        # Dark Sky takes the key and coordinates as path segments
        url = f"{DARKSKY_FORECAST_URL}/{quote(api_key, safe='')}/{float(latitude)},{float(longitude)}"
        payload = self._get(url)
        return _list_at(payload, "daily", "data", source="weather")

    def events(self, latitude: float, longitude: float) -> list[dict[str, Any]]:
        token = _require_api_key(self.settings.eventbrite_api_key, "EVENTBRITE_API_KEY")
        logger.debug("Searching events near %s,%s", latitude, longitude)
        payload = self._get(
            EVENTBRITE_SEARCH_URL,
            {
                "location.within": EVENT_SEARCH_RADIUS,
                "location.latitude": float(latitude),
                "location.longitude": float(longitude),
                "token": token,
            },
        )
        return _list_at(payload, "events", source="events")[:MAX_RESULTS]

    def movies(self, query: str) -> list[dict[str, Any]]:
        api_key = _require_api_key(self.settings.movie_api_key, "MOVIE_API_KEY")
        logger.debug("Searching movies for %r", query)
        payload = self._get(TMDB_SEARCH_MOVIE_URL, {"api_key": api_key, "query": query})
        return _list_at(payload, "results", source="movies")[:MAX_RESULTS]
