import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    database_url: str
    geocode_api_key: str | None
    weather_api_key: str | None
    eventbrite_api_key: str | None
    movie_api_key: str | None
    port: int
    cors_origins: list[str]
    http_timeout_seconds: float
    log_level: str


def _optional(name: str) -> str | None:
    value = (os.getenv(name) or "").strip()
    return value or None


def get_cors_origins() -> list[str]:
    """
    CORS_ALLOW_ORIGINS is a comma-separated list of origins.
    An empty list means every origin is allowed.
    """
    origins_str = os.getenv("CORS_ALLOW_ORIGINS", "")
    return [origin.strip() for origin in origins_str.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    load_dotenv()
    return Settings(
        database_url=os.getenv("DATABASE_URL") or "sqlite:///./city_explorer.db",
        geocode_api_key=_optional("GEOCODE_API_KEY"),
        weather_api_key=_optional("WEATHER_API_KEY"),
        eventbrite_api_key=_optional("EVENTBRITE_API_KEY"),
        movie_api_key=_optional("MOVIE_API_KEY"),
        port=int(os.getenv("PORT") or 3000),
        cors_origins=get_cors_origins(),
        http_timeout_seconds=float(os.getenv("HTTP_TIMEOUT_SECONDS") or 10),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
