from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, Field
from datetime import datetime


class Category(str, Enum):
    LOCATION = "location"
    WEATHER = "weather"
    EVENTS = "events"
    MOVIES = "movies"


# Response shapes: the fields each endpoint sends back to the browser.

class LocationOut(BaseModel):
    search_query: str
    formatted_query: str
    latitude: float
    longitude: float

    class Config:
        from_attributes = True


class WeatherOut(BaseModel):
    time: str
    forecast: str

    class Config:
        from_attributes = True


class EventOut(BaseModel):
    link: str
    name: str
    event_date: str
    summary: str | None = None

    class Config:
        from_attributes = True


class MovieOut(BaseModel):
    title: str
    overview: str | None = None
    average_votes: float | None = None
    total_votes: int | None = None
    image_url: str | None = None
    popularity: float | None = None
    released_on: str | None = None

    class Config:
        from_attributes = True


# Normalized records: what gets cached. Each carries its category tag.

class LocationRecord(LocationOut):
    kind: Literal["location"] = "location"
    created_at: datetime | None = None


class WeatherRecord(WeatherOut):
    kind: Literal["weather"] = "weather"
    search_query: str
    created_at: datetime | None = None


class EventRecord(EventOut):
    kind: Literal["events"] = "events"
    search_query: str
    created_at: datetime | None = None


class MovieRecord(MovieOut):
    kind: Literal["movies"] = "movies"
    search_query: str
    created_at: datetime | None = None


Record = Union[LocationRecord, WeatherRecord, EventRecord, MovieRecord]

RECORD_TYPES = {
    Category.LOCATION: LocationRecord,
    Category.WEATHER: WeatherRecord,
    Category.EVENTS: EventRecord,
    Category.MOVIES: MovieRecord,
}


class SearchKey(BaseModel):
    """The cache key: free text, plus coordinates for weather and events."""

    search_query: str = Field(..., min_length=1)
    latitude: float | None = None
    longitude: float | None = None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None
