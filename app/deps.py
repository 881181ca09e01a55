"""
Per-request wiring: a session-bound cache store plus the upstream clients.
"""
import requests
from fastapi import Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.clients import ExternalApis
from app.config import get_settings
from app.database import get_db
from app.dispatch import Dispatcher
from app.schemas import SearchKey
from app.store import CacheStore


def get_external_apis():
    """One requests session per request, closed with it."""
    session = requests.Session()
    try:
        yield ExternalApis(get_settings(), session=session)
    finally:
        session.close()


def get_dispatcher(
    db: Session = Depends(get_db),
    apis: ExternalApis = Depends(get_external_apis),
) -> Dispatcher:
    return Dispatcher(CacheStore(db), apis)


def coordinates_key(
    search_query: str | None = Query(None, min_length=1),
    latitude: float | None = Query(None, ge=-90, le=90),
    longitude: float | None = Query(None, ge=-180, le=180),
    data_search_query: str | None = Query(None, alias="data[search_query]", min_length=1),
    data_latitude: float | None = Query(None, alias="data[latitude]", ge=-90, le=90),
    data_longitude: float | None = Query(None, alias="data[longitude]", ge=-180, le=180),
) -> SearchKey:
    """
    Weather and events take the location the browser got back from /location,
    either as flat params or nested under data[...] the way jQuery serializes it.
    """
    search_query = search_query or data_search_query
    latitude = latitude if latitude is not None else data_latitude
    longitude = longitude if longitude is not None else data_longitude

    missing = [
        name
        for name, value in (("search_query", search_query), ("latitude", latitude), ("longitude", longitude))
        if value is None
    ]
    if missing:
        raise HTTPException(status_code=422, detail=f"Missing query parameter(s): {', '.join(missing)}")
    return SearchKey(search_query=search_query, latitude=latitude, longitude=longitude)
