from fastapi import APIRouter, Depends

from app import schemas
from app.deps import coordinates_key, get_dispatcher
from app.dispatch import Dispatcher

router = APIRouter(tags=["weather"])


@router.get("/weather", response_model=list[schemas.WeatherOut])
def get_weather(
    key: schemas.SearchKey = Depends(coordinates_key),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    """Daily forecast summaries for a location resolved through /location."""
    return dispatcher.resolve_weather(key.search_query, key.latitude, key.longitude)
