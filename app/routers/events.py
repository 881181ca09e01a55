from fastapi import APIRouter, Depends

from app import schemas
from app.deps import coordinates_key, get_dispatcher
from app.dispatch import Dispatcher

router = APIRouter(tags=["events"])


@router.get("/events", response_model=list[schemas.EventOut])
def get_events(
    key: schemas.SearchKey = Depends(coordinates_key),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    """Up to 20 Eventbrite events within 10 miles of the coordinates."""
    return dispatcher.resolve_events(key.search_query, key.latitude, key.longitude)
