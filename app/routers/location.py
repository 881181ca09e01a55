from fastapi import APIRouter, Depends, Query

from app import schemas
from app.deps import get_dispatcher
from app.dispatch import Dispatcher

router = APIRouter(tags=["location"])


# resolves the search string to coordinates; the browser sends these back on every other lookup
@router.get("/location", response_model=schemas.LocationOut)
def get_location(
    data: str = Query(..., min_length=1, description="Free-text address, e.g. 'Seattle, WA'"),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return dispatcher.resolve_location(data)
