from fastapi import APIRouter, Depends, Query

from app import schemas
from app.deps import get_dispatcher
from app.dispatch import Dispatcher

router = APIRouter(tags=["movies"])


@router.get("/movies", response_model=list[schemas.MovieOut])
def get_movies(
    search_query: str = Query(..., min_length=1),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return dispatcher.resolve_movies(search_query)
