# Entrypoint for FastAPI app
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from app.config import get_settings
from app.database import Base, engine
from app.errors import CityExplorerError
from app.routers import events, location, movies, weather

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# create tables
Base.metadata.create_all(bind=engine)

app = FastAPI(title="City Explorer")

# no configured origins: allow all, but without credentials
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins or ["*"],
    allow_credentials=bool(settings.cors_origins),
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(location.router)
app.include_router(weather.router)
app.include_router(events.router)
app.include_router(movies.router)


@app.exception_handler(CityExplorerError)
async def city_explorer_error_handler(request: Request, exc: CityExplorerError):
    # upstream, shape and storage failures all look the same to the browser
    logger.warning("%s failed: %s: %s", request.url.path, type(exc).__name__, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal 500 error!"})


@app.get("/", response_class=PlainTextResponse)
def home():
    return "Connected!"


def run() -> None:
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port)
