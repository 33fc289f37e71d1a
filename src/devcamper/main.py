from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy import text

from devcamper.config import settings
from devcamper.db.session import shutdown
from devcamper.dependencies import DB
from devcamper.errors import register_error_handlers
from devcamper.geocoder import MapQuestGeocoder
from devcamper.logging import get_logger
from devcamper.middleware import RequestIDMiddleware
from devcamper.routers import bootcamps, courses, reviews, users

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup: open the geocoder's HTTP client. Shutdown: close it and the DB pool."""
    geocoder = MapQuestGeocoder.from_settings(settings)
    app.state.geocoder = geocoder
    logger.info("startup", api_prefix=settings.api_prefix)
    yield
    await geocoder.aclose()
    await shutdown()


app = FastAPI(title="DevCamper API", lifespan=lifespan)
app.add_middleware(RequestIDMiddleware)
register_error_handlers(app)

for module in (bootcamps, courses, reviews, users):
    app.include_router(module.router, prefix=settings.api_prefix)


@app.get("/health")
async def health(db: DB) -> dict[str, str]:
    """Health check; 200 only if the database answers a ping query."""
    await db.execute(text("SELECT 1"))
    return {"status": "ok"}
