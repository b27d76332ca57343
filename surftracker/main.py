import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, get_settings
from .db import Database
from .errors import register_error_handlers
from .middleware import RequestLoggingMiddleware
from .routes import api_router, health_router

logger = logging.getLogger(__name__)

DEV_ORIGINS = ["http://localhost:3000", "http://localhost:19006"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    database: Database = app.state.database
    await database.connect()
    logger.info("Surf Tracker API ready (environment=%s, port=%s)", settings.ENVIRONMENT, settings.PORT)
    yield
    logger.info("Shutting down gracefully...")
    await database.dispose()


def cors_origins(settings: Settings) -> List[str]:
    origins = [] if settings.is_production else list(DEV_ORIGINS)
    if settings.FRONTEND_URL:
        origins.append(settings.FRONTEND_URL)
    return origins


def create_app(
    settings: Optional[Settings] = None, database: Optional[Database] = None
) -> FastAPI:
    """Build the API with its single database pool."""
    settings = settings or get_settings()

    app = FastAPI(title="Surf Tracker", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database or Database.from_settings(settings)

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(settings),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app, settings)

    app.include_router(health_router)
    app.include_router(api_router)
    return app
