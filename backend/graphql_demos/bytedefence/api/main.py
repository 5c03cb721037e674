"""ByteDefence API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly: health, auth/login, GraphQL
    - Bearer middleware resolves the principal for every route except login
    - Global error handlers map ServiceError → structured JSON responses
    - CORS: configured origins, methods GET/POST/OPTIONS, headers Content-Type/Authorization
    - Database initialized, created and seeded on startup via lifespan
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from graphql_demos import __version__
from graphql_demos.bytedefence.api import models  # noqa: F401
from graphql_demos.bytedefence.api.config import get_settings
from graphql_demos.bytedefence.api.database import init_db, peek_db_manager
from graphql_demos.bytedefence.api.db.base import Base
from graphql_demos.bytedefence.api.dependencies import (
    get_auth_service, get_notification_service,
)
from graphql_demos.bytedefence.api.middleware import install_bearer_middleware
from graphql_demos.bytedefence.api.routes import auth, graphql
from graphql_demos.bytedefence.api.seed import seed_demo_data
from graphql_demos.common.error_handlers import register_error_handlers
from graphql_demos.common.health import build_health_router
from graphql_demos.common.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_schema:
        await manager.create_all(Base.metadata)
    if settings.seed_demo_data:
        await seed_demo_data(manager)
    logger.info("ByteDefence API started")
    yield
    logger.info("ByteDefence API shutting down")
    await get_notification_service().aclose()
    await manager.dispose()


app = FastAPI(title="ByteDefence GraphQL API", version=__version__, lifespan=lifespan)

install_bearer_middleware(app, get_auth_service)

# Added last so it wraps the bearer middleware and answers preflights first
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(build_health_router("bytedefence-api", __version__, peek_db_manager))
app.include_router(auth.router)
app.include_router(graphql.router)

register_error_handlers(app)
