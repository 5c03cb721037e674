"""BookStore API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly: health, token/auth-info, GraphQL
    - Global error handlers map ServiceError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized, created and seeded on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Schema creation + seeding gated by settings so Alembic-managed databases stay untouched
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from graphql_demos import __version__
from graphql_demos.bookstore import models  # noqa: F401
from graphql_demos.bookstore.config import get_settings
from graphql_demos.bookstore.database import init_db, peek_db_manager
from graphql_demos.bookstore.db.base import Base
from graphql_demos.bookstore.routes import token
from graphql_demos.bookstore.routes.graphql import build_graphql_router
from graphql_demos.bookstore.seed import seed_demo_data
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
    logger.info("BookStore API started")
    yield
    logger.info("BookStore API shutting down")
    await manager.dispose()


app = FastAPI(title="BookStore GraphQL API", version=__version__, lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(build_health_router("bookstore-api", __version__, peek_db_manager))
app.include_router(token.router)
app.include_router(build_graphql_router(settings.graphiql))

register_error_handlers(app)
