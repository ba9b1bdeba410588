"""Product Catalog API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ProductApiError to JSON bodies with a "message"
    - Every product route passes through the rate limiter; health probes do not
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Tables created on startup when database_create_schema is set (no migrations)
    - OpenAPI UI served at /api-docs, the path existing clients already use
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from product_api.api.error_handlers import register_error_handlers
from product_api.api.routes import health, products
from product_api.config import get_settings
from product_api.infrastructure.database import init_db
from product_api.infrastructure.observability import setup_logging
from product_api.infrastructure.rate_limit import SlidingWindowRateLimiter

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
        await manager.create_schema()
    logger.info("Product Catalog API started")
    yield
    await manager.dispose()
    logger.info("Product Catalog API shutting down")


settings = get_settings()

rate_limiter = SlidingWindowRateLimiter(
    settings.rate_limit_requests,
    settings.rate_limit_window_seconds,
    enabled=settings.rate_limit_enabled,
)

app = FastAPI(
    title="Products API",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/api-docs",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
# Rate limit applies to product routes only
app.include_router(products.router, dependencies=[Depends(rate_limiter)])

register_error_handlers(app)
