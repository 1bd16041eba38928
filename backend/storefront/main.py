"""Storefront API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map StorefrontError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Both stores bootstrapped on startup via lifespan; a failing store never aborts startup
    - Missing store URLs abort startup (Settings validation)

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Client app mounted AFTER API routes so /api/* takes precedence; unknown non-API
      paths fall back to index.html
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.api.error_handlers import register_error_handlers
from storefront.api.routes import customers, health, orders
from storefront.api.static_files import mount_client_app
from storefront.config import get_settings
from storefront.infrastructure.database import close_stores, init_stores
from storefront.infrastructure.observability import setup_logging
from storefront.infrastructure.store_initializer import initialize_stores

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    managers = init_stores(
        settings.customer_database_url,
        settings.order_database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    results = await initialize_stores(managers.values())
    degraded = [name.value for name, r in results.items() if not r.status.is_ready]
    if degraded:
        logger.warning(f"Storefront API started degraded: {', '.join(degraded)}")
    else:
        logger.info("Storefront API started")
    yield
    logger.info("Storefront API shutting down")
    await close_stores()


app = FastAPI(
    title="Storefront API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(customers.router)
app.include_router(orders.router)

register_error_handlers(app)

mount_client_app(app, settings.static_dir)
