"""Domain Registry API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map RegistryError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized and shared domains seeded on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Seeding runs through SharedDomainRegistry.find_or_create_shared, so it is
      idempotent across restarts and replicas
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import app.infrastructure.database as database
from app.api.error_handlers import register_error_handlers
from app.infrastructure.observability import setup_logging
from app.config import get_settings
from app.api.routes import domains, health, organizations, route_bindings
from app.core.serving_domain import default_serving_domain_name
from app.services.shared_domains import SharedDomainRegistry, seed_shared_domains

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        isolation_level=settings.database_isolation_level,
    )
    seeded = await seed_shared_domains(
        SharedDomainRegistry(database.db_manager.session), settings,
    )
    logger.info(f"Domain registry started ({len(seeded)} shared domain(s) seeded)")
    yield
    default_serving_domain_name.clear()
    await database.db_manager.dispose()
    logger.info("Domain registry shutting down")


app = FastAPI(
    title="Domain Registry API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(domains.router)
app.include_router(organizations.router)
app.include_router(route_bindings.router)

register_error_handlers(app)
