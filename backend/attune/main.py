"""Attune API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map AttuneError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - ServiceContainer built once per lifespan and stored on app.state

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_app() factory: tests build isolated apps with their own Settings
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from attune import __version__
from attune.api.error_handlers import register_error_handlers
from attune.api.routes import anchor, decisions, health, orchestrator
from attune.config import Settings, get_settings
from attune.core.samples import sample_devices, sample_policy
from attune.infrastructure.database import init_db
from attune.infrastructure.observability import setup_logging
from attune.services.container import ServiceContainer, build_container

logger = logging.getLogger(__name__)


async def seed_demo_user(container: ServiceContainer, user_id: str) -> None:
    """Register the sample devices and Focus Mode policy for one user."""
    for device in sample_devices(user_id):
        await container.orchestrator.register_device(device)
    await container.orchestrator.create_policy(sample_policy(user_id))
    logger.info("Demo user seeded", extra={"user_id": user_id})


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        manager = None
        if settings.store_backend == "sql":
            manager = init_db(
                settings.database_url,
                pool_size=settings.database_pool_size,
                max_overflow=settings.database_max_overflow,
            )
            if settings.database_create_tables:
                await manager.create_all()
        app.state.container = build_container(settings, manager)
        if settings.seed_demo_user:
            await seed_demo_user(app.state.container, settings.seed_demo_user)
        logger.info("Attune API started")
        yield
        if manager is not None:
            await manager.dispose()
        logger.info("Attune API shutting down")

    app = FastAPI(title="Attune API", version=__version__, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(decisions.router)
    app.include_router(orchestrator.router)
    app.include_router(anchor.router)

    register_error_handlers(app)
    return app


app = create_app()
