"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from bizdev_hydration.config import Settings
from bizdev_hydration.db.engine import DatabaseEngine
from bizdev_hydration.hydrator import TemplateHydrator
from bizdev_hydration.stores.sql import (
    SqlContactStore,
    SqlSnippetStore,
    SqlTemplateStore,
    SqlTenantStore,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: create DB engine, stores and hydrator. Shutdown: dispose."""
    settings: Settings = app.state.settings
    db = DatabaseEngine(settings)
    app.state.db = db
    app.state.hydrator = TemplateHydrator(
        contacts=SqlContactStore(db.session, settings.retry),
        tenants=SqlTenantStore(db.session, settings.retry),
        snippets=SqlSnippetStore(db.session, settings.retry),
    )
    app.state.templates = SqlTemplateStore(db.session, settings.retry)
    logger.info("database_engine_created")
    logger.info("hydrator_created", variables=len(app.state.hydrator.catalog))
    yield
    await db.close()
    logger.info("shutdown_complete")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and return the FastAPI application."""
    if settings is None:
        settings = Settings()  # type: ignore[call-arg]

    app = FastAPI(
        title="BizDev Template Hydration",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    from bizdev_hydration.routers.templates import router as templates_router

    app.include_router(templates_router)

    @app.get("/health")
    async def health():
        return {"status": "ok", "service": "bizdev-hydration"}

    return app
