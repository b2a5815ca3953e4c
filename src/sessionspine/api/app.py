"""
FastAPI application factory.

``create_app()`` wires logging, the repository store, middleware, routers,
error handlers and lifespan events into a single ``FastAPI`` instance.

Manifesto:
    The app factory is the single composition root — the store, the
    scheduler manager, middleware and routers are wired here so the rest
    of the codebase never touches ``FastAPI`` directly.

Tags:
    session-spine, api, app-factory, composition-root, FastAPI

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from sessionspine.api.deps import get_settings
from sessionspine.api.middleware.errors import unhandled_exception_handler
from sessionspine.api.middleware.request_id import RequestIDMiddleware
from sessionspine.api.settings import SessionSpineAPISettings
from sessionspine.core.logging import configure_logging, get_logger
from sessionspine.core.protocols import RepositoryStore
from sessionspine.core.repositories import InMemoryRepositoryStore, load_catalog
from sessionspine.core.scheduling import SchedulerManager

log = get_logger("sessionspine.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan — startup / shutdown hooks."""
    log.info(
        "api.starting",
        version=app.version,
        catalog=app.state.settings.catalog_path,
        default_site_id=app.state.settings.default_site_id,
    )
    yield
    log.info("api.shutting_down")


def _build_store(settings: SessionSpineAPISettings) -> RepositoryStore:
    if settings.catalog_path:
        return load_catalog(settings.catalog_path)
    log.warning("api.empty_store", reason="catalog_path is not set")
    return InMemoryRepositoryStore()


def create_app(
    *,
    settings: SessionSpineAPISettings | None = None,
    store: RepositoryStore | None = None,
) -> FastAPI:
    """Build and return a fully-configured FastAPI application.

    Parameters
    ----------
    settings : SessionSpineAPISettings | None
        Override settings (useful for testing).  When ``None`` the cached
        singleton from :func:`get_settings` is used.
    store : RepositoryStore | None
        Repository store to serve from.  When ``None`` the store is loaded
        from ``settings.catalog_path`` (empty if unset).
    """

    settings = settings or get_settings()
    configure_logging(level=settings.log_level, json_format=settings.log_json)

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        openapi_url=f"{settings.api_prefix}/openapi.json",
    )

    # Stash settings and collaborators on app state for dependencies
    app.state.settings = settings
    app.state.store = store if store is not None else _build_store(settings)
    app.state.schedulers = SchedulerManager()

    # Override DI so endpoints use the provided settings
    app.dependency_overrides[get_settings] = lambda: settings

    # ── Middleware ───────────────────────────────────────────────────
    app.add_middleware(RequestIDMiddleware)

    # ── Exception handlers ───────────────────────────────────────────
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # ── Routers ──────────────────────────────────────────────────────
    from sessionspine.api.routers import workflows

    app.include_router(workflows.router, prefix=settings.api_prefix, tags=["workflows"])

    return app
