"""
FastAPI dependency injection — shared singletons and per-request factories.

Usage in routers::

    from sessionspine.api.deps import OpContext, Settings

    @router.get("/things")
    def get_thing(ctx: OpContext, settings: Settings):
        ...

Manifesto:
    Dependency injection keeps routers thin.  Singletons (settings, the
    repository store) are created once; per-request objects (OpContext)
    carry request-scoped state such as the caller's site through the call
    chain.

Site scoping:
    The site comes from the caller-supplied ``X-Site-Id`` header (or
    ``default_site_id``).  Nothing here authenticates the caller, so the
    header selects a tenant but does not isolate one.  Run the API behind a
    gateway that sets or strips ``X-Site-Id`` before exposing it to more
    than one tenant.

Tags:
    session-spine, api, dependency-injection, singletons, OpContext, site

Doc-Types:
    api-reference
"""

from __future__ import annotations

import uuid
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, Request

from sessionspine.api.settings import SessionSpineAPISettings
from sessionspine.core.logging import bind_context
from sessionspine.core.protocols import RepositoryStore
from sessionspine.core.scheduling import SchedulerManager
from sessionspine.ops.context import OperationContext

# ── Settings (singleton) ─────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_settings() -> SessionSpineAPISettings:
    """Cached settings — loaded once per process."""
    return SessionSpineAPISettings()


# ── Store and scheduler manager (app-scoped) ─────────────────────────────


def get_store(request: Request) -> RepositoryStore:
    """The repository store attached by :func:`sessionspine.api.app.create_app`."""
    return request.app.state.store


def get_scheduler_manager(request: Request) -> SchedulerManager:
    return request.app.state.schedulers


# ── Operation context (per-request) ──────────────────────────────────────


def get_operation_context(
    request: Request,
    store: Annotated[RepositoryStore, Depends(get_store)],
    schedulers: Annotated[SchedulerManager, Depends(get_scheduler_manager)],
    settings: Annotated[SessionSpineAPISettings, Depends(get_settings)],
    site_id: Annotated[
        int | None,
        Header(alias="X-Site-Id", description="Site (tenant) the request is scoped to"),
    ] = None,
) -> OperationContext:
    """Build an :class:`OperationContext` from the current request."""
    request_id = getattr(request.state, "request_id", str(uuid.uuid4()))
    resolved_site = settings.default_site_id if site_id is None else site_id
    bind_context(site_id=resolved_site)
    return OperationContext(
        store=store,
        site_id=resolved_site,
        schedulers=schedulers,
        request_id=request_id,
        caller="api",
    )


# ── Convenience type aliases ─────────────────────────────────────────────

Settings = Annotated[SessionSpineAPISettings, Depends(get_settings)]
Store = Annotated[RepositoryStore, Depends(get_store)]
OpContext = Annotated[OperationContext, Depends(get_operation_context)]
