"""
API-specific settings.

Extends :class:`~sessionspine.core.settings.SessionSpineBaseSettings` with
parameters that govern the REST transport (prefix, OpenAPI metadata, the
catalog seeding the store, the default site).

All values can be overridden via environment variables prefixed with
``SESSION_SPINE_`` (``SESSION_SPINE_API_PREFIX``, ``SESSION_SPINE_CATALOG_PATH`` ...).
"""

from __future__ import annotations

from pydantic import Field

from sessionspine.core.settings import SessionSpineBaseSettings


class SessionSpineAPISettings(SessionSpineBaseSettings):
    """Settings for the session-spine REST API.

    Order of precedence (highest → lowest):
        1. Environment variables (``SESSION_SPINE_API_PREFIX``, etc.)
        2. ``.env`` file
        3. Defaults below
    """

    # ── API ──────────────────────────────────────────────────────────────
    api_prefix: str = Field(default="/api", description="URL prefix for all endpoints")
    api_title: str = Field(default="session-spine API", description="OpenAPI title")
    api_version: str = Field(default="0.1.0", description="OpenAPI version string")

    # ── Store ────────────────────────────────────────────────────────────
    catalog_path: str | None = Field(
        default=None,
        description="YAML catalog loaded into the in-memory store at startup",
    )

    # ── Tenancy ──────────────────────────────────────────────────────────
    default_site_id: int = Field(
        default=0,
        description="Site used when a request carries no X-Site-Id header",
    )
