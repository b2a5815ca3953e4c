"""Shared base settings for session-spine services.

Every session-spine transport (REST API, CLI) shares common configuration
needs (host, port, log level, debug mode). ``SessionSpineBaseSettings``
provides these as a base class so each transport only declares its own
fields.

Manifesto:
    Configuration should be explicit, validated, and environment-driven.

    - **Pydantic validation:** Type-checked at startup, not runtime
    - **Environment-driven:** Reads from env vars and .env files
    - **Sensible defaults:** Works out of the box for development

Examples:
    >>> from sessionspine.core.settings import SessionSpineBaseSettings
    >>> class WorkerSettings(SessionSpineBaseSettings):
    ...     model_config = {"env_prefix": "SESSION_SPINE_WORKER_"}
    ...     concurrency: int = 4

Tags:
    settings, configuration, pydantic, environment, session-spine,
    base-class, env-prefix

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SessionSpineBaseSettings(BaseSettings):
    """Common settings shared across session-spine services.

    Fields
    ──────
    host         : Bind address for the HTTP transport
    port         : Bind port for the HTTP transport
    debug        : Enable debug mode (verbose logging, error details)
    log_level    : Structlog log level
    log_json     : Force JSON (True) or console (False) logs; None auto-detects
    """

    model_config = SettingsConfigDict(
        env_prefix="SESSION_SPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Network ──────────────────────────────────────────────────
    host: str = "0.0.0.0"
    port: int = 12100

    # ── Observability ────────────────────────────────────────────
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool | None = Field(
        default=None,
        description="JSON logs when True, console when False, auto-detect when unset",
    )
