"""
Common API schemas — shared envelopes and RFC 7807 errors.

Every endpoint returns either :class:`SuccessResponse` (200) or
:class:`ProblemDetail` (4xx/5xx).

Response Envelope Conventions:
    - All 2xx responses use ``SuccessResponse[T]``
    - All 4xx/5xx responses use ``ProblemDetail`` (RFC 7807)
    - ``elapsed_ms`` tracks server-side processing time

Doc-Types: API_REFERENCE
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


# ── Links (HATEOAS-lite) ────────────────────────────────────────────────


class Link(BaseModel):
    """Hypermedia link for resource navigation."""

    rel: str = Field(description="Link relation (e.g., 'self', 'workflow')")
    href: str = Field(description="Target URL")
    method: str = Field(default="GET", description="HTTP method for this link")


# ── RFC 7807 Problem Detail ─────────────────────────────────────────────


class ErrorDetail(BaseModel):
    """Structured error detail for parameter-level errors."""

    code: str = Field(description="Machine-readable error code (e.g., 'INVALID_INPUT')")
    message: str = Field(description="Human-readable error description")
    field: str | None = Field(default=None, description="Parameter name if error is parameter-specific")


class ProblemDetail(BaseModel):
    """RFC 7807 «Problem Details for HTTP APIs».

    Used as the canonical error envelope for all non-2xx responses.

    Error Codes:
        - ``INVALID_INPUT`` (400): Missing or malformed parameter, or a
          schedule-based mode on a workflow without a schedule
        - ``NOT_FOUND`` (404): Repository, revision or workflow does not exist
        - ``INTERNAL`` (500): Unexpected server error

    Example:
        {
            "type": "about:blank",
            "title": "Revision not found: rev9 (repository sales)",
            "status": 404,
            "detail": "revision",
            "instance": "/api/workflow?repository=sales&revision=rev9&name=daily_report",
            "errors": []
        }
    """

    type: str = Field(default="about:blank", description="Error type URI (usually 'about:blank')")
    title: str = Field(description="Short human-readable error summary")
    status: int = Field(description="HTTP status code (e.g., 400, 404, 500)")
    detail: str = Field(default="", description="Human-readable explanation of the error")
    instance: str = Field(default="", description="URI of the failing request")
    errors: list[ErrorDetail] = Field(
        default_factory=list,
        description="List of parameter-level error details",
    )


# ── Success Envelope ─────────────────────────────────────────────────────


class SuccessResponse(BaseModel, Generic[T]):
    """Standard success envelope for single-item responses."""

    data: T = Field(description="Response payload (type varies by endpoint)")
    elapsed_ms: float = Field(default=0.0, description="Server-side processing time in milliseconds")
    links: list[Link] = Field(
        default_factory=list,
        description="HATEOAS navigation links",
    )
