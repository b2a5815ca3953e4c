"""Pydantic schemas for the session-spine REST API."""

from sessionspine.api.schemas.common import ErrorDetail, Link, ProblemDetail, SuccessResponse
from sessionspine.api.schemas.workflows import (
    IdAndNameSchema,
    WorkflowDefinitionSchema,
    WorkflowSessionTimeSchema,
)

__all__ = [
    "ErrorDetail",
    "Link",
    "ProblemDetail",
    "SuccessResponse",
    "IdAndNameSchema",
    "WorkflowDefinitionSchema",
    "WorkflowSessionTimeSchema",
]
