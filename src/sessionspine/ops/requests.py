"""
Typed request objects for operations.

Each dataclass represents the *input* contract for a single operation
function.  Requests carry only transport-agnostic data -- no raw HTTP
query strings, no Typer params.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sessionspine.core.models import LocalTimeOrInstant, SessionTimeTruncate


@dataclass(frozen=True, slots=True)
class GetWorkflowByNameRequest:
    """Request for :func:`sessionspine.ops.workflows.get_workflow_by_name`.

    Attributes:
        repository: Repository name (required).
        name: Workflow name (required).
        revision: Revision name; ``None`` selects the latest revision.
    """

    repository: str | None = None
    name: str | None = None
    revision: str | None = None


@dataclass(frozen=True, slots=True)
class GetWorkflowByIdRequest:
    """Request for :func:`sessionspine.ops.workflows.get_workflow_by_id`."""

    workflow_id: int


@dataclass(frozen=True, slots=True)
class GetTruncatedSessionTimeRequest:
    """Request for :func:`sessionspine.ops.workflows.get_truncated_session_time`.

    Attributes:
        workflow_id: Workflow definition id.
        session_time: ISO-8601 text or datetime; naive values are local to the
            workflow's zone.
        mode: Truncation mode name or member; ``None`` returns the converted
            time unchanged.
    """

    workflow_id: int
    session_time: str | datetime | LocalTimeOrInstant | None = None
    mode: str | SessionTimeTruncate | None = None
