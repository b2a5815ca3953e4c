"""
Typed response objects for operations.

Each dataclass represents the *output* of a single operation beyond the
generic :class:`OperationResult` envelope.  Responses carry only domain
data -- no HTTP status codes, no CLI formatting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sessionspine.core.models import StoredWorkflowDefinitionWithRepository


@dataclass(frozen=True, slots=True)
class IdAndName:
    """Compact reference to a repository."""

    id: int
    name: str


@dataclass(frozen=True, slots=True)
class WorkflowDefinitionView:
    """A workflow definition as exposed to callers."""

    id: int
    name: str
    repository: IdAndName
    revision: str
    time_zone: str
    config: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def of(cls, found: StoredWorkflowDefinitionWithRepository) -> WorkflowDefinitionView:
        return cls(
            id=found.id,
            name=found.name,
            repository=IdAndName(id=found.repository.id, name=found.repository.name),
            revision=found.revision_name,
            time_zone=found.time_zone.key,
            config=dict(found.config),
        )


@dataclass(frozen=True, slots=True)
class WorkflowSessionTime:
    """Result payload for :func:`sessionspine.ops.workflows.get_truncated_session_time`.

    Attributes:
        workflow_id: Workflow the session time was computed for.
        repository: Owning repository.
        revision: Revision the workflow belongs to.
        session_time: ISO-8601 instant rendered with the workflow zone's offset.
        session_time_utc: The same instant in UTC (``Z`` suffix).
        time_zone: The workflow's IANA zone.
    """

    workflow_id: int
    repository: IdAndName
    revision: str
    session_time: str
    session_time_utc: str
    time_zone: str
