"""Dataclass models shared by the resolver, truncator, ops layer and API.

Modules
-------
repository
    Repositories, revisions and workflow definitions (stored entities).
session
    Raw session times, truncation modes and schedule occurrences.

Tags:
    session-spine, models, dataclasses, data-contracts

Doc-Types:
    package-overview, module-index
"""

from sessionspine.core.models.repository import (
    StoredRepository,
    StoredRevision,
    StoredWorkflowDefinition,
    StoredWorkflowDefinitionWithRepository,
)
from sessionspine.core.models.session import (
    LocalTimeOrInstant,
    ScheduleTime,
    SessionTimeTruncate,
)

__all__ = [
    "StoredRepository",
    "StoredRevision",
    "StoredWorkflowDefinition",
    "StoredWorkflowDefinitionWithRepository",
    "LocalTimeOrInstant",
    "ScheduleTime",
    "SessionTimeTruncate",
]
