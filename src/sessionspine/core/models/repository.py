"""Repository, revision and workflow definition models.

Manifesto:
    The resolver, the ops layer and the API all pass the same three
    entities around.  Typed, frozen dataclasses keep their shape in one
    place and make "definitions are immutable" a property of the type
    rather than a convention.

A repository owns an ordered history of revisions; every revision owns
its own set of workflow definitions.  Editing a workflow produces a new
revision and therefore a new definition row, so nothing here is ever
mutated after creation.

Tags:
    session-spine, models, dataclasses, repository, revision, workflow

Doc-Types:
    api-reference, data-model
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class StoredRepository:
    """Named project container owned by one site (tenant)."""

    id: int
    site_id: int
    name: str
    created_at: datetime | None = None


# ---------------------------------------------------------------------------
# Revision
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class StoredRevision:
    """Immutable snapshot of a repository's workflow definitions."""

    id: int
    repository_id: int
    name: str  # often a content hash
    created_at: datetime | None = None


# ---------------------------------------------------------------------------
# Workflow definition
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class StoredWorkflowDefinition:
    """A named workflow belonging to exactly one revision.

    Attributes:
        id: Workflow definition id (unique across revisions)
        revision_id: Owning revision
        name: Workflow name, unique within the revision
        time_zone: IANA zone all session-time arithmetic happens in
        config: Workflow configuration; ``config["schedule"]`` holds the
            optional schedule block (``daily>: 07:00:00`` etc.)
    """

    id: int
    revision_id: int
    name: str
    time_zone: ZoneInfo
    config: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.time_zone is None:
            raise ValueError(f"Workflow definition {self.name!r} has no time zone")

    @property
    def schedule_config(self) -> Mapping[str, Any] | None:
        """The ``schedule`` block, or ``None`` when the workflow is unscheduled."""
        schedule = self.config.get("schedule")
        return schedule or None


@dataclass(frozen=True, slots=True)
class StoredWorkflowDefinitionWithRepository:
    """A workflow definition together with the revision and repository owning it."""

    definition: StoredWorkflowDefinition
    revision: StoredRevision
    repository: StoredRepository

    @property
    def id(self) -> int:
        return self.definition.id

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def time_zone(self) -> ZoneInfo:
        return self.definition.time_zone

    @property
    def config(self) -> Mapping[str, Any]:
        return self.definition.config

    @property
    def schedule_config(self) -> Mapping[str, Any] | None:
        return self.definition.schedule_config

    @property
    def site_id(self) -> int:
        return self.repository.site_id

    @property
    def revision_name(self) -> str:
        return self.revision.name
