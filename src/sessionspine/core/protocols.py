"""
Collaborator protocols consumed by the session-spine core.

The resolver and the truncator never talk to a database or a cron engine
directly. They depend on the *shape* of two collaborators, declared here
once so every implementation (the in-memory reference store, a SQL-backed
store, the croniter scheduler, test doubles) satisfies the same contract.

Manifesto:
    Protocols define contracts without inheritance. They enable:
    - **Decoupling:** The core depends on shape, not implementation
    - **Testability:** Any object matching the protocol works
    - **Portability:** Same core on any storage or scheduling backend

Architecture:
    ::

        protocols.py (YOU ARE HERE)
        ├── RepositoryStore    — read-only lookups of repositories,
        │                        revisions and workflow definitions
        ├── Scheduler          — occurrence queries for one workflow
        └── SchedulerSupplier  — deferred () -> Scheduler | None

    Consumers:
        resolver.py, session_time.py, scheduling/manager.py, ops/workflows.py

Guardrails:
    ❌ DON'T: Raise for "not found" from a RepositoryStore
    ✅ DO: Return None and let the resolver raise the entity-specific error

    ❌ DON'T: Build a Scheduler eagerly for every request
    ✅ DO: Pass a SchedulerSupplier; only schedule-based modes call it

Tags:
    protocol, repository-store, scheduler, session-spine, contracts

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Protocol, runtime_checkable

from sessionspine.core.models import (
    ScheduleTime,
    StoredRepository,
    StoredRevision,
    StoredWorkflowDefinition,
    StoredWorkflowDefinitionWithRepository,
)

# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------


@runtime_checkable
class RepositoryStore(Protocol):
    """
    Read-only lookups over repositories, revisions and workflow definitions.

    Every method returns the entity or ``None`` when it does not exist.
    Implementations must scope repository and id lookups to ``site_id``;
    revision and definition lookups are keyed by ids that were already
    resolved within a site.

    Architecture:
        ::

            ┌────────────────────────────────────────────────────────────┐
            │ get_repository_by_name(site_id, name)  → StoredRepository  │
            │ get_latest_revision(repository_id)     → StoredRevision    │
            │ get_revision_by_name(repository_id, n) → StoredRevision    │
            │ get_workflow_definition_by_name(rev_id, n)                 │
            │                                  → StoredWorkflowDefinition│
            │ get_workflow_definition_by_id(site_id, id)                 │
            │                → StoredWorkflowDefinitionWithRepository    │
            └────────────────────────────────────────────────────────────┘
    """

    def get_repository_by_name(self, site_id: int, name: str) -> StoredRepository | None:
        ...

    def get_latest_revision(self, repository_id: int) -> StoredRevision | None:
        ...

    def get_revision_by_name(self, repository_id: int, name: str) -> StoredRevision | None:
        ...

    def get_workflow_definition_by_name(
        self, revision_id: int, name: str
    ) -> StoredWorkflowDefinition | None:
        ...

    def get_workflow_definition_by_id(
        self, site_id: int, workflow_id: int
    ) -> StoredWorkflowDefinitionWithRepository | None:
        ...


# ---------------------------------------------------------------------------
# Scheduling
# ---------------------------------------------------------------------------


@runtime_checkable
class Scheduler(Protocol):
    """
    Occurrence queries for one workflow's schedule.

    Instants in and out are timezone-aware datetimes.
    """

    def get_first_schedule_time(self, current_time: datetime) -> ScheduleTime:
        """First occurrence whose session time is at or after ``current_time``."""
        ...

    def next_schedule_time(self, last_schedule_time: datetime) -> ScheduleTime:
        """Next occurrence whose session time is strictly after ``last_schedule_time``."""
        ...


SchedulerSupplier = Callable[[], Scheduler | None]
"""Deferred lookup bound to one workflow; ``None`` when it has no schedule."""


__all__ = [
    "RepositoryStore",
    "Scheduler",
    "SchedulerSupplier",
]
