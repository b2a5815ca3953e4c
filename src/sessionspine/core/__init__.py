"""Session Spine Core -- workflow definition lookup and session-time truncation.

Manifesto:
    A workflow run is identified by its session time.  Every caller that
    asks "which run is this?" must get the same instant back for the same
    request, regardless of DST transitions, the caller's own zone, or
    whether the workflow's schedule had to be consulted.  ``sessionspine.core``
    holds the pure logic for that: resolving the definition, then
    normalizing the requested time in the definition's zone.

    - **Pure core:** No transport, no persistence, no retained state
    - **Protocol-first:** RepositoryStore and Scheduler are protocols
    - **Lazy collaborators:** The scheduler is built only when a mode needs it

Architecture::

    Layer 1 -- Type System & Errors
        errors.py          Error hierarchy (InvalidArgument, NotFound, Config)
        models/            Stored entities + session-time value types
        protocols.py       RepositoryStore, Scheduler, SchedulerSupplier
        timestamps.py      UTC + zone helpers

    Layer 2 -- Logic
        resolver.py        DefinitionResolver (by name / by id, site-scoped)
        session_time.py    truncate_session_time (NONE/HOUR/DAY/SCHEDULE/NEXT_SCHEDULE)
        scheduling/        ScheduleConfig, CronScheduler, SchedulerManager

    Layer 3 -- Reference collaborators & ambient
        repositories/      InMemoryRepositoryStore, YAML catalog loader
        logging.py         structlog configuration
        settings.py        pydantic-settings base class

Tags:
    session-spine, core, session-time, resolver, package-overview

Doc-Types:
    package-overview, architecture-map
"""

from sessionspine.core.errors import (
    ErrorCategory,
    InvalidArgumentError,
    RepositoryNotFoundError,
    ResourceNotFoundError,
    RevisionNotFoundError,
    ScheduleNotConfiguredError,
    SessionSpineError,
    WorkflowNotFoundError,
)
from sessionspine.core.models import (
    LocalTimeOrInstant,
    ScheduleTime,
    SessionTimeTruncate,
    StoredRepository,
    StoredRevision,
    StoredWorkflowDefinition,
    StoredWorkflowDefinitionWithRepository,
)
from sessionspine.core.protocols import RepositoryStore, Scheduler, SchedulerSupplier
from sessionspine.core.resolver import DefinitionResolver
from sessionspine.core.scheduling import CronScheduler, ScheduleConfig, SchedulerManager
from sessionspine.core.session_time import truncate_session_time

__all__ = [
    # errors
    "ErrorCategory",
    "SessionSpineError",
    "InvalidArgumentError",
    "ScheduleNotConfiguredError",
    "ResourceNotFoundError",
    "RepositoryNotFoundError",
    "RevisionNotFoundError",
    "WorkflowNotFoundError",
    # models
    "LocalTimeOrInstant",
    "ScheduleTime",
    "SessionTimeTruncate",
    "StoredRepository",
    "StoredRevision",
    "StoredWorkflowDefinition",
    "StoredWorkflowDefinitionWithRepository",
    # protocols
    "RepositoryStore",
    "Scheduler",
    "SchedulerSupplier",
    # logic
    "DefinitionResolver",
    "truncate_session_time",
    "ScheduleConfig",
    "CronScheduler",
    "SchedulerManager",
]
