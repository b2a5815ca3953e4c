"""
Request-scoped context for operations.

Every operation function receives an :class:`OperationContext` as its first
argument.  The context carries the repository store and scheduler manager
the operation talks to, the site (tenant) the request is scoped to, and the
caller identity used for logging.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from sessionspine.core.protocols import RepositoryStore
from sessionspine.core.scheduling import SchedulerManager


@dataclass
class OperationContext:
    """Context passed to every operation function.

    Attributes:
        store: Repository store satisfying :class:`sessionspine.core.protocols.RepositoryStore`.
        site_id: Tenant every lookup is scoped to.
        schedulers: Builds workflow schedulers on demand.
        request_id: Unique ID for this operation invocation (auto-generated).
        caller: Origin of the request -- ``"api"``, ``"cli"`` or ``"sdk"``.
        metadata: Arbitrary key/value pairs forwarded to logging.
    """

    store: RepositoryStore
    site_id: int = 0
    schedulers: SchedulerManager = field(default_factory=SchedulerManager)
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    caller: str = "sdk"
    metadata: dict[str, Any] = field(default_factory=dict)
