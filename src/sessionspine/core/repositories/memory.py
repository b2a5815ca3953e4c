"""In-memory repository store.

Reference implementation of :class:`~sessionspine.core.protocols.RepositoryStore`
used by the CLI, the API's catalog mode and the test suite.  It is not a
persistence layer: nothing survives the process.

Revisions are ordered by insertion; the most recently added revision of a
repository is its latest.  Ids are assigned from per-entity counters
starting at 1.

Performance:
    - All lookups: O(1) dict access
    - Thread-safe: writes and reads take a ``threading.RLock``

Tags:
    session-spine, repository-store, in-memory, reference-implementation
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from itertools import count
from typing import Any
from zoneinfo import ZoneInfo

from sessionspine.core.models import (
    StoredRepository,
    StoredRevision,
    StoredWorkflowDefinition,
    StoredWorkflowDefinitionWithRepository,
)
from sessionspine.core.timestamps import utc_now


class InMemoryRepositoryStore:
    """Dict-backed repository store.

    Example:
        >>> store = InMemoryRepositoryStore()
        >>> repo = store.put_repository(0, "sales")
        >>> rev = store.put_revision(repo.id, "rev1")
        >>> wf = store.put_workflow_definition(rev.id, "daily_report", ZoneInfo("Asia/Tokyo"))
        >>> store.get_workflow_definition_by_id(0, wf.id).revision_name
        'rev1'
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._repository_ids = count(1)
        self._revision_ids = count(1)
        self._workflow_ids = count(1)

        self._repositories: dict[int, StoredRepository] = {}
        self._repositories_by_name: dict[tuple[int, str], int] = {}
        self._revisions: dict[int, StoredRevision] = {}
        self._revision_history: dict[int, list[int]] = {}
        self._workflows: dict[int, StoredWorkflowDefinition] = {}
        self._workflows_by_name: dict[tuple[int, str], int] = {}

    # === Writes ===

    def put_repository(self, site_id: int, name: str) -> StoredRepository:
        """Return the site's repository called ``name``, creating it if needed."""
        with self._lock:
            existing = self._repositories_by_name.get((site_id, name))
            if existing is not None:
                return self._repositories[existing]
            repo = StoredRepository(
                id=next(self._repository_ids),
                site_id=site_id,
                name=name,
                created_at=utc_now(),
            )
            self._repositories[repo.id] = repo
            self._repositories_by_name[(site_id, name)] = repo.id
            self._revision_history[repo.id] = []
            return repo

    def put_revision(self, repository_id: int, name: str) -> StoredRevision:
        """Append a new revision; it becomes the repository's latest."""
        with self._lock:
            if repository_id not in self._repositories:
                raise KeyError(f"Unknown repository id: {repository_id}")
            if self.get_revision_by_name(repository_id, name) is not None:
                raise ValueError(f"Revision {name!r} already exists in repository {repository_id}")
            rev = StoredRevision(
                id=next(self._revision_ids),
                repository_id=repository_id,
                name=name,
                created_at=utc_now(),
            )
            self._revisions[rev.id] = rev
            self._revision_history[repository_id].append(rev.id)
            return rev

    def put_workflow_definition(
        self,
        revision_id: int,
        name: str,
        time_zone: ZoneInfo,
        config: Mapping[str, Any] | None = None,
    ) -> StoredWorkflowDefinition:
        """Add a workflow definition to a revision."""
        with self._lock:
            if revision_id not in self._revisions:
                raise KeyError(f"Unknown revision id: {revision_id}")
            if (revision_id, name) in self._workflows_by_name:
                raise ValueError(f"Workflow {name!r} already exists in revision {revision_id}")
            definition = StoredWorkflowDefinition(
                id=next(self._workflow_ids),
                revision_id=revision_id,
                name=name,
                time_zone=time_zone,
                config=dict(config or {}),
            )
            self._workflows[definition.id] = definition
            self._workflows_by_name[(revision_id, name)] = definition.id
            return definition

    # === RepositoryStore ===

    def get_repository_by_name(self, site_id: int, name: str) -> StoredRepository | None:
        with self._lock:
            repo_id = self._repositories_by_name.get((site_id, name))
            return self._repositories.get(repo_id) if repo_id is not None else None

    def get_latest_revision(self, repository_id: int) -> StoredRevision | None:
        with self._lock:
            history = self._revision_history.get(repository_id)
            if not history:
                return None
            return self._revisions[history[-1]]

    def get_revision_by_name(self, repository_id: int, name: str) -> StoredRevision | None:
        with self._lock:
            for rev_id in self._revision_history.get(repository_id, []):
                rev = self._revisions[rev_id]
                if rev.name == name:
                    return rev
            return None

    def get_workflow_definition_by_name(
        self, revision_id: int, name: str
    ) -> StoredWorkflowDefinition | None:
        with self._lock:
            wf_id = self._workflows_by_name.get((revision_id, name))
            return self._workflows.get(wf_id) if wf_id is not None else None

    def get_workflow_definition_by_id(
        self, site_id: int, workflow_id: int
    ) -> StoredWorkflowDefinitionWithRepository | None:
        with self._lock:
            definition = self._workflows.get(workflow_id)
            if definition is None:
                return None
            revision = self._revisions[definition.revision_id]
            repository = self._repositories[revision.repository_id]
            if repository.site_id != site_id:
                return None
            return StoredWorkflowDefinitionWithRepository(
                definition=definition, revision=revision, repository=repository
            )


__all__ = ["InMemoryRepositoryStore"]
