"""Workflow definition resolver.

Manifesto:
    Callers name workflows the way people do ("daily_report in sales,
    whatever is deployed now") or by the numeric id a previous response
    handed them.  Both paths must end at exactly one immutable definition,
    must never cross a tenant boundary, and must say precisely what was
    missing when they fail.

Architecture:
    ::

        lookup_by_name(site, repo, rev?, wf)        lookup_by_id(site, id)
               │                                           │
               ▼                                           ▼
        store.get_repository_by_name(site, repo)   store.get_workflow_definition_by_id(site, id)
               │ None → RepositoryNotFoundError            │ None / other site
               ▼                                           │   → WorkflowNotFoundError
        rev? ── no ──► store.get_latest_revision            ▼
           └── yes ──► store.get_revision_by_name     StoredWorkflowDefinitionWithRepository
               │ None → RevisionNotFoundError
               ▼
        store.get_workflow_definition_by_name(rev, wf)
               │ None → WorkflowNotFoundError
               ▼
        StoredWorkflowDefinitionWithRepository

Reading the repository and then its latest revision is two reads; a
revision pushed in between is simply "latest at call time".

Tags:
    session-spine, resolver, repository, revision, workflow, multi-tenant

Doc-Types:
    api-reference
"""

from __future__ import annotations

from sessionspine.core.errors import (
    InvalidArgumentError,
    RepositoryNotFoundError,
    RevisionNotFoundError,
    WorkflowNotFoundError,
)
from sessionspine.core.logging import get_logger
from sessionspine.core.models import StoredWorkflowDefinitionWithRepository
from sessionspine.core.protocols import RepositoryStore

logger = get_logger(__name__)


class DefinitionResolver:
    """Resolve workflow definitions by name or id within one site.

    Example:
        >>> resolver = DefinitionResolver(store)
        >>> wf = resolver.lookup_by_name(0, "sales", None, "daily_report")
        >>> wf.revision_name
        'rev2'
    """

    def __init__(self, store: RepositoryStore) -> None:
        self.store = store

    def lookup_by_name(
        self,
        site_id: int,
        repository_name: str | None,
        revision_name: str | None,
        workflow_name: str | None,
    ) -> StoredWorkflowDefinitionWithRepository:
        """Resolve ``workflow_name`` in a repository's latest or named revision.

        Raises:
            InvalidArgumentError: ``repository_name`` or ``workflow_name`` is empty.
            RepositoryNotFoundError, RevisionNotFoundError, WorkflowNotFoundError
        """
        if not repository_name:
            raise InvalidArgumentError("repository= is required", parameter="repository")
        if not workflow_name:
            raise InvalidArgumentError("name= is required", parameter="name")

        repo = self.store.get_repository_by_name(site_id, repository_name)
        if repo is None:
            raise RepositoryNotFoundError(repository_name).with_context(
                site_id=site_id, repository=repository_name
            )

        if revision_name:
            rev = self.store.get_revision_by_name(repo.id, revision_name)
        else:
            rev = self.store.get_latest_revision(repo.id)
        if rev is None:
            raise RevisionNotFoundError(
                revision_name or "latest", repository=repository_name
            ).with_context(site_id=site_id, revision=revision_name)

        definition = self.store.get_workflow_definition_by_name(rev.id, workflow_name)
        if definition is None:
            raise WorkflowNotFoundError(
                workflow_name,
                message=f"Workflow not found: {workflow_name} "
                f"(repository {repository_name}, revision {rev.name})",
            ).with_context(
                site_id=site_id,
                repository=repository_name,
                revision=rev.name,
                workflow=workflow_name,
            )

        logger.debug(
            "resolver.lookup_by_name",
            site_id=site_id,
            repository=repository_name,
            revision=rev.name,
            workflow=workflow_name,
            workflow_id=definition.id,
        )
        return StoredWorkflowDefinitionWithRepository(
            definition=definition, revision=rev, repository=repo
        )

    def lookup_by_id(
        self, site_id: int, workflow_id: int
    ) -> StoredWorkflowDefinitionWithRepository:
        """Resolve a definition by id, visible only to its own site.

        Raises:
            WorkflowNotFoundError: Unknown id, or the id belongs to another site.
        """
        found = self.store.get_workflow_definition_by_id(site_id, workflow_id)
        if found is None or found.site_id != site_id:
            if found is not None:
                logger.warning(
                    "resolver.cross_site_result_dropped",
                    site_id=site_id,
                    workflow_id=workflow_id,
                )
            raise WorkflowNotFoundError(workflow_id).with_context(
                site_id=site_id, workflow_id=workflow_id
            )

        logger.debug(
            "resolver.lookup_by_id",
            site_id=site_id,
            workflow_id=workflow_id,
            workflow=found.name,
        )
        return found


__all__ = ["DefinitionResolver"]
