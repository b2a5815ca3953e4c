"""
YAML catalog loader.

Seeds an :class:`InMemoryRepositoryStore` from a YAML document, so the
API and CLI can serve workflow lookups without a database.

File Format (YAML):
    repositories:
      - name: sales
        site_id: 0                  # optional, default 0
        revisions:                  # oldest first; the last one is latest
          - name: rev1
            workflows:
              - name: daily_report
                timezone: Asia/Tokyo    # optional, default UTC
                schedule:
                  daily>: "07:00:00"
                config:                 # optional extra workflow config
                  owner: analytics
"""

from pathlib import Path
from typing import Any

import structlog
import yaml

from sessionspine.core.errors import InvalidArgumentError, InvalidCatalogError
from sessionspine.core.repositories.memory import InMemoryRepositoryStore
from sessionspine.core.timestamps import resolve_time_zone

logger = structlog.get_logger()

DEFAULT_TIME_ZONE = "UTC"


def load_catalog(
    path: Path | str,
    store: InMemoryRepositoryStore | None = None,
) -> InMemoryRepositoryStore:
    """
    Load repositories, revisions and workflows from a YAML file.

    Args:
        path: Path to the YAML catalog
        store: Existing store to add to; a new one is created when omitted

    Returns:
        The populated store

    Raises:
        FileNotFoundError: If the file doesn't exist
        InvalidCatalogError: If the YAML is invalid or doesn't match the format
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    logger.debug("catalog.load_yaml", path=str(path))

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidCatalogError(f"Invalid YAML in {path}: {e}", path=str(path))

    store = load_catalog_data(data or {}, store, source=str(path))
    return store


def load_catalog_data(
    data: Any,
    store: InMemoryRepositoryStore | None = None,
    *,
    source: str = "<memory>",
) -> InMemoryRepositoryStore:
    """Load an already-parsed catalog document (see module docstring)."""
    store = store if store is not None else InMemoryRepositoryStore()

    if not isinstance(data, dict):
        raise InvalidCatalogError(
            f"Expected a mapping at the catalog root, got {type(data).__name__}", path=source
        )

    repositories = data.get("repositories") or []
    if not isinstance(repositories, list):
        raise InvalidCatalogError("'repositories' must be a list", path=source)

    workflow_count = 0
    for repo_spec in repositories:
        repo_name = _required_name(repo_spec, "repository", source)
        site_id = repo_spec.get("site_id", 0)
        if not isinstance(site_id, int):
            raise InvalidCatalogError(
                f"Repository {repo_name!r}: site_id must be an integer", path=source
            )
        repo = store.put_repository(site_id, repo_name)

        for rev_spec in repo_spec.get("revisions") or []:
            rev_name = _required_name(rev_spec, "revision", source)
            try:
                rev = store.put_revision(repo.id, rev_name)
            except ValueError as e:
                raise InvalidCatalogError(str(e), path=source)

            for wf_spec in rev_spec.get("workflows") or []:
                wf_name = _required_name(wf_spec, "workflow", source)
                try:
                    time_zone = resolve_time_zone(wf_spec.get("timezone") or DEFAULT_TIME_ZONE)
                except InvalidArgumentError as e:
                    raise InvalidCatalogError(
                        f"Workflow {repo_name}/{rev_name}/{wf_name}: {e.message}", path=source
                    )

                config = dict(wf_spec.get("config") or {})
                if wf_spec.get("schedule"):
                    config["schedule"] = wf_spec["schedule"]
                try:
                    store.put_workflow_definition(rev.id, wf_name, time_zone, config)
                except ValueError as e:
                    raise InvalidCatalogError(str(e), path=source)
                workflow_count += 1

    logger.info(
        "catalog.loaded",
        source=source,
        repositories=len(repositories),
        workflows=workflow_count,
    )
    return store


def _required_name(spec: Any, entity: str, source: str) -> str:
    if not isinstance(spec, dict) or not spec.get("name"):
        raise InvalidCatalogError(f"Every {entity} needs a 'name'", path=source)
    return str(spec["name"])
