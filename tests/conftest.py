"""
Shared pytest fixtures for session-spine tests.

This module provides:
- ``sales``: an in-memory store with the ``sales`` repository in two
  revisions, an unscheduled workflow, and a same-named repository in
  another site
- ``sales_catalog_file``: the same data as a YAML catalog on disk
- Auto-marking of tests by directory (api / cli / unit)
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest
import structlog

from sessionspine.core.models import StoredRepository, StoredWorkflowDefinition
from sessionspine.core.repositories import InMemoryRepositoryStore

TOKYO = ZoneInfo("Asia/Tokyo")
LOS_ANGELES = ZoneInfo("America/Los_Angeles")

DAILY_SCHEDULE = {"daily>": "07:00:00"}


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    root = Path(__file__).parent
    for item in items:
        top = Path(item.fspath).relative_to(root).parts[0]
        if top == "api":
            item.add_marker(pytest.mark.api)
        elif top == "cli":
            item.add_marker(pytest.mark.cli)
        else:
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def _clear_log_context():
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


@dataclass
class SalesFixture:
    """Handles to everything seeded by the ``sales`` fixture."""

    store: InMemoryRepositoryStore
    repository: StoredRepository
    rev1_daily: StoredWorkflowDefinition
    rev2_daily: StoredWorkflowDefinition
    adhoc: StoredWorkflowDefinition
    other_site_daily: StoredWorkflowDefinition


@pytest.fixture
def sales() -> SalesFixture:
    """Site 0: ``sales`` with rev1 and rev2 (latest); site 1: its own ``sales``.

    - ``daily_report`` (Asia/Tokyo, ``daily>: 07:00:00``) exists in both revisions
    - ``adhoc`` (America/Los_Angeles, no schedule) exists only in rev2
    """
    store = InMemoryRepositoryStore()

    repo = store.put_repository(0, "sales")
    rev1 = store.put_revision(repo.id, "rev1")
    rev1_daily = store.put_workflow_definition(
        rev1.id, "daily_report", TOKYO, {"schedule": DAILY_SCHEDULE}
    )
    rev2 = store.put_revision(repo.id, "rev2")
    rev2_daily = store.put_workflow_definition(
        rev2.id, "daily_report", TOKYO, {"schedule": DAILY_SCHEDULE}
    )
    adhoc = store.put_workflow_definition(rev2.id, "adhoc", LOS_ANGELES, {"owner": "analytics"})

    other_repo = store.put_repository(1, "sales")
    other_rev = store.put_revision(other_repo.id, "rev1")
    other_site_daily = store.put_workflow_definition(other_rev.id, "daily_report", ZoneInfo("UTC"))

    return SalesFixture(
        store=store,
        repository=repo,
        rev1_daily=rev1_daily,
        rev2_daily=rev2_daily,
        adhoc=adhoc,
        other_site_daily=other_site_daily,
    )


SALES_CATALOG_YAML = """\
repositories:
  - name: sales
    site_id: 0
    revisions:
      - name: rev1
        workflows:
          - name: daily_report
            timezone: Asia/Tokyo
            schedule:
              daily>: "07:00:00"
      - name: rev2
        workflows:
          - name: daily_report
            timezone: Asia/Tokyo
            schedule:
              daily>: "07:00:00"
          - name: adhoc
            timezone: America/Los_Angeles
            config:
              owner: analytics
  - name: sales
    site_id: 1
    revisions:
      - name: rev1
        workflows:
          - name: daily_report
"""


@pytest.fixture
def sales_catalog_file(tmp_path: Path) -> Path:
    """YAML catalog with the same content (and ids) as ``sales``.

    Workflow ids: 1 = rev1 daily_report, 2 = rev2 daily_report,
    3 = adhoc, 4 = site 1 daily_report.
    """
    path = tmp_path / "catalog.yaml"
    path.write_text(SALES_CATALOG_YAML, encoding="utf-8")
    return path
