"""Repository store implementations.

Architecture::

    ┌────────────────────────────────────────────────────────────────┐
    │  core/resolver.py  (DefinitionResolver)                        │
    └────────────────────────────┬───────────────────────────────────┘
                                 │ RepositoryStore protocol
                                 ▼
    ┌────────────────────────────────────────────────────────────────┐
    │  sessionspine.core.repositories  (this package)                │
    │                                                                │
    │  memory.py   — InMemoryRepositoryStore                         │
    │  catalog.py  — load_catalog / load_catalog_data (YAML seeding) │
    └────────────────────────────────────────────────────────────────┘

Tags:
    repository, store, in-memory, catalog, session-spine
"""

from sessionspine.core.repositories.catalog import load_catalog, load_catalog_data
from sessionspine.core.repositories.memory import InMemoryRepositoryStore

__all__ = [
    "InMemoryRepositoryStore",
    "load_catalog",
    "load_catalog_data",
]
