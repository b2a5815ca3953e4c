"""
Workflow schemas — wire shapes for workflow definitions and session times.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class IdAndNameSchema(BaseModel):
    """Compact repository reference."""

    id: int
    name: str


class WorkflowDefinitionSchema(BaseModel):
    """A workflow definition resolved by name or id."""

    id: int = Field(description="Workflow definition id")
    name: str = Field(description="Workflow name")
    repository: IdAndNameSchema = Field(description="Owning repository")
    revision: str = Field(description="Revision the definition belongs to")
    time_zone: str = Field(description="IANA time zone, e.g. 'Asia/Tokyo'")
    config: dict[str, Any] = Field(default_factory=dict, description="Workflow configuration")


class WorkflowSessionTimeSchema(BaseModel):
    """A workflow's truncated session time.

    Example:
        {
            "workflow_id": 3,
            "repository": {"id": 1, "name": "sales"},
            "revision": "rev2",
            "session_time": "2024-03-10T00:00:00-08:00",
            "session_time_utc": "2024-03-10T08:00:00Z",
            "time_zone": "America/Los_Angeles"
        }
    """

    workflow_id: int
    repository: IdAndNameSchema
    revision: str
    session_time: str = Field(description="ISO-8601 with the workflow zone's offset")
    session_time_utc: str = Field(description="ISO-8601 in UTC")
    time_zone: str
