"""
Workflow router — look up workflow definitions and truncate session times.

GET  /workflow?repository=&revision=&name=
GET  /workflows/{id}
GET  /workflows/{id}/truncated_session_time?session_time=&mode=

Manifesto:
    Clients reach a workflow either by the names a person would use or by
    the id an earlier response handed out, and ask the server -- which
    knows the workflow's zone and schedule -- to normalize a requested
    time into a session time.

Tags:
    session-spine, api, workflows, session-time, lookup

Doc-Types:
    api-reference
"""

from __future__ import annotations

from fastapi import APIRouter, Path, Query, Request

from sessionspine.api.deps import OpContext
from sessionspine.api.schemas.common import Link, SuccessResponse
from sessionspine.api.schemas.workflows import (
    WorkflowDefinitionSchema,
    WorkflowSessionTimeSchema,
)
from sessionspine.api.utils import _dc, _handle_error
from sessionspine.ops.requests import (
    GetTruncatedSessionTimeRequest,
    GetWorkflowByIdRequest,
    GetWorkflowByNameRequest,
)
from sessionspine.ops.workflows import (
    get_truncated_session_time as _truncate,
)
from sessionspine.ops.workflows import (
    get_workflow_by_id as _get_by_id,
)
from sessionspine.ops.workflows import (
    get_workflow_by_name as _get_by_name,
)

router = APIRouter()


def _self_link(request: Request, workflow_id: int) -> Link:
    return Link(rel="workflow", href=str(request.url_for("get_workflow_by_id", workflow_id=workflow_id)))


@router.get("/workflow", response_model=SuccessResponse[WorkflowDefinitionSchema])
def get_workflow_by_name(
    ctx: OpContext,
    request: Request,
    repository: str | None = Query(None, description="Repository name"),
    revision: str | None = Query(None, description="Revision name; latest when omitted"),
    name: str | None = Query(None, description="Workflow name"),
):
    """Resolve a workflow by repository, optional revision and name.

    Raises:
        400 INVALID_INPUT: ``repository`` or ``name`` is missing.
        404 NOT_FOUND: Repository, revision or workflow does not exist in the site.

    Example:
        GET /api/workflow?repository=sales&name=daily_report

        Response:
        {
            "data": {
                "id": 3,
                "name": "daily_report",
                "repository": {"id": 1, "name": "sales"},
                "revision": "rev2",
                "time_zone": "Asia/Tokyo",
                "config": {"schedule": {"daily>": "07:00:00"}}
            }
        }
    """
    result = _get_by_name(
        ctx, GetWorkflowByNameRequest(repository=repository, revision=revision, name=name)
    )
    if not result.success:
        return _handle_error(result, request)
    return SuccessResponse(
        data=WorkflowDefinitionSchema(**_dc(result.data)),
        elapsed_ms=result.elapsed_ms,
        links=[_self_link(request, result.data.id)],
    )


@router.get("/workflows/{workflow_id}", response_model=SuccessResponse[WorkflowDefinitionSchema])
def get_workflow_by_id(
    ctx: OpContext,
    request: Request,
    workflow_id: int = Path(..., description="Workflow definition id"),
):
    """Resolve a workflow by id.

    Ids owned by another site are reported as not found.
    """
    result = _get_by_id(ctx, GetWorkflowByIdRequest(workflow_id=workflow_id))
    if not result.success:
        return _handle_error(result, request)
    return SuccessResponse(
        data=WorkflowDefinitionSchema(**_dc(result.data)),
        elapsed_ms=result.elapsed_ms,
    )


@router.get(
    "/workflows/{workflow_id}/truncated_session_time",
    response_model=SuccessResponse[WorkflowSessionTimeSchema],
)
def get_truncated_session_time(
    ctx: OpContext,
    request: Request,
    workflow_id: int = Path(..., description="Workflow definition id"),
    session_time: str | None = Query(
        None,
        description="ISO-8601 time; without an offset it is local to the workflow's zone",
    ),
    mode: str | None = Query(
        None,
        description="none, hour, day, schedule or next_schedule; omitted means no truncation",
    ),
):
    """Truncate a requested time into the workflow's session time.

    Raises:
        400 INVALID_INPUT: ``session_time`` missing or malformed, unknown
            ``mode``, or a schedule-based mode on a workflow without a schedule.
        404 NOT_FOUND: Workflow does not exist in the site.

    Example:
        GET /api/workflows/3/truncated_session_time?session_time=2024-03-10T02:30:00&mode=hour
    """
    result = _truncate(
        ctx,
        GetTruncatedSessionTimeRequest(
            workflow_id=workflow_id, session_time=session_time, mode=mode
        ),
    )
    if not result.success:
        return _handle_error(result, request)
    return SuccessResponse(
        data=WorkflowSessionTimeSchema(**_dc(result.data)),
        elapsed_ms=result.elapsed_ms,
        links=[_self_link(request, workflow_id)],
    )
