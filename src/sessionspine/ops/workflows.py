"""
Workflow operations.

Look up workflow definitions by name or id and compute a workflow's
truncated session time.  Resolution is delegated to
:class:`~sessionspine.core.resolver.DefinitionResolver` and truncation to
:func:`~sessionspine.core.session_time.truncate_session_time` -- this module
only provides the typed operations-layer façade.

Invalid arguments and missing entities come back as failed
:class:`OperationResult` envelopes.  Anything else (store outages, broken
schedule blocks) is logged and re-raised unchanged.
"""

from __future__ import annotations

from datetime import datetime

from sessionspine.core.errors import (
    InvalidArgumentError,
    ResourceNotFoundError,
    categorize_error,
    is_retryable,
)
from sessionspine.core.logging import get_logger
from sessionspine.core.models import (
    LocalTimeOrInstant,
    SessionTimeTruncate,
    StoredWorkflowDefinitionWithRepository,
)
from sessionspine.core.resolver import DefinitionResolver
from sessionspine.core.session_time import truncate_session_time
from sessionspine.core.timestamps import in_time_zone, to_iso8601
from sessionspine.ops.context import OperationContext
from sessionspine.ops.requests import (
    GetTruncatedSessionTimeRequest,
    GetWorkflowByIdRequest,
    GetWorkflowByNameRequest,
)
from sessionspine.ops.responses import IdAndName, WorkflowDefinitionView, WorkflowSessionTime
from sessionspine.ops.result import OperationResult, _Timer, start_timer

logger = get_logger(__name__)


def _fail(exc: InvalidArgumentError | ResourceNotFoundError, timer: _Timer) -> OperationResult:
    if isinstance(exc, ResourceNotFoundError):
        code = "NOT_FOUND"
        details = {"entity": exc.entity, "key": exc.key}
    else:
        code = "INVALID_INPUT"
        details = {"parameter": exc.parameter} if exc.parameter else {}
    details.update(exc.context.to_dict())
    return OperationResult.fail(
        code,
        exc.message,
        category=categorize_error(exc),
        details=details,
        retryable=is_retryable(exc),
        elapsed_ms=timer.elapsed_ms,
    )


def _parse_session_time(value: str | datetime | LocalTimeOrInstant | None) -> LocalTimeOrInstant:
    if value is None:
        raise InvalidArgumentError("session_time= is required", parameter="session_time")
    if isinstance(value, str):
        return LocalTimeOrInstant.parse(value)
    return LocalTimeOrInstant.of(value)


def _parse_mode(value: str | SessionTimeTruncate | None) -> SessionTimeTruncate | None:
    # an empty query parameter counts as omitted
    if value is None or value == "":
        return None
    if isinstance(value, SessionTimeTruncate):
        return value
    return SessionTimeTruncate.parse(value)


def get_workflow_by_name(
    ctx: OperationContext,
    request: GetWorkflowByNameRequest,
) -> OperationResult[WorkflowDefinitionView]:
    """Resolve a workflow by repository, optional revision and name."""
    timer = start_timer()

    try:
        found = DefinitionResolver(ctx.store).lookup_by_name(
            ctx.site_id, request.repository, request.revision, request.name
        )
    except (InvalidArgumentError, ResourceNotFoundError) as exc:
        return _fail(exc, timer)
    except Exception as exc:
        logger.exception(
            "op_failed",
            op="get_workflow_by_name",
            request_id=ctx.request_id,
            site_id=ctx.site_id,
            error=str(exc),
        )
        raise

    return OperationResult.ok(WorkflowDefinitionView.of(found), elapsed_ms=timer.elapsed_ms)


def get_workflow_by_id(
    ctx: OperationContext,
    request: GetWorkflowByIdRequest,
) -> OperationResult[WorkflowDefinitionView]:
    """Resolve a workflow by id within the caller's site."""
    timer = start_timer()

    try:
        found = DefinitionResolver(ctx.store).lookup_by_id(ctx.site_id, request.workflow_id)
    except ResourceNotFoundError as exc:
        return _fail(exc, timer)
    except Exception as exc:
        logger.exception(
            "op_failed",
            op="get_workflow_by_id",
            request_id=ctx.request_id,
            site_id=ctx.site_id,
            workflow_id=request.workflow_id,
            error=str(exc),
        )
        raise

    return OperationResult.ok(WorkflowDefinitionView.of(found), elapsed_ms=timer.elapsed_ms)


def get_truncated_session_time(
    ctx: OperationContext,
    request: GetTruncatedSessionTimeRequest,
) -> OperationResult[WorkflowSessionTime]:
    """Resolve a workflow by id and truncate a requested time into its session time.

    The scheduler is only built when the mode is ``schedule`` or
    ``next_schedule``.
    """
    timer = start_timer()

    try:
        raw_time = _parse_session_time(request.session_time)
        mode = _parse_mode(request.mode)
        found = DefinitionResolver(ctx.store).lookup_by_id(ctx.site_id, request.workflow_id)
        session_time = truncate_session_time(
            raw_time,
            found.time_zone,
            mode,
            ctx.schedulers.supplier_for(found),
        )
    except (InvalidArgumentError, ResourceNotFoundError) as exc:
        return _fail(exc, timer)
    except Exception as exc:
        logger.exception(
            "op_failed",
            op="get_truncated_session_time",
            request_id=ctx.request_id,
            site_id=ctx.site_id,
            workflow_id=request.workflow_id,
            error=str(exc),
        )
        raise

    return OperationResult.ok(
        _session_time_view(found, session_time),
        elapsed_ms=timer.elapsed_ms,
    )


def _session_time_view(
    found: StoredWorkflowDefinitionWithRepository, session_time: datetime
) -> WorkflowSessionTime:
    return WorkflowSessionTime(
        workflow_id=found.id,
        repository=IdAndName(id=found.repository.id, name=found.repository.name),
        revision=found.revision_name,
        session_time=to_iso8601(in_time_zone(session_time, found.time_zone)),
        session_time_utc=to_iso8601(session_time),
        time_zone=found.time_zone.key,
    )
