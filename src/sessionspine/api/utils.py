"""
Shared API router utilities.

- ``_dc()`` — convert a dataclass or dict to a plain dict
- ``_handle_error()`` — convert a failed OperationResult to a ``problem_response``

Tags:
    session-spine, api, utils, shared, dataclass-conversion

Doc-Types: API_INFRASTRUCTURE
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from sessionspine.api.middleware.errors import problem_response, status_for_error_code
from sessionspine.ops.result import OperationResult


def _dc(obj: Any) -> dict[str, Any]:
    """Convert a dataclass (or dict) to a plain dict.

    Returns an empty dict for objects that are neither dataclasses nor dicts.
    """
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    return obj if isinstance(obj, dict) else {}


def _handle_error(result: OperationResult, request: Request | None = None) -> JSONResponse:
    """Convert a failed ``OperationResult`` into a Problem Details response.

    Uses the error code from the result to determine the HTTP status code,
    and the error message as the problem title.  Invalid parameters are
    listed in ``errors``; a missing entity is named in ``detail``.
    """
    error = result.error
    if error is None:
        return problem_response(status=500, title="Operation failed")

    errors = None
    parameter = error.details.get("parameter")
    if parameter:
        errors = [{"code": error.code, "message": error.message, "field": parameter}]

    return problem_response(
        status=status_for_error_code(error.code),
        title=error.message,
        detail=str(error.details.get("entity", "")),
        instance=str(request.url) if request is not None else "",
        errors=errors,
    )
