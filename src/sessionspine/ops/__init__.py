"""
Operations layer -- typed business functions for session-spine.

The ops package wraps the core resolver and truncator with consistent
patterns:

- All functions accept ``OperationContext`` as first argument
- All functions return ``OperationResult[T]`` for invalid input and
  missing entities; collaborator failures propagate
- All functions are transport-agnostic (no HTTP, no CLI knowledge)

Usage::

    from sessionspine.core.repositories import load_catalog
    from sessionspine.ops import OperationContext
    from sessionspine.ops.requests import GetWorkflowByNameRequest
    from sessionspine.ops.workflows import get_workflow_by_name

    ctx = OperationContext(store=load_catalog("catalog.yaml"), site_id=0)
    result = get_workflow_by_name(
        ctx, GetWorkflowByNameRequest(repository="sales", name="daily_report")
    )
    assert result.success
"""

from sessionspine.ops.context import OperationContext
from sessionspine.ops.result import OperationError, OperationResult

__all__ = [
    "OperationContext",
    "OperationError",
    "OperationResult",
]
