"""
Operation result envelope.

Every workflow operation returns an :class:`OperationResult`: the view on
success, or an :class:`OperationError` when the caller asked for something
invalid or missing.  Transports map ``error.code`` to their own status
(HTTP 400/404, CLI exit code 1).
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from sessionspine.core.errors import ErrorCategory

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class OperationError:
    """Why a lookup or truncation was refused.

    ``details`` names the offending ``parameter`` for ``INVALID_INPUT``, or
    the missing ``entity`` and ``key`` for ``NOT_FOUND``, plus whatever
    context the error carried (site, repository, revision).
    """

    code: str
    message: str
    category: ErrorCategory | None = None
    details: dict[str, Any] = field(default_factory=dict)
    retryable: bool = False


@dataclass
class OperationResult(Generic[T]):
    """Success/failure envelope; build it with :meth:`ok` or :meth:`fail`."""

    success: bool
    data: T | None = None
    error: OperationError | None = None
    elapsed_ms: float = 0.0

    @classmethod
    def ok(cls, data: T, *, elapsed_ms: float = 0.0) -> OperationResult[T]:
        return cls(success=True, data=data, elapsed_ms=elapsed_ms)

    @classmethod
    def fail(
        cls,
        code: str,
        message: str,
        *,
        category: ErrorCategory | None = None,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
        elapsed_ms: float = 0.0,
    ) -> OperationResult[T]:
        error = OperationError(
            code=code,
            message=message,
            category=category,
            details=details or {},
            retryable=retryable,
        )
        return cls(success=False, error=error, elapsed_ms=elapsed_ms)


class _Timer:
    __slots__ = ("_start",)

    def __init__(self) -> None:
        self._start = time.perf_counter()

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self._start) * 1000


def start_timer() -> _Timer:
    """Start timing an operation; read ``timer.elapsed_ms`` when done."""
    return _Timer()
