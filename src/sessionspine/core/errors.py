"""
Structured error types for session-spine.

Provides a small hierarchy of typed errors with metadata for retry
decisions, error categorization and diagnostics. Every failure raised by
the resolver, the session-time truncator or the scheduler manager is one of
these types, so transports (ops layer, REST, CLI) can map them to stable
error codes without string matching.

Manifesto:
    - **Typed Error Hierarchy:** Invalid arguments, missing entities and
      broken configuration are different problems with different owners
    - **Explicit Retry Semantics:** Each error knows if it's retryable
    - **Rich Context:** Errors carry the site, repository, revision and
      workflow they were raised for
    - **Error Chaining:** Preserve original exceptions while adding context

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                     SessionSpineError                            │
        │  (category, retryable, retry_after, context, cause)             │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                  │
        │  ValidationError         ResourceNotFoundError   ConfigError     │
        │  (VALIDATION)            (NOT_FOUND)             (CONFIG)        │
        │       │                        │                      │          │
        │  InvalidArgumentError    RepositoryNotFoundError  InvalidSchedule│
        │       │                  RevisionNotFoundError    ConfigError    │
        │  ScheduleNotConfigured   WorkflowNotFoundError    InvalidCatalog │
        │  Error                                            Error          │
        └─────────────────────────────────────────────────────────────────┘

Examples:
    Rejecting a missing parameter:

    >>> error = InvalidArgumentError("repository= is required", parameter="repository")
    >>> error.retryable
    False
    >>> error.parameter
    'repository'

    Identifying which entity was missing:

    >>> error = RevisionNotFoundError("rev9", repository="sales")
    >>> error.entity
    'revision'
    >>> error.context.repository
    'sales'

Guardrails:
    ❌ DON'T: Raise bare ValueError/KeyError for caller mistakes
    ✅ DO: Raise InvalidArgumentError naming the offending parameter

    ❌ DON'T: Collapse "repository missing" and "workflow missing" into one message
    ✅ DO: Raise the entity-specific ResourceNotFoundError subclass

    ❌ DON'T: Wrap storage or scheduler failures in these types
    ✅ DO: Let collaborator failures propagate unchanged

Tags:
    error-handling, exception-hierarchy, retry-logic, error-context,
    session-spine, not-found, invalid-argument

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and routing.

    Categories are grouped by their typical retry behavior:
    - **Caller errors (never retryable):** VALIDATION, NOT_FOUND
    - **Configuration (never retryable):** CONFIG
    - **Infrastructure (usually transient):** NETWORK, STORAGE
    - **Internal errors:** INTERNAL, UNKNOWN

    Examples:
        >>> ErrorCategory.NOT_FOUND.value
        'NOT_FOUND'
    """

    # Caller errors
    VALIDATION = "VALIDATION"     # Missing/invalid parameters
    NOT_FOUND = "NOT_FOUND"       # Unknown repository, revision, workflow

    # Configuration errors
    CONFIG = "CONFIG"             # Broken schedule or catalog definitions

    # Infrastructure errors
    NETWORK = "NETWORK"           # Connection, timeout, DNS
    STORAGE = "STORAGE"           # Store backend failures

    # Internal errors
    INTERNAL = "INTERNAL"         # Bugs, unexpected state
    UNKNOWN = "UNKNOWN"           # Uncategorized errors


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Typed fields cover the lookup coordinates every session-spine request
    carries; anything else goes into ``metadata``. ``to_dict()`` serializes
    all non-None fields for logging.

    Examples:
        >>> ctx = ErrorContext(site_id=1, repository="sales", workflow="daily_report")
        >>> ctx.to_dict()
        {'site_id': 1, 'repository': 'sales', 'workflow': 'daily_report'}

    Attributes:
        site_id: Tenant the request was scoped to
        repository: Repository name
        revision: Revision name
        workflow: Workflow name
        workflow_id: Numeric workflow definition id
        metadata: Additional key-value pairs
    """

    site_id: int | None = None
    repository: str | None = None
    revision: str | None = None
    workflow: str | None = None
    workflow_id: int | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["site_id", "repository", "revision", "workflow", "workflow_id"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class SessionSpineError(Exception):
    """
    Base exception for all session-spine errors.

    All instances carry:
    - **category:** ErrorCategory enum for classification and routing
    - **retryable:** Boolean indicating if the operation can be retried
    - **retry_after:** Optional seconds to wait before retry
    - **context:** ErrorContext with structured metadata
    - **cause:** Optional underlying exception for chaining

    Subclasses set ``default_category`` and ``default_retryable`` to provide
    sensible defaults for their domain.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        retry_after: int | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.retry_after = retry_after
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> SessionSpineError:
        """
        Add context to this error (fluent API).

        Usage:
            raise WorkflowNotFoundError("daily_report").with_context(site_id=3)
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        if self.retry_after is not None:
            result["retry_after"] = self.retry_after
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(SessionSpineError):
    """
    Caller-supplied data failed validation.

    Never retryable - the request must be fixed.
    """

    default_category = ErrorCategory.VALIDATION
    default_retryable = False


class InvalidArgumentError(ValidationError):
    """A request parameter is missing, malformed or not allowed here."""

    def __init__(
        self,
        message: str,
        *,
        parameter: str | None = None,
        value: Any = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.parameter = parameter
        self.value = value

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.parameter:
            result["parameter"] = self.parameter
        if self.value is not None:
            result["value"] = repr(self.value)
        return result


class ScheduleNotConfiguredError(InvalidArgumentError):
    """A schedule-based truncation mode was requested for an unscheduled workflow."""

    def __init__(self, mode: str, **kwargs: Any):
        super().__init__(
            f"session_time_truncate={mode} is set but schedule is not set to this workflow",
            parameter="mode",
            value=mode,
            **kwargs,
        )
        self.mode = mode


# =============================================================================
# NOT FOUND ERRORS
# =============================================================================


class ResourceNotFoundError(SessionSpineError):
    """
    A repository, revision or workflow does not resolve within the site.

    ``entity`` names the kind of thing that was missing and ``key`` the
    name or id that was looked up, so callers can tell a typo in the
    repository name apart from a missing workflow.
    """

    default_category = ErrorCategory.NOT_FOUND
    default_retryable = False
    entity: str = "resource"

    def __init__(self, key: Any, message: str | None = None, **kwargs: Any):
        super().__init__(message or f"{self.entity.capitalize()} not found: {key}", **kwargs)
        self.key = key

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["entity"] = self.entity
        result["key"] = self.key
        return result


class RepositoryNotFoundError(ResourceNotFoundError):
    """Repository name does not exist in the caller's site."""

    entity = "repository"


class RevisionNotFoundError(ResourceNotFoundError):
    """Revision name (or any revision at all) does not exist in the repository."""

    entity = "revision"

    def __init__(self, key: Any, *, repository: str | None = None, **kwargs: Any):
        if repository is not None and "message" not in kwargs:
            kwargs["message"] = f"Revision not found: {key} (repository {repository})"
        super().__init__(key, **kwargs)
        self.context.repository = repository


class WorkflowNotFoundError(ResourceNotFoundError):
    """Workflow name or id does not resolve for the caller."""

    entity = "workflow"


# =============================================================================
# CONFIG ERRORS
# =============================================================================


class ConfigError(SessionSpineError):
    """
    Stored configuration is unusable.

    Never retryable - the definition or catalog must be fixed.
    """

    default_category = ErrorCategory.CONFIG
    default_retryable = False


class InvalidScheduleConfigError(ConfigError):
    """A workflow's ``schedule`` block cannot be turned into a scheduler."""

    def __init__(self, message: str, *, key: str | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.key = key


class InvalidCatalogError(ConfigError):
    """A catalog document is malformed."""

    def __init__(self, message: str, *, path: str | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.path = path


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def is_retryable(error: Exception) -> bool:
    """Check if an error is retryable."""
    if isinstance(error, SessionSpineError):
        return error.retryable
    retryable_types = (
        ConnectionError,
        BrokenPipeError,
        TimeoutError,
    )
    return isinstance(error, retryable_types)


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, SessionSpineError):
        return error.category
    if isinstance(error, (ConnectionError, TimeoutError)):
        return ErrorCategory.NETWORK
    if isinstance(error, OSError):
        return ErrorCategory.STORAGE
    if isinstance(error, ValueError):
        return ErrorCategory.VALIDATION
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "SessionSpineError",
    # Validation
    "ValidationError",
    "InvalidArgumentError",
    "ScheduleNotConfiguredError",
    # Not found
    "ResourceNotFoundError",
    "RepositoryNotFoundError",
    "RevisionNotFoundError",
    "WorkflowNotFoundError",
    # Config
    "ConfigError",
    "InvalidScheduleConfigError",
    "InvalidCatalogError",
    # Utilities
    "is_retryable",
    "categorize_error",
]
