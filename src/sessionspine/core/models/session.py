"""Session-time value types: raw input times, truncation modes and schedule times.

Manifesto:
    A session time is the canonical instant identifying one run of a
    workflow.  Callers hand us either an absolute instant or a wall-clock
    time with no zone; only the workflow knows which zone that wall clock
    belongs to.  ``LocalTimeOrInstant`` keeps that distinction explicit
    until the workflow's zone is known.

Tags:
    session-spine, models, session-time, timezone, truncation

Doc-Types:
    api-reference, data-model
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from zoneinfo import ZoneInfo

from sessionspine.core.errors import InvalidArgumentError


class SessionTimeTruncate(str, Enum):
    """How a raw requested time is normalized into a session time.

    ``NONE`` is an explicit no-op.  Omitting the mode altogether is
    represented by ``None`` at call sites, not by this member.
    """

    NONE = "none"
    HOUR = "hour"
    DAY = "day"
    SCHEDULE = "schedule"
    NEXT_SCHEDULE = "next_schedule"

    @property
    def requires_schedule(self) -> bool:
        return self in (SessionTimeTruncate.SCHEDULE, SessionTimeTruncate.NEXT_SCHEDULE)

    @classmethod
    def parse(cls, text: str) -> SessionTimeTruncate:
        """Parse ``"hour"``, ``"DAY"``, ``"next_schedule"`` ... case-insensitively."""
        normalized = text.strip().lower() if text else ""
        try:
            return cls(normalized)
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            raise InvalidArgumentError(
                f"Unknown session time truncation mode {text!r} (expected one of: {allowed})",
                parameter="mode",
                value=text,
            ) from None


@dataclass(frozen=True, slots=True)
class LocalTimeOrInstant:
    """A requested session time that may or may not carry a zone.

    Naive datetimes are *local* and are interpreted against the workflow's
    zone by :meth:`to_instant`; aware datetimes are absolute instants and
    pass through unchanged.
    """

    value: datetime

    @property
    def is_local(self) -> bool:
        return self.value.tzinfo is None

    def to_instant(self, time_zone: ZoneInfo) -> datetime:
        """Resolve to an absolute instant (UTC-aware).

        Local times falling in a DST gap resolve forward by the gap length;
        local times repeated by a DST overlap take the earlier offset.

        Raises:
            InvalidArgumentError: The instant falls outside the datetime range
                once converted (e.g. local 9999-12-31T23:00 west of UTC).
        """
        try:
            if self.is_local:
                # fold=0 picks the pre-transition offset for both gaps and overlaps
                return self.value.replace(tzinfo=time_zone, fold=0).astimezone(UTC)
            return self.value.astimezone(UTC)
        except OverflowError:
            raise InvalidArgumentError(
                f"session_time {self} is out of range in {time_zone.key}",
                parameter="session_time",
                value=str(self),
            ) from None

    @classmethod
    def of(cls, value: LocalTimeOrInstant | datetime) -> LocalTimeOrInstant:
        if isinstance(value, LocalTimeOrInstant):
            return value
        return cls(value)

    @classmethod
    def parse(cls, text: str) -> LocalTimeOrInstant:
        """Parse an ISO-8601 date-time.

        Examples:
            >>> LocalTimeOrInstant.parse("2024-03-10T02:30:00").is_local
            True
            >>> LocalTimeOrInstant.parse("2024-03-10T02:30:00Z").is_local
            False
        """
        if not text or not text.strip():
            raise InvalidArgumentError("session_time= is required", parameter="session_time")
        try:
            return cls(datetime.fromisoformat(text.strip()))
        except ValueError:
            raise InvalidArgumentError(
                f"Invalid session_time {text!r}: expected ISO-8601 such as "
                "2024-03-10T02:30:00 or 2024-03-10T02:30:00+09:00",
                parameter="session_time",
                value=text,
            ) from None

    def __str__(self) -> str:
        return self.value.isoformat()


@dataclass(frozen=True, slots=True)
class ScheduleTime:
    """One scheduled occurrence.

    Attributes:
        time: Session time of the occurrence
        run_time: When the run actually fires (``time`` plus the schedule delay)
    """

    time: datetime
    run_time: datetime

    @classmethod
    def of(cls, time: datetime, run_time: datetime | None = None) -> ScheduleTime:
        return cls(time=time, run_time=run_time if run_time is not None else time)
