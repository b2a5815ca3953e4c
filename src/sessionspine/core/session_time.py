"""Session-time truncation.

Manifesto:
    A session time identifies one run of a workflow, so two requests that
    mean "the same run" must land on exactly the same instant.  Hour and
    day boundaries are civil-calendar boundaries in the workflow's zone,
    not fixed-size epoch intervals: across a DST transition a "day" is 23
    or 25 hours long and the start of an hour can be an instant that never
    appeared on a wall clock.  Schedule-based modes defer to the
    workflow's own recurrence through a lazily supplied scheduler.

Architecture:
    ::

        raw time ──► LocalTimeOrInstant.to_instant(zone)
                          │
                          ▼
                 mode is None? ── yes ──► instant
                          │
              ┌───────────┼───────────────┬────────────────────┐
              ▼           ▼               ▼                    ▼
            NONE        HOUR / DAY     SCHEDULE           NEXT_SCHEDULE
              │      civil truncation      │                    │
              │         in zone            └──── supplier() ────┘
              │           │                   None → ScheduleNotConfiguredError
              ▼           ▼                        │
           instant    instant (UTC)     first (>=) / next (>) occurrence

Guardrails:
    ❌ DON'T: Truncate with ``timestamp // 3600`` arithmetic
    ✅ DO: Truncate the civil date-time in the workflow's zone

    ❌ DON'T: Build the scheduler before knowing the mode needs one
    ✅ DO: Call the supplier only for SCHEDULE / NEXT_SCHEDULE

Tags:
    session-spine, session-time, truncation, timezone, dst, scheduler

Doc-Types:
    api-reference, algorithm
"""

from __future__ import annotations

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from sessionspine.core.errors import InvalidArgumentError, ScheduleNotConfiguredError
from sessionspine.core.logging import get_logger
from sessionspine.core.models import LocalTimeOrInstant, SessionTimeTruncate
from sessionspine.core.protocols import SchedulerSupplier

logger = get_logger(__name__)


def _civil(instant: datetime, time_zone: ZoneInfo) -> datetime:
    """``instant`` as a wall-clock time in ``time_zone``.

    Raises:
        InvalidArgumentError: The wall-clock time is outside the datetime range.
    """
    try:
        return instant.astimezone(time_zone)
    except OverflowError:
        raise InvalidArgumentError(
            f"session_time {instant.isoformat()} is out of range in {time_zone.key}",
            parameter="session_time",
            value=instant.isoformat(),
        ) from None


def truncate_to_hour(instant: datetime, time_zone: ZoneInfo) -> datetime:
    """Start of the civil hour containing ``instant`` in ``time_zone``."""
    local = _civil(instant, time_zone)
    # replace() keeps fold, so the second 01:xx of a fall-back night stays in its own hour
    return local.replace(minute=0, second=0, microsecond=0).astimezone(UTC)


def truncate_to_day(instant: datetime, time_zone: ZoneInfo) -> datetime:
    """Civil midnight of the day containing ``instant`` in ``time_zone``.

    If midnight itself is skipped by a DST transition, this is the
    transition instant (the first wall-clock time of that day).
    """
    local = _civil(instant, time_zone)
    return local.replace(hour=0, minute=0, second=0, microsecond=0).astimezone(UTC)


def truncate_session_time(
    raw_time: LocalTimeOrInstant | datetime,
    time_zone: ZoneInfo,
    mode: SessionTimeTruncate | None,
    scheduler_supplier: SchedulerSupplier,
) -> datetime:
    """Resolve a requested time into a session time.

    Args:
        raw_time: Absolute instant, or a local (naive) date-time that is
            interpreted in ``time_zone``
        time_zone: The workflow's zone
        mode: Truncation mode; ``None`` returns the converted instant unchanged
        scheduler_supplier: Deferred scheduler lookup for the workflow,
            called only for SCHEDULE / NEXT_SCHEDULE

    Returns:
        UTC-aware datetime

    Raises:
        ScheduleNotConfiguredError: Schedule-based mode on an unscheduled workflow.
        InvalidArgumentError: Unrecognized mode value, or a time that cannot
            be represented in ``time_zone``.
    """
    instant = LocalTimeOrInstant.of(raw_time).to_instant(time_zone)
    # results are also shown as wall-clock time in the workflow zone
    _civil(instant, time_zone)

    if mode is None:
        return instant

    if not isinstance(mode, SessionTimeTruncate):
        raise InvalidArgumentError(
            f"Unknown session time truncation mode {mode!r}", parameter="mode", value=mode
        )

    match mode:
        case SessionTimeTruncate.NONE:
            truncated = instant
        case SessionTimeTruncate.HOUR:
            truncated = truncate_to_hour(instant, time_zone)
        case SessionTimeTruncate.DAY:
            truncated = truncate_to_day(instant, time_zone)
        case SessionTimeTruncate.SCHEDULE | SessionTimeTruncate.NEXT_SCHEDULE:
            scheduler = scheduler_supplier()
            if scheduler is None:
                raise ScheduleNotConfiguredError(mode.value)
            if mode is SessionTimeTruncate.SCHEDULE:
                truncated = scheduler.get_first_schedule_time(instant).time
            else:
                truncated = scheduler.next_schedule_time(instant).time
            truncated = truncated.astimezone(UTC)
        case _:
            raise InvalidArgumentError(
                f"Unsupported session time truncation mode {mode.value!r}",
                parameter="mode",
                value=mode.value,
            )

    logger.debug(
        "session_time.truncated",
        mode=mode.value,
        time_zone=str(time_zone),
        requested=instant.isoformat(),
        truncated=truncated.isoformat(),
    )
    return truncated


__all__ = [
    "truncate_session_time",
    "truncate_to_hour",
    "truncate_to_day",
]
