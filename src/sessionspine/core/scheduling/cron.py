"""Cron-based scheduler backed by croniter.

Manifesto:
    Occurrence math belongs to a library that already handles month
    lengths, weekday rules and DST, not to hand-written loops.  This
    module only adapts croniter to the :class:`~sessionspine.core.protocols.Scheduler`
    contract: evaluate in the workflow's zone, return UTC instants, and be
    exact about "at or after" versus "strictly after".

Tags:
    session-spine, scheduling, cron, croniter, timezone

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

from croniter import croniter

from sessionspine.core.errors import InvalidArgumentError
from sessionspine.core.models import ScheduleTime
from sessionspine.core.scheduling.config import ScheduleConfig

_ONE_SECOND = timedelta(seconds=1)


class CronScheduler:
    """Scheduler for one workflow, evaluating its cron in the workflow's zone.

    Example:
        >>> config = ScheduleConfig.from_mapping({"daily>": "07:00:00"})
        >>> scheduler = CronScheduler(config, ZoneInfo("Asia/Tokyo"))
        >>> scheduler.next_schedule_time(datetime(2024, 1, 1, 12, tzinfo=UTC)).time
        datetime.datetime(2024, 1, 1, 15, 0, tzinfo=datetime.timezone.utc)
    """

    def __init__(self, config: ScheduleConfig, time_zone: ZoneInfo) -> None:
        self.config = config
        self.time_zone = time_zone
        self.delay = timedelta(seconds=config.delay_seconds)

    def get_first_schedule_time(self, current_time: datetime) -> ScheduleTime:
        """First occurrence with session time ``>= current_time``."""
        with self._within_range(current_time):
            start = current_time.astimezone(UTC)
            if start.microsecond:
                # strictly after the whole second below is at-or-after current_time
                start = start.replace(microsecond=0)
            else:
                start = start - _ONE_SECOND
            return self._occurrence(self._iter(start).get_next(datetime))

    def next_schedule_time(self, last_schedule_time: datetime) -> ScheduleTime:
        """First occurrence with session time ``> last_schedule_time``."""
        with self._within_range(last_schedule_time):
            start = last_schedule_time.astimezone(UTC).replace(microsecond=0)
            return self._occurrence(self._iter(start).get_next(datetime))

    def last_schedule_time(self, current_time: datetime) -> ScheduleTime:
        """Latest occurrence with session time ``< current_time``."""
        with self._within_range(current_time):
            start = current_time.astimezone(UTC)
            if start.microsecond:
                start = start.replace(microsecond=0) + _ONE_SECOND
            return self._occurrence(self._iter(start).get_prev(datetime))

    @contextmanager
    def _within_range(self, requested: datetime) -> Iterator[None]:
        try:
            yield
        except (ValueError, OverflowError):
            # croniter reports running past year 1 or 9999 as CroniterBadDateError, a ValueError
            raise InvalidArgumentError(
                f"No {self.config.kind}> occurrence within the supported date range "
                f"around {requested.isoformat()}",
                parameter="session_time",
                value=requested.isoformat(),
            ) from None

    def _iter(self, start: datetime) -> croniter:
        return croniter(self.config.cron, start.astimezone(self.time_zone))

    def _occurrence(self, session_time: datetime) -> ScheduleTime:
        time = session_time.astimezone(UTC)
        return ScheduleTime(time=time, run_time=time + self.delay)

    def __repr__(self) -> str:
        return (
            f"CronScheduler({self.config.kind}>: {self.config.expression!r}, "
            f"cron={self.config.cron!r}, time_zone={self.time_zone.key!r})"
        )


__all__ = ["CronScheduler"]
