"""Scheduler manager - builds a workflow's scheduler on demand.

Manifesto:
    Most session-time requests truncate to an hour or a day and never need
    the workflow's schedule.  Parsing the schedule block and building a
    scheduler is deferred until a schedule-based mode actually asks for it,
    so a broken schedule cannot fail a request that does not use it.

Tags:
    session-spine, scheduling, lazy, supplier, scheduler-manager

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol
from zoneinfo import ZoneInfo

from sessionspine.core.logging import get_logger
from sessionspine.core.protocols import Scheduler, SchedulerSupplier
from sessionspine.core.scheduling.config import ScheduleConfig
from sessionspine.core.scheduling.cron import CronScheduler

logger = get_logger(__name__)


class _Schedulable(Protocol):
    @property
    def name(self) -> str: ...

    @property
    def time_zone(self) -> ZoneInfo: ...

    @property
    def schedule_config(self) -> Mapping[str, Any] | None: ...


class SchedulerManager:
    """Turns workflow definitions into schedulers.

    Example:
        >>> manager = SchedulerManager()
        >>> supplier = manager.supplier_for(definition)   # nothing parsed yet
        >>> scheduler = supplier()                        # None if unscheduled
    """

    def try_get_scheduler(self, definition: _Schedulable) -> Scheduler | None:
        """Build the definition's scheduler, or ``None`` when it has no schedule.

        Raises:
            InvalidScheduleConfigError: The schedule block is malformed.
        """
        raw = definition.schedule_config
        if not raw:
            return None

        config = ScheduleConfig.from_mapping(raw)
        logger.debug(
            "scheduler.built",
            workflow=definition.name,
            kind=config.kind,
            cron=config.cron,
            delay_seconds=config.delay_seconds,
        )
        return CronScheduler(config, definition.time_zone)

    def supplier_for(self, definition: _Schedulable) -> SchedulerSupplier:
        """Deferred :meth:`try_get_scheduler` bound to ``definition``."""
        return lambda: self.try_get_scheduler(definition)


__all__ = ["SchedulerManager"]
