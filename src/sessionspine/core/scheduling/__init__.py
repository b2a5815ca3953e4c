"""Scheduling package for session-spine.

Schedule-based truncation modes need the workflow's recurrence.  This
package turns a workflow's ``schedule`` block into a scheduler that answers
occurrence queries; the recurrence math itself is croniter's.

┌──────────────────────────────────────────────────────────────────────────────┐
│  definition.schedule_config                                                   │
│        │                                                                      │
│        ▼                                                                      │
│  ScheduleConfig.from_mapping()   cron>, minutes_interval>, hourly>, daily>,   │
│        │                         weekly>, monthly>, delay                     │
│        ▼                                                                      │
│  CronScheduler(config, zone)     get_first_schedule_time (>=)                 │
│                                  next_schedule_time      (>)                  │
│                                  last_schedule_time      (<)                  │
│                                                                               │
│  SchedulerManager.try_get_scheduler(definition) -> Scheduler | None           │
│  SchedulerManager.supplier_for(definition)      -> () -> Scheduler | None     │
└──────────────────────────────────────────────────────────────────────────────┘

Dependencies:
    - croniter: Cron expression evaluation

Tags:
    session-spine, scheduling, cron, croniter

Doc-Types:
    package-overview, module-index
"""

from __future__ import annotations

from .config import SCHEDULE_KINDS, ScheduleConfig
from .cron import CronScheduler
from .manager import SchedulerManager

__all__ = [
    "SCHEDULE_KINDS",
    "ScheduleConfig",
    "CronScheduler",
    "SchedulerManager",
]
