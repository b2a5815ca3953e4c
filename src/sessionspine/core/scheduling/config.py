"""Workflow schedule configuration.

Parses the ``schedule`` block of a workflow definition into a cron
expression plus a run delay.  The shorthand kinds anchor the *session*
time at the start of their period and express the wall-clock time of day
as a delay, so a ``daily>: 07:00:00`` workflow has session time 00:00 and
runs at 07:00.

Supported forms::

    cron>: "0 7 * * *"            session = cron time
    minutes_interval>: 15          session = every 15 minutes from :00
    hourly>: "30:00"               session = HH:00,         runs at HH:30:00
    daily>: "07:00:00"             session = 00:00,         runs at 07:00:00
    weekly>: "Sun,09:00:00"        session = Sunday 00:00,  runs at 09:00:00
    monthly>: "1,09:00:00"         session = day 1 00:00,   runs at 09:00:00
    delay: 600                     extra seconds added to the run time

Tags:
    session-spine, scheduling, cron, schedule-config, parsing

Doc-Types:
    api-reference
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from croniter import croniter

from sessionspine.core.errors import InvalidScheduleConfigError

_TIME_OF_DAY = re.compile(r"^(\d{1,2}):(\d{2}):(\d{2})$")
_MINUTE_OF_HOUR = re.compile(r"^(\d{1,2}):(\d{2})$")

_WEEKDAYS = {
    "sun": "sun", "sunday": "sun",
    "mon": "mon", "monday": "mon",
    "tue": "tue", "tuesday": "tue",
    "wed": "wed", "wednesday": "wed",
    "thu": "thu", "thursday": "thu",
    "fri": "fri", "friday": "fri",
    "sat": "sat", "saturday": "sat",
}

SCHEDULE_KINDS = ("cron", "minutes_interval", "hourly", "daily", "weekly", "monthly")


@dataclass(frozen=True, slots=True)
class ScheduleConfig:
    """A parsed schedule.

    Attributes:
        kind: One of ``SCHEDULE_KINDS``
        expression: The value as written in the workflow config
        cron: croniter expression producing session times
        delay_seconds: Offset from session time to run time
    """

    kind: str
    expression: str
    cron: str
    delay_seconds: int = 0

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> ScheduleConfig:
        """Parse a ``schedule`` block.

        Raises:
            InvalidScheduleConfigError: No or several ``<kind>>`` keys, an
                unknown kind, a malformed value or a negative delay.
        """
        operators = [key for key in config if isinstance(key, str) and key.endswith(">")]
        if len(operators) != 1:
            raise InvalidScheduleConfigError(
                f"schedule must have exactly one of {', '.join(k + '>' for k in SCHEDULE_KINDS)}; "
                f"got {operators or 'none'}"
            )
        key = operators[0]
        kind = key[:-1]
        value = config[key]

        match kind:
            case "cron":
                cron, delay = _parse_cron(value), 0
            case "minutes_interval":
                cron, delay = _parse_minutes_interval(value), 0
            case "hourly":
                minute, second = _split_minute_of_hour(value, key)
                cron, delay = "0 * * * *", minute * 60 + second
            case "daily":
                cron, delay = "0 0 * * *", _time_of_day_seconds(value, key)
            case "weekly":
                day, time_of_day = _split_day(value, key)
                weekday = _WEEKDAYS.get(day.lower())
                if weekday is None:
                    raise InvalidScheduleConfigError(
                        f"{key} day must be a weekday name such as Sun or Monday; got {day!r}",
                        key=key,
                    )
                cron, delay = f"0 0 * * {weekday}", _time_of_day_seconds(time_of_day, key)
            case "monthly":
                day, time_of_day = _split_day(value, key)
                if not day.isdigit() or not 1 <= int(day) <= 31:
                    raise InvalidScheduleConfigError(
                        f"{key} day must be between 1 and 31; got {day!r}", key=key
                    )
                cron, delay = f"0 0 {int(day)} * *", _time_of_day_seconds(time_of_day, key)
            case _:
                raise InvalidScheduleConfigError(f"Unknown schedule type {key}", key=key)

        extra = config.get("delay", 0)
        if not isinstance(extra, int) or isinstance(extra, bool) or extra < 0:
            raise InvalidScheduleConfigError(
                f"schedule delay must be a non-negative integer (seconds); got {extra!r}",
                key="delay",
            )

        return cls(kind=kind, expression=str(value), cron=cron, delay_seconds=delay + extra)


# ---------------------------------------------------------------------------
# Value parsers
# ---------------------------------------------------------------------------


def _parse_cron(value: Any) -> str:
    expression = str(value).strip()
    if not croniter.is_valid(expression):
        raise InvalidScheduleConfigError(f"Invalid cron expression: {value!r}", key="cron>")
    return expression


def _parse_minutes_interval(value: Any) -> str:
    try:
        minutes = int(value)
    except (TypeError, ValueError):
        minutes = 0
    if not 1 <= minutes <= 59:
        raise InvalidScheduleConfigError(
            f"minutes_interval> must be an integer between 1 and 59; got {value!r}",
            key="minutes_interval>",
        )
    return f"*/{minutes} * * * *"


def _time_of_day_seconds(value: Any, key: str) -> int:
    match = _TIME_OF_DAY.match(str(value).strip())
    if not match:
        raise InvalidScheduleConfigError(f"{key} expects HH:MM:SS; got {value!r}", key=key)
    hour, minute, second = (int(g) for g in match.groups())
    if hour > 23 or minute > 59 or second > 59:
        raise InvalidScheduleConfigError(f"{key} time out of range: {value!r}", key=key)
    return hour * 3600 + minute * 60 + second


def _split_minute_of_hour(value: Any, key: str) -> tuple[int, int]:
    match = _MINUTE_OF_HOUR.match(str(value).strip())
    if not match:
        raise InvalidScheduleConfigError(f"{key} expects MM:SS; got {value!r}", key=key)
    minute, second = int(match.group(1)), int(match.group(2))
    if minute > 59 or second > 59:
        raise InvalidScheduleConfigError(f"{key} time out of range: {value!r}", key=key)
    return minute, second


def _split_day(value: Any, key: str) -> tuple[str, str]:
    day, sep, time_of_day = str(value).partition(",")
    if not sep:
        raise InvalidScheduleConfigError(f"{key} expects <day>,HH:MM:SS; got {value!r}", key=key)
    return day.strip(), time_of_day.strip()


__all__ = ["ScheduleConfig", "SCHEDULE_KINDS"]
