"""Tests for CronScheduler occurrence math."""

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from sessionspine.core.errors import InvalidArgumentError
from sessionspine.core.scheduling import CronScheduler, ScheduleConfig

TOKYO = ZoneInfo("Asia/Tokyo")
LOS_ANGELES = ZoneInfo("America/Los_Angeles")
UTC_ZONE = ZoneInfo("UTC")


def _scheduler(config: dict, zone: ZoneInfo = UTC_ZONE) -> CronScheduler:
    return CronScheduler(ScheduleConfig.from_mapping(config), zone)


class TestDailyInTokyo:
    """``daily>: 07:00:00`` in Asia/Tokyo: sessions at 00:00 JST (15:00 UTC)."""

    @pytest.fixture
    def scheduler(self):
        return _scheduler({"daily>": "07:00:00"}, TOKYO)

    def test_next_from_mid_day(self, scheduler):
        occurrence = scheduler.next_schedule_time(datetime(2024, 1, 1, 12, tzinfo=UTC))
        assert occurrence.time == datetime(2024, 1, 1, 15, 0, tzinfo=UTC)
        assert occurrence.run_time == datetime(2024, 1, 1, 22, 0, tzinfo=UTC)

    def test_first_at_boundary_is_inclusive(self, scheduler):
        boundary = datetime(2024, 1, 1, 15, 0, tzinfo=UTC)
        assert scheduler.get_first_schedule_time(boundary).time == boundary

    def test_first_just_after_boundary(self, scheduler):
        later = datetime(2024, 1, 1, 15, 0, 0, 500000, tzinfo=UTC)
        assert scheduler.get_first_schedule_time(later).time == datetime(2024, 1, 2, 15, 0, tzinfo=UTC)

    def test_next_at_boundary_is_exclusive(self, scheduler):
        boundary = datetime(2024, 1, 1, 15, 0, tzinfo=UTC)
        assert scheduler.next_schedule_time(boundary).time == boundary + timedelta(days=1)

    def test_last_from_mid_day(self, scheduler):
        occurrence = scheduler.last_schedule_time(datetime(2024, 1, 2, 3, 0, tzinfo=UTC))
        assert occurrence.time == datetime(2024, 1, 1, 15, 0, tzinfo=UTC)

    def test_times_are_utc(self, scheduler):
        occurrence = scheduler.get_first_schedule_time(datetime(2024, 1, 1, tzinfo=UTC))
        assert occurrence.time.tzinfo is UTC
        assert occurrence.run_time.tzinfo is UTC

    def test_repr(self, scheduler):
        assert "daily>" in repr(scheduler)
        assert "Asia/Tokyo" in repr(scheduler)


class TestOtherKinds:
    def test_cron_session_is_cron_time(self):
        occurrence = _scheduler({"cron>": "0 7 * * *"}).get_first_schedule_time(
            datetime(2024, 1, 1, 6, 0, tzinfo=UTC)
        )
        assert occurrence.time == datetime(2024, 1, 1, 7, 0, tzinfo=UTC)
        assert occurrence.run_time == occurrence.time

    def test_hourly_delay(self):
        occurrence = _scheduler({"hourly>": "30:00"}).get_first_schedule_time(
            datetime(2024, 1, 1, 10, 10, tzinfo=UTC)
        )
        assert occurrence.time == datetime(2024, 1, 1, 11, 0, tzinfo=UTC)
        assert occurrence.run_time == datetime(2024, 1, 1, 11, 30, tzinfo=UTC)

    def test_minutes_interval(self):
        occurrence = _scheduler({"minutes_interval>": 15}).next_schedule_time(
            datetime(2024, 1, 1, 10, 15, tzinfo=UTC)
        )
        assert occurrence.time == datetime(2024, 1, 1, 10, 30, tzinfo=UTC)

    def test_weekly(self):
        # 2024-01-03 is a Wednesday; the following Sunday is 2024-01-07
        occurrence = _scheduler({"weekly>": "Sun,09:00:00"}).get_first_schedule_time(
            datetime(2024, 1, 3, 12, 0, tzinfo=UTC)
        )
        assert occurrence.time == datetime(2024, 1, 7, 0, 0, tzinfo=UTC)
        assert occurrence.run_time == datetime(2024, 1, 7, 9, 0, tzinfo=UTC)

    def test_monthly(self):
        occurrence = _scheduler({"monthly>": "1,09:00:00"}).get_first_schedule_time(
            datetime(2024, 1, 15, tzinfo=UTC)
        )
        assert occurrence.time == datetime(2024, 2, 1, 0, 0, tzinfo=UTC)

    def test_extra_delay(self):
        occurrence = _scheduler({"cron>": "0 7 * * *", "delay": 90}).next_schedule_time(
            datetime(2024, 1, 1, tzinfo=UTC)
        )
        assert occurrence.run_time - occurrence.time == timedelta(seconds=90)


# every 20 minutes across 2024-03-10 (spring forward at 10:00Z) and
# 2024-11-03 (fall back at 09:00Z)
DST_INSTANTS = [
    start + timedelta(minutes=20 * i)
    for start in (datetime(2024, 3, 10, 7, 0, tzinfo=UTC), datetime(2024, 11, 3, 6, 0, tzinfo=UTC))
    for i in range(16)
] + [datetime(2024, 11, 3, 8, 59, 59, 500000, tzinfo=UTC)]

DST_CONFIGS = [
    pytest.param({"cron>": "0 * * * *"}, id="cron-hourly"),
    pytest.param({"daily>": "07:00:00"}, id="daily"),
    pytest.param({"minutes_interval>": 15}, id="minutes-interval"),
]


class TestDaylightSavingInLosAngeles:
    @pytest.mark.parametrize("config", DST_CONFIGS)
    @pytest.mark.parametrize("t", DST_INSTANTS, ids=lambda t: t.isoformat())
    def test_first_is_at_or_after_and_next_is_after(self, config, t):
        scheduler = _scheduler(config, LOS_ANGELES)
        first = scheduler.get_first_schedule_time(t).time
        following = scheduler.next_schedule_time(t).time
        assert first >= t
        assert following > t
        assert first <= following

    def test_hourly_through_fall_back(self):
        scheduler = _scheduler({"cron>": "0 * * * *"}, LOS_ANGELES)
        times = []
        current = datetime(2024, 11, 3, 7, 0, tzinfo=UTC)  # 00:00 PDT
        for _ in range(3):
            current = scheduler.next_schedule_time(current).time
            times.append(current)
        assert times == [
            datetime(2024, 11, 3, 8, 0, tzinfo=UTC),  # 01:00 PDT
            datetime(2024, 11, 3, 9, 0, tzinfo=UTC),  # 01:00 PST
            datetime(2024, 11, 3, 10, 0, tzinfo=UTC),  # 02:00 PST
        ]

    def test_hourly_through_spring_forward(self):
        scheduler = _scheduler({"cron>": "0 * * * *"}, LOS_ANGELES)
        # 01:00 PST, then 02:00 does not exist
        following = scheduler.next_schedule_time(datetime(2024, 3, 10, 9, 0, tzinfo=UTC)).time
        assert datetime(2024, 3, 10, 9, 0, tzinfo=UTC) < following <= datetime(2024, 3, 10, 10, 0, tzinfo=UTC)

    @pytest.mark.parametrize(
        "day_start, next_day_start",
        [
            # 23-hour day: 00:00 PST to 00:00 PDT
            (datetime(2024, 3, 10, 8, 0, tzinfo=UTC), datetime(2024, 3, 11, 7, 0, tzinfo=UTC)),
            # 25-hour day: 00:00 PDT to 00:00 PST
            (datetime(2024, 11, 3, 7, 0, tzinfo=UTC), datetime(2024, 11, 4, 8, 0, tzinfo=UTC)),
        ],
    )
    def test_daily_sessions_are_local_midnight(self, day_start, next_day_start):
        scheduler = _scheduler({"daily>": "07:00:00"}, LOS_ANGELES)
        assert scheduler.get_first_schedule_time(day_start).time == day_start
        assert scheduler.next_schedule_time(day_start).time == next_day_start

    def test_minutes_interval_keeps_quarter_hours(self):
        scheduler = _scheduler({"minutes_interval>": 15}, LOS_ANGELES)
        t = datetime(2024, 11, 3, 8, 50, tzinfo=UTC)
        following = scheduler.next_schedule_time(t).time
        assert following.minute % 15 == 0
        assert t < following <= t + timedelta(minutes=15)


class TestDateRangeEdges:
    def test_next_after_year_9999_is_invalid_argument(self):
        with pytest.raises(InvalidArgumentError):
            _scheduler({"daily>": "07:00:00"}).next_schedule_time(datetime(9999, 12, 31, 12, tzinfo=UTC))
