"""Tests for sessionspine.core.session_time — civil truncation and schedule modes."""

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from sessionspine.core.errors import InvalidArgumentError, ScheduleNotConfiguredError
from sessionspine.core.models import LocalTimeOrInstant, SessionTimeTruncate
from sessionspine.core.scheduling import CronScheduler, ScheduleConfig
from sessionspine.core.session_time import truncate_session_time

TOKYO = ZoneInfo("Asia/Tokyo")
LOS_ANGELES = ZoneInfo("America/Los_Angeles")
KOLKATA = ZoneInfo("Asia/Kolkata")


def _no_scheduler():
    return None


def _truncate(raw, zone, mode):
    return truncate_session_time(raw, zone, mode, _no_scheduler)


SAMPLE_INSTANTS = [
    datetime(2024, 1, 1, 0, 0, tzinfo=UTC),
    datetime(2024, 3, 10, 9, 59, 59, 999999, tzinfo=UTC),
    datetime(2024, 3, 10, 10, 30, tzinfo=UTC),
    datetime(2024, 11, 3, 8, 30, tzinfo=UTC),
    datetime(2024, 11, 3, 9, 30, tzinfo=UTC),
    datetime(2024, 6, 30, 23, 59, 59, tzinfo=UTC),
]


class TestCivilTruncation:
    """HOUR and DAY modes work on the civil calendar of the workflow zone."""

    @pytest.mark.parametrize("zone", [ZoneInfo("UTC"), TOKYO, LOS_ANGELES, KOLKATA], ids=str)
    @pytest.mark.parametrize("mode", [SessionTimeTruncate.HOUR, SessionTimeTruncate.DAY])
    @pytest.mark.parametrize("instant", SAMPLE_INSTANTS)
    def test_idempotent(self, instant, mode, zone):
        once = _truncate(instant, zone, mode)
        assert _truncate(once, zone, mode) == once

    @pytest.mark.parametrize("zone", [TOKYO, LOS_ANGELES, KOLKATA], ids=str)
    @pytest.mark.parametrize("instant", SAMPLE_INSTANTS)
    def test_hour_zeroes_sub_hour_fields(self, instant, zone):
        local = _truncate(instant, zone, SessionTimeTruncate.HOUR).astimezone(zone)
        assert (local.minute, local.second, local.microsecond) == (0, 0, 0)

    @pytest.mark.parametrize("zone", [TOKYO, LOS_ANGELES, KOLKATA], ids=str)
    @pytest.mark.parametrize("instant", SAMPLE_INSTANTS)
    def test_day_zeroes_time_of_day(self, instant, zone):
        result = _truncate(instant, zone, SessionTimeTruncate.DAY)
        local = result.astimezone(zone)
        assert (local.hour, local.minute, local.second, local.microsecond) == (0, 0, 0, 0)
        assert local.date() == instant.astimezone(zone).date()

    def test_results_are_utc(self):
        for mode in (None, SessionTimeTruncate.NONE, SessionTimeTruncate.HOUR, SessionTimeTruncate.DAY):
            assert _truncate(datetime(2024, 1, 1, 12, 34), TOKYO, mode).tzinfo is UTC

    def test_day_in_tokyo(self):
        result = _truncate(datetime(2024, 1, 1, 12, 0, tzinfo=UTC), TOKYO, SessionTimeTruncate.DAY)
        assert result == datetime(2023, 12, 31, 15, 0, tzinfo=UTC)

    def test_half_hour_offset_zone(self):
        # 10:50 UTC is 16:20 in Kolkata
        result = _truncate(datetime(2024, 1, 1, 10, 50, tzinfo=UTC), KOLKATA, SessionTimeTruncate.HOUR)
        assert result == datetime(2024, 1, 1, 10, 30, tzinfo=UTC)


class TestDaylightSaving:
    """America/Los_Angeles: spring forward 2024-03-10, fall back 2024-11-03."""

    @pytest.mark.parametrize(
        "local",
        [
            datetime(2024, 3, 10, 0, 0),
            datetime(2024, 3, 10, 1, 59, 59),
            datetime(2024, 3, 10, 3, 0),
            datetime(2024, 3, 10, 12, 0),
            datetime(2024, 3, 10, 23, 59, 59),
        ],
    )
    def test_day_is_stable_across_spring_forward(self, local):
        result = _truncate(local, LOS_ANGELES, SessionTimeTruncate.DAY)
        assert result == datetime(2024, 3, 10, 8, 0, tzinfo=UTC)

    def test_hour_of_skipped_local_time(self):
        # 02:30 does not exist; it resolves to 03:30 PDT and truncates to 03:00 PDT
        result = _truncate(LocalTimeOrInstant.parse("2024-03-10T02:30:00"), LOS_ANGELES, SessionTimeTruncate.HOUR)
        assert result == datetime(2024, 3, 10, 10, 0, tzinfo=UTC)
        assert _truncate(result, LOS_ANGELES, SessionTimeTruncate.HOUR) == result

    def test_hour_of_skipped_local_time_is_deterministic(self):
        results = {
            _truncate(datetime(2024, 3, 10, 2, 30), LOS_ANGELES, SessionTimeTruncate.HOUR)
            for _ in range(5)
        }
        assert len(results) == 1

    def test_repeated_hour_keeps_its_offset(self):
        first = datetime(2024, 11, 3, 8, 30, tzinfo=UTC)  # 01:30 PDT
        second = datetime(2024, 11, 3, 9, 30, tzinfo=UTC)  # 01:30 PST
        assert _truncate(first, LOS_ANGELES, SessionTimeTruncate.HOUR) == datetime(2024, 11, 3, 8, 0, tzinfo=UTC)
        assert _truncate(second, LOS_ANGELES, SessionTimeTruncate.HOUR) == datetime(2024, 11, 3, 9, 0, tzinfo=UTC)

    def test_day_across_fall_back(self):
        result = _truncate(datetime(2024, 11, 3, 23, 0), LOS_ANGELES, SessionTimeTruncate.DAY)
        assert result == datetime(2024, 11, 3, 7, 0, tzinfo=UTC)


class TestNoTruncation:
    def test_omitted_mode_returns_converted_instant(self):
        result = _truncate(datetime(2024, 1, 1, 10, 15, 30), TOKYO, None)
        assert result == datetime(2024, 1, 1, 1, 15, 30, tzinfo=UTC)

    def test_none_mode_returns_converted_instant(self):
        result = _truncate(datetime(2024, 1, 1, 10, 15, 30), TOKYO, SessionTimeTruncate.NONE)
        assert result == datetime(2024, 1, 1, 1, 15, 30, tzinfo=UTC)

    def test_unknown_mode_value(self):
        with pytest.raises(InvalidArgumentError):
            _truncate(datetime(2024, 1, 1), TOKYO, "hour")


class TestScheduleModes:
    @pytest.fixture
    def daily_tokyo(self):
        return CronScheduler(ScheduleConfig.from_mapping({"daily>": "07:00:00"}), TOKYO)

    @pytest.mark.parametrize("mode", [SessionTimeTruncate.SCHEDULE, SessionTimeTruncate.NEXT_SCHEDULE])
    def test_schedule_mode_without_schedule(self, mode):
        with pytest.raises(ScheduleNotConfiguredError) as exc_info:
            _truncate(datetime(2024, 1, 1, 10, 0), TOKYO, mode)
        assert isinstance(exc_info.value, InvalidArgumentError)
        assert f"session_time_truncate={mode.value}" in exc_info.value.message

    def test_same_workflow_without_mode_succeeds(self):
        assert _truncate(datetime(2024, 1, 1, 10, 0), TOKYO, None) == datetime(2024, 1, 1, 1, 0, tzinfo=UTC)

    @pytest.mark.parametrize(
        "mode", [None, SessionTimeTruncate.NONE, SessionTimeTruncate.HOUR, SessionTimeTruncate.DAY]
    )
    def test_supplier_not_called_for_civil_modes(self, mode):
        calls = []

        def supplier():
            calls.append(1)
            return None

        truncate_session_time(datetime(2024, 1, 1, 10, 0), TOKYO, mode, supplier)
        assert calls == []

    def test_schedule_at_boundary_is_same_instant(self, daily_tokyo):
        boundary = datetime(2024, 1, 2, 0, 0)  # local midnight
        result = truncate_session_time(boundary, TOKYO, SessionTimeTruncate.SCHEDULE, lambda: daily_tokyo)
        assert result == datetime(2024, 1, 1, 15, 0, tzinfo=UTC)

    def test_next_schedule_at_boundary_is_strictly_later(self, daily_tokyo):
        boundary = datetime(2024, 1, 2, 0, 0)
        result = truncate_session_time(boundary, TOKYO, SessionTimeTruncate.NEXT_SCHEDULE, lambda: daily_tokyo)
        assert result == datetime(2024, 1, 2, 15, 0, tzinfo=UTC)

    @pytest.mark.parametrize(
        "local",
        [datetime(2024, 1, 1, 0, 0), datetime(2024, 1, 1, 10, 0), datetime(2024, 1, 1, 23, 59, 59, 500000)],
    )
    def test_schedule_ordering(self, daily_tokyo, local):
        t = LocalTimeOrInstant(local).to_instant(TOKYO)
        first = truncate_session_time(local, TOKYO, SessionTimeTruncate.SCHEDULE, lambda: daily_tokyo)
        following = truncate_session_time(local, TOKYO, SessionTimeTruncate.NEXT_SCHEDULE, lambda: daily_tokyo)
        assert first >= t
        assert following > t
        assert first - t < timedelta(days=1)
        assert following.tzinfo is UTC


class TestDateRangeEdges:
    """Valid ISO-8601 times whose conversion leaves the datetime range."""

    @pytest.mark.parametrize(
        "text, mode",
        [
            ("9999-12-31T23:00:00", SessionTimeTruncate.HOUR),
            ("9999-12-31T23:00:00", None),
            ("0001-01-01T00:30:00Z", SessionTimeTruncate.HOUR),
            ("0001-01-01T00:30:00Z", SessionTimeTruncate.DAY),
            ("0001-01-01T00:30:00Z", None),
        ],
    )
    def test_out_of_range_in_zone_is_invalid_argument(self, text, mode):
        with pytest.raises(InvalidArgumentError) as exc_info:
            _truncate(LocalTimeOrInstant.parse(text), LOS_ANGELES, mode)
        assert exc_info.value.parameter == "session_time"
        assert "out of range" in exc_info.value.message

    def test_same_edge_in_utc_is_fine(self):
        result = _truncate(LocalTimeOrInstant.parse("9999-12-31T23:30:00"), ZoneInfo("UTC"), SessionTimeTruncate.HOUR)
        assert result == datetime(9999, 12, 31, 23, 0, tzinfo=UTC)

    def test_no_next_occurrence_after_year_9999(self):
        daily = CronScheduler(ScheduleConfig.from_mapping({"daily>": "07:00:00"}), ZoneInfo("UTC"))
        with pytest.raises(InvalidArgumentError) as exc_info:
            truncate_session_time(
                datetime(9999, 12, 31, 12, 0), ZoneInfo("UTC"), SessionTimeTruncate.NEXT_SCHEDULE, lambda: daily
            )
        assert exc_info.value.parameter == "session_time"


class TestScheduleModesAcrossDaylightSaving:
    """Hourly sessions in America/Los_Angeles on both 2024 transition nights."""

    @pytest.fixture
    def hourly_la(self):
        return CronScheduler(ScheduleConfig.from_mapping({"cron>": "0 * * * *"}), LOS_ANGELES)

    def test_repeated_local_hour_is_its_own_session(self, hourly_la):
        # 01:00 PDT is 08:00Z, 01:00 PST is 09:00Z
        first = datetime(2024, 11, 3, 8, 0, tzinfo=UTC)
        assert truncate_session_time(first, LOS_ANGELES, SessionTimeTruncate.SCHEDULE, lambda: hourly_la) == first
        following = truncate_session_time(first, LOS_ANGELES, SessionTimeTruncate.NEXT_SCHEDULE, lambda: hourly_la)
        assert following == datetime(2024, 11, 3, 9, 0, tzinfo=UTC)

    @pytest.mark.parametrize(
        "local",
        [datetime(2024, 3, 10, 1, 30), datetime(2024, 3, 10, 2, 30), datetime(2024, 11, 3, 1, 30)],
    )
    def test_ordering_for_local_inputs(self, hourly_la, local):
        t = LocalTimeOrInstant(local).to_instant(LOS_ANGELES)
        first = truncate_session_time(local, LOS_ANGELES, SessionTimeTruncate.SCHEDULE, lambda: hourly_la)
        following = truncate_session_time(local, LOS_ANGELES, SessionTimeTruncate.NEXT_SCHEDULE, lambda: hourly_la)
        assert t <= first <= t + timedelta(hours=1)
        assert t < following <= t + timedelta(hours=1)
