"""Tests for ScheduleConfig parsing."""

import pytest

from sessionspine.core.errors import InvalidScheduleConfigError
from sessionspine.core.scheduling import ScheduleConfig


class TestScheduleKinds:
    """Each ``<kind>>`` shorthand maps to a cron expression and a delay."""

    @pytest.mark.parametrize(
        "config, cron, delay",
        [
            ({"cron>": "0 7 * * *"}, "0 7 * * *", 0),
            ({"minutes_interval>": 15}, "*/15 * * * *", 0),
            ({"hourly>": "30:15"}, "0 * * * *", 30 * 60 + 15),
            ({"daily>": "07:00:00"}, "0 0 * * *", 7 * 3600),
            ({"weekly>": "Sun,09:30:00"}, "0 0 * * sun", 9 * 3600 + 30 * 60),
            ({"weekly>": "monday,00:00:00"}, "0 0 * * mon", 0),
            ({"monthly>": "1,09:00:00"}, "0 0 1 * *", 9 * 3600),
        ],
    )
    def test_parse(self, config, cron, delay):
        parsed = ScheduleConfig.from_mapping(config)
        assert parsed.cron == cron
        assert parsed.delay_seconds == delay
        assert parsed.kind == next(iter(config))[:-1]

    def test_delay_adds_to_shorthand(self):
        parsed = ScheduleConfig.from_mapping({"daily>": "07:00:00", "delay": 600})
        assert parsed.delay_seconds == 7 * 3600 + 600

    def test_expression_is_kept_as_written(self):
        assert ScheduleConfig.from_mapping({"daily>": "07:00:00"}).expression == "07:00:00"


class TestInvalidConfigs:
    @pytest.mark.parametrize(
        "config",
        [
            {},
            {"delay": 10},
            {"daily>": "07:00:00", "hourly>": "00:00"},
            {"yearly>": "01-01"},
            {"cron>": "not a cron"},
            {"minutes_interval>": 0},
            {"minutes_interval>": 60},
            {"minutes_interval>": "often"},
            {"hourly>": "61:00"},
            {"daily>": "7am"},
            {"daily>": "25:00:00"},
            {"weekly>": "Someday,09:00:00"},
            {"weekly>": "09:00:00"},
            {"monthly>": "32,09:00:00"},
            {"monthly>": "first,09:00:00"},
            {"daily>": "07:00:00", "delay": -1},
            {"daily>": "07:00:00", "delay": "10"},
            {"daily>": "07:00:00", "delay": True},
        ],
    )
    def test_rejected(self, config):
        with pytest.raises(InvalidScheduleConfigError):
            ScheduleConfig.from_mapping(config)

    def test_error_names_the_key(self):
        with pytest.raises(InvalidScheduleConfigError) as exc_info:
            ScheduleConfig.from_mapping({"daily>": "25:00:00"})
        assert exc_info.value.key == "daily>"
