"""Tests for sessionspine.core.timestamps."""

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

import pytest

from sessionspine.core.errors import InvalidArgumentError
from sessionspine.core.timestamps import in_time_zone, resolve_time_zone, to_iso8601, utc_now


class TestResolveTimeZone:
    def test_known_zone(self):
        assert resolve_time_zone("Asia/Tokyo") == ZoneInfo("Asia/Tokyo")

    @pytest.mark.parametrize("name", ["Mars/Olympus", "../etc/passwd"])
    def test_unknown_zone(self, name):
        with pytest.raises(InvalidArgumentError) as exc_info:
            resolve_time_zone(name)
        assert exc_info.value.parameter == "timezone"

    def test_empty_zone(self):
        with pytest.raises(InvalidArgumentError, match="timezone is required"):
            resolve_time_zone("")

    @pytest.mark.parametrize("name", [9, 5.5, ["UTC"]])
    def test_non_string_zone(self, name):
        with pytest.raises(InvalidArgumentError) as exc_info:
            resolve_time_zone(name)
        assert exc_info.value.parameter == "timezone"


class TestRendering:
    def test_utc_now_is_aware(self):
        assert utc_now().tzinfo is UTC

    def test_utc_uses_z_suffix(self):
        assert to_iso8601(datetime(2024, 3, 10, 10, 0, tzinfo=UTC)) == "2024-03-10T10:00:00Z"

    def test_zone_keeps_offset(self):
        local = in_time_zone(datetime(2024, 3, 10, 10, 0, tzinfo=UTC), ZoneInfo("America/Los_Angeles"))
        assert to_iso8601(local) == "2024-03-10T03:00:00-07:00"

    def test_in_time_zone_rejects_naive(self):
        with pytest.raises(ValueError):
            in_time_zone(datetime(2024, 1, 1), ZoneInfo("UTC"))
