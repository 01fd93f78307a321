"""Unit tests for date coercion and range expansion."""
from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from redis_metrics.counters.granularity import Granularity
from redis_metrics.counters.ranges import (
    expand_range,
    iso_label,
    shift_years,
    step,
    to_utc_datetime,
    truncate,
)
from redis_metrics.kernel.errors import InvalidArgumentError


def _utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=UTC)


class TestToUtcDatetime:
    def test_aware_datetime(self) -> None:
        value = datetime(2015, 1, 1, 2, tzinfo=timezone(timedelta(hours=2)))
        assert to_utc_datetime(value) == _utc(2015, 1, 1, 0)

    def test_naive_datetime(self) -> None:
        assert to_utc_datetime(datetime(2015, 1, 1)) == _utc(2015, 1, 1)

    def test_date(self) -> None:
        assert to_utc_datetime(date(2015, 3, 4)) == _utc(2015, 3, 4)

    def test_iso_string_with_z(self) -> None:
        assert to_utc_datetime("2015-01-02T03:04:05Z") == _utc(2015, 1, 2, 3, 4, 5)

    def test_iso_date_string(self) -> None:
        assert to_utc_datetime("2014-02-01") == _utc(2014, 2, 1)

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("2014", _utc(2014, 1, 1)), ("2014-03", _utc(2014, 3, 1)), (" 2015-12 ", _utc(2015, 12, 1))],
    )
    def test_reduced_precision_iso_string(self, value: str, expected: datetime) -> None:
        assert to_utc_datetime(value) == expected

    @pytest.mark.parametrize("value", ["2014-13", "201", "2014-3-"])
    def test_rejects_malformed_reduced_iso_string(self, value: str) -> None:
        with pytest.raises(InvalidArgumentError):
            to_utc_datetime(value)

    def test_epoch_milliseconds(self) -> None:
        assert to_utc_datetime(1420167845000) == _utc(2015, 1, 2, 3, 4, 5)

    @pytest.mark.parametrize("value", [10**20, -(10**20), 10**400])
    def test_out_of_range_epoch_milliseconds(self, value: int) -> None:
        with pytest.raises(InvalidArgumentError) as info:
            to_utc_datetime(value, argument="start_date")
        assert info.value.argument == "start_date"

    def test_field_mapping(self) -> None:
        assert to_utc_datetime({"year": 2014}) == _utc(2014, 1, 1)
        assert to_utc_datetime({"year": 2014, "month": 5, "hour": 3}) == _utc(2014, 5, 1, 3)

    @pytest.mark.parametrize("value", ["not a date", {"week": 3}, {"year": 2014, "month": 13}, object(), True])
    def test_rejects_garbage(self, value: object) -> None:
        with pytest.raises(InvalidArgumentError):
            to_utc_datetime(value)


class TestTruncate:
    instant = _utc(2015, 6, 17, 13, 45, 30, 123456)

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            (Granularity.YEAR, _utc(2015, 1, 1)),
            (Granularity.MONTH, _utc(2015, 6, 1)),
            (Granularity.DAY, _utc(2015, 6, 17)),
            (Granularity.HOUR, _utc(2015, 6, 17, 13)),
            (Granularity.MINUTE, _utc(2015, 6, 17, 13, 45)),
            (Granularity.SECOND, _utc(2015, 6, 17, 13, 45, 30)),
        ],
    )
    def test_zeroes_finer_fields(self, level: Granularity, expected: datetime) -> None:
        assert truncate(self.instant, level) == expected

    def test_none_leaves_instant_untouched(self) -> None:
        assert truncate(self.instant, Granularity.NONE) == self.instant


class TestStep:
    def test_month_rolls_over_year(self) -> None:
        assert step(_utc(2014, 12, 1), Granularity.MONTH) == _utc(2015, 1, 1)

    def test_day_handles_leap_year(self) -> None:
        assert step(_utc(2016, 2, 28), Granularity.DAY) == _utc(2016, 2, 29)

    def test_none_cannot_step(self) -> None:
        with pytest.raises(InvalidArgumentError):
            step(_utc(2016, 2, 28), Granularity.NONE)


class TestShiftYears:
    def test_plain(self) -> None:
        assert shift_years(_utc(2020, 5, 1), -5) == _utc(2015, 5, 1)

    def test_leap_day(self) -> None:
        assert shift_years(_utc(2020, 2, 29), -5) == _utc(2015, 2, 28)


class TestExpandRange:
    def test_start_is_required(self) -> None:
        with pytest.raises(InvalidArgumentError, match="start_date"):
            expand_range(None, _utc(2015, 1, 1), Granularity.YEAR)

    def test_years_inclusive(self) -> None:
        assert expand_range({"year": 2014}, {"year": 2015}, Granularity.YEAR) == [_utc(2014, 1, 1), _utc(2015, 1, 1)]

    def test_end_inside_last_bucket(self) -> None:
        result = expand_range(_utc(2014, 6, 1), _utc(2015, 3, 1), Granularity.YEAR)
        assert result == [_utc(2014, 1, 1), _utc(2015, 1, 1)]

    def test_end_exactly_on_boundary_is_included(self) -> None:
        result = expand_range(_utc(2015, 1, 1, 22), _utc(2015, 1, 2), Granularity.HOUR)
        assert result == [_utc(2015, 1, 1, 22), _utc(2015, 1, 1, 23), _utc(2015, 1, 2, 0)]

    def test_reduced_precision_bounds(self) -> None:
        assert expand_range("2014", "2015", Granularity.YEAR) == [_utc(2014, 1, 1), _utc(2015, 1, 1)]

    def test_months_across_year_end(self) -> None:
        result = expand_range("2014-11-15", "2015-02-03", Granularity.MONTH)
        assert result == [_utc(2014, 11, 1), _utc(2014, 12, 1), _utc(2015, 1, 1), _utc(2015, 2, 1)]

    def test_seconds(self) -> None:
        result = expand_range(_utc(2015, 1, 1, 0, 0, 58, 500), _utc(2015, 1, 1, 0, 1, 1), Granularity.SECOND)
        assert len(result) == 4
        assert result[0] == _utc(2015, 1, 1, 0, 0, 58)
        assert result[-1] == _utc(2015, 1, 1, 0, 1, 1)

    def test_start_after_end_is_empty(self) -> None:
        assert expand_range(_utc(2016, 1, 1), _utc(2015, 1, 1), Granularity.DAY) == []

    def test_none_collapses_to_end(self) -> None:
        end = _utc(2015, 1, 1, 12)
        assert expand_range(_utc(2010, 1, 1), end, Granularity.NONE) == [end]

    def test_ascending(self) -> None:
        result = expand_range(_utc(2015, 1, 1), _utc(2015, 3, 1), Granularity.DAY)
        assert result == sorted(result)
        assert len(result) == 31 + 28 + 1


class TestIsoLabel:
    def test_format(self) -> None:
        assert iso_label(_utc(2014, 1, 1)) == "2014-01-01T00:00:00Z"
