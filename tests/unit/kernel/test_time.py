"""Unit tests for kernel time utilities."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

from redis_metrics.kernel.time import Clock, FrozenClock, SystemClock


class TestSystemClock:
    def test_now_returns_utc_aware_datetime(self) -> None:
        result = SystemClock().now()
        assert isinstance(result, datetime)
        assert result.utcoffset() == timedelta(0)

    def test_now_close_to_wall_clock(self) -> None:
        delta = abs((SystemClock().now() - datetime.now(UTC)).total_seconds())
        assert delta < 1.0

    def test_satisfies_protocol(self) -> None:
        clock: Clock = SystemClock()
        assert clock.now() is not None


class TestFrozenClock:
    def _fixed(self) -> datetime:
        return datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC)

    def test_now_returns_fixed_time(self) -> None:
        assert FrozenClock(self._fixed()).now() == self._fixed()

    def test_naive_input_is_taken_as_utc(self) -> None:
        clk = FrozenClock(datetime(2024, 6, 15, 12, 0, 0))
        assert clk.now() == self._fixed()

    def test_other_timezones_are_converted(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        clk = FrozenClock(datetime(2024, 6, 15, 14, 0, 0, tzinfo=plus_two))
        assert clk.now() == self._fixed()
        assert clk.now().tzinfo == UTC

    def test_advance_by_seconds(self) -> None:
        clk = FrozenClock(self._fixed())
        clk.advance(seconds=30)
        assert clk.now() == datetime(2024, 6, 15, 12, 0, 30, tzinfo=UTC)

    def test_advance_by_days(self) -> None:
        clk = FrozenClock(self._fixed())
        clk.advance(days=365)
        assert clk.now() == datetime(2025, 6, 15, 12, 0, 0, tzinfo=UTC)

    def test_set_jumps(self) -> None:
        clk = FrozenClock(self._fixed())
        clk.set(datetime(2014, 2, 1))
        assert clk.now() == datetime(2014, 2, 1, tzinfo=UTC)
