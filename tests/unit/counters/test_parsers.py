"""Unit tests for store reply parsers."""
from __future__ import annotations

import pytest

from redis_metrics.counters.parsers import (
    parse_int,
    parse_int_list,
    parse_range,
    parse_range_total,
    parse_rank,
    parse_rank_range,
    parse_rank_total,
)


class TestParseInt:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("12", 12),
            (b"7", 7),
            (5, 5),
            (3.0, 3),
            ("  42abc", 42),
            ("-3", -3),
            (None, 0),
            ("", 0),
            ("abc", 0),
            (float("nan"), 0),
            (True, 0),
        ],
    )
    def test_values(self, raw: object, expected: int) -> None:
        assert parse_int(raw) == expected

    def test_list(self) -> None:
        assert parse_int_list(["1", None, b"3"]) == [1, 0, 3]


class TestParseRange:
    def test_zips_labels(self) -> None:
        labels = ["2014-01-01T00:00:00Z", "2015-01-01T00:00:00Z"]
        assert parse_range(labels, ["1", None]) == {
            "2014-01-01T00:00:00Z": 1,
            "2015-01-01T00:00:00Z": 0,
        }

    def test_total(self) -> None:
        assert parse_range_total(["1", "2", None, "x"]) == 3
        assert parse_range_total([]) == 0


class TestParseRank:
    def test_redis_py_tuples(self) -> None:
        assert parse_rank([("A", 5.0), ("B", 3.0)]) == [{"A": 5}, {"B": 3}]

    def test_flat_reply(self) -> None:
        assert parse_rank([b"A", b"5", b"B", b"3"]) == [{"A": 5}, {"B": 3}]

    def test_empty(self) -> None:
        assert parse_rank([]) == []
        assert parse_rank(None) == []

    def test_range(self) -> None:
        result = parse_rank_range(["a", "b"], [[("x", 1.0)], []])
        assert result == {"a": [{"x": 1}], "b": []}


class TestParseRankTotal:
    replies = [
        [("A", 4.0), ("B", 1.0)],
        [("B", 6.0), ("C", 2.0)],
        [("A", 1.0)],
    ]

    def test_sums_before_sorting(self) -> None:
        assert parse_rank_total(self.replies) == [{"B": 7}, {"A": 5}, {"C": 2}]

    def test_ascending(self) -> None:
        assert parse_rank_total(self.replies, direction="asc") == [{"C": 2}, {"A": 5}, {"B": 7}]

    def test_offset_and_limit_apply_after_merge(self) -> None:
        assert parse_rank_total(self.replies, starting_at=1, limit=1) == [{"A": 5}]

    @pytest.mark.parametrize("limit", [0, -1, -20])
    def test_non_positive_limit_means_all(self, limit: int) -> None:
        assert len(parse_rank_total(self.replies, limit=limit)) == 3

    def test_ties_keep_first_seen_order(self) -> None:
        replies = [[("X", 2.0)], [("Y", 2.0)], [("Z", 2.0)]]
        assert parse_rank_total(replies) == [{"X": 2}, {"Y": 2}, {"Z": 2}]
        assert parse_rank_total(replies, direction="asc") == [{"X": 2}, {"Y": 2}, {"Z": 2}]

    def test_empty_buckets(self) -> None:
        assert parse_rank_total([[], None]) == []
