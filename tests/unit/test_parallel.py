"""Unit tests for partitioned, parallel ingestion."""

import pytest

from matchtally.aggregation.aggregator import aggregate
from matchtally.aggregation.parallel import (
    aggregate_parallel,
    aggregate_partitions,
    partition_lines,
)
from matchtally.errors import (
    AggregationError,
    GoalOverflowError,
    InvalidGoalCountError,
    MalformedRecordError,
)
from matchtally.models.enums import ErrorPolicy
from matchtally.models.results import AggregationPolicy
from matchtally.models.team import TeamScore


class TestPartitionLines:
    def test_even_split(self):
        assert partition_lines(["a", "b", "c", "d"], 2) == [["a", "b"], ["c", "d"]]

    def test_uneven_split_front_loaded(self):
        assert partition_lines(["a", "b", "c", "d", "e"], 3) == [
            ["a", "b"],
            ["c", "d"],
            ["e"],
        ]

    def test_more_shards_than_lines(self):
        assert partition_lines(["a"], 3) == [["a"], [], []]

    def test_keeps_every_line_in_order(self, results):
        partitions = partition_lines(results, 4)
        assert [line for part in partitions for line in part] == results

    def test_invalid_shard_count(self):
        with pytest.raises(ValueError):
            partition_lines(["a"], 0)


class TestAggregatePartitions:
    """Test cases for scatter/gather aggregation."""

    def test_matches_sequential(self, results, fail_fast_policy):
        parallel = aggregate_partitions(
            [results[:1], results[1:3], results[3:]], fail_fast_policy, max_workers=3
        )
        sequential = aggregate(results, fail_fast_policy)

        assert parallel.scoreboard == sequential.scoreboard
        assert parallel.records_applied == 5
        assert parallel.scoreboard.is_frozen

    def test_empty_partitions(self, results, fail_fast_policy):
        parallel = aggregate_partitions([[], results, []], fail_fast_policy)
        assert parallel.scoreboard == aggregate(results, fail_fast_policy).scoreboard

    def test_fail_fast_reports_partition_and_line(self, results, fail_fast_policy):
        partitions = [results[:2], results[2:] + ["England,France,4"]]

        with pytest.raises(AggregationError) as exc_info:
            aggregate_partitions(partitions, fail_fast_policy)

        error = exc_info.value
        assert error.partition == 1
        assert error.line_number == 4
        assert isinstance(error.cause, MalformedRecordError)
        assert "partition 1, line 4" in str(error)

    def test_fail_fast_picks_lowest_failing_partition(self, fail_fast_policy):
        partitions = [["A,B,1,0"], ["bad"], ["A,B,x,0"]]

        with pytest.raises(AggregationError) as exc_info:
            aggregate_partitions(partitions, fail_fast_policy, max_workers=3)

        assert exc_info.value.partition == 1

    def test_skip_and_collect_merges_good_lines(self, results, permissive_policy):
        partitions = [
            results[:2] + ["England,France,four,2"],
            ["bad"] + results[2:],
        ]

        result = aggregate_partitions(partitions, permissive_policy)

        assert result.scoreboard == aggregate(results, permissive_policy).scoreboard
        assert [(e.partition, e.line_number) for e in result.errors] == [(0, 3), (1, 1)]
        assert isinstance(result.errors[0].cause, InvalidGoalCountError)
        assert result.records_applied == 5


class TestAggregateParallel:
    @pytest.mark.parametrize("shard_count", [1, 2, 3, 5, 8])
    def test_any_shard_count_matches_sequential(
        self, results, fail_fast_policy, shard_count
    ):
        parallel = aggregate_parallel(results, shard_count, fail_fast_policy)
        assert parallel.scoreboard == aggregate(results, fail_fast_policy).scoreboard


class TestMergedTotalsOverflow:
    """Partitions that fit on their own but overflow once combined."""

    LINES = ["A,B,6,0", "A,B,6,0"]

    def test_skip_and_collect_matches_sequential(self):
        policy = AggregationPolicy(on_error=ErrorPolicy.SKIP_AND_COLLECT, counter_max=10)

        parallel = aggregate_partitions([self.LINES[:1], self.LINES[1:]], policy)
        sequential = aggregate(self.LINES, policy)

        assert parallel.scoreboard == sequential.scoreboard
        assert parallel.errors == sequential.errors
        assert [e.line_number for e in parallel.errors] == [2]
        assert isinstance(parallel.errors[0].cause, GoalOverflowError)
        assert parallel.records_applied == 1
        assert parallel.scoreboard.get("A") == TeamScore(goals_scored=6, goals_conceded=0)

    def test_fail_fast_raises_line_tagged_error(self):
        policy = AggregationPolicy(on_error=ErrorPolicy.FAIL_FAST, counter_max=10)

        with pytest.raises(AggregationError) as exc_info:
            aggregate_partitions([self.LINES[:1], self.LINES[1:]], policy)

        assert exc_info.value.line_number == 2
        assert isinstance(exc_info.value.cause, GoalOverflowError)

    def test_aggregate_parallel_matches_sequential(self):
        policy = AggregationPolicy(on_error=ErrorPolicy.SKIP_AND_COLLECT, counter_max=10)
        lines = ["A,B,4,0", "A,C,4,1", "B,A,0,4", "C,B,2,2"]

        parallel = aggregate_parallel(lines, 4, policy)
        sequential = aggregate(lines, policy)

        assert parallel.scoreboard == sequential.scoreboard
        assert parallel.errors == sequential.errors
