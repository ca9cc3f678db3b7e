import concurrent.futures
from typing import Dict, Iterable, List, Optional, Sequence

from loguru import logger

from matchtally.aggregation.aggregator import Aggregator
from matchtally.aggregation.merger import merge
from matchtally.config.settings import settings
from matchtally.errors import AggregationError, GoalOverflowError
from matchtally.models.results import AggregationPolicy, AggregationResult


def partition_lines(lines: Iterable[str], shard_count: int) -> List[List[str]]:
    """Splits lines into `shard_count` contiguous, near-equal partitions.

    Earlier partitions get one extra line when the split is uneven. With fewer
    lines than shards the trailing partitions are empty.
    """
    if shard_count < 1:
        raise ValueError(f"shard_count must be at least 1, got {shard_count}")
    lines = list(lines)
    base, extra = divmod(len(lines), shard_count)
    partitions: List[List[str]] = []
    start = 0
    for index in range(shard_count):
        size = base + (1 if index < extra else 0)
        partitions.append(lines[start : start + size])
        start += size
    return partitions


def aggregate_partitions(
    partitions: Sequence[Sequence[str]],
    policy: Optional[AggregationPolicy] = None,
    max_workers: Optional[int] = None,
) -> AggregationResult:
    """Aggregates each partition on its own worker, then merges the results.

    Every worker builds a private scoreboard, so no state is shared until the
    merge. Errors are tagged with the partition index and the line number
    within that partition.

    Args:
        partitions: Groups of raw lines, one group per worker.
        policy: Aggregation policy applied by every worker.
        max_workers: Thread count. Defaults to the configured max_workers.

    Returns:
        The merged AggregationResult. Under SKIP_AND_COLLECT its errors are
        ordered by partition, then by line. If only the merged totals overflow,
        the partitions are replayed as one sequence, so the result (or error)
        is the sequential one with line numbers counted across all partitions.

    Raises:
        AggregationError: under FAIL_FAST, the error from the lowest-indexed
            failing partition. No partial scoreboards are merged.
    """
    policy = policy or AggregationPolicy()
    workers = max_workers or settings.max_workers
    aggregator = Aggregator(policy)

    logger.info(
        f"Scattering {len(partitions)} partitions across {workers or 'default'} workers..."
    )

    results: Dict[int, AggregationResult] = {}
    failures: Dict[int, AggregationError] = {}

    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {
            executor.submit(aggregator.aggregate, partition, index): index
            for index, partition in enumerate(partitions)
        }
        for future in concurrent.futures.as_completed(futures):
            index = futures[future]
            try:
                results[index] = future.result()
            except AggregationError as e:
                logger.error(f"Partition {index} failed: {e}")
                failures[index] = e

    if failures:
        first_failed = min(failures)
        logger.error(
            f"{len(failures)} of {len(partitions)} partitions failed. Discarding partial scoreboards."
        )
        raise failures[first_failed]

    ordered = [results[index] for index in range(len(partitions))]
    errors: List[AggregationError] = []
    for result in ordered:
        errors.extend(result.errors)

    try:
        merged = merge(
            (result.scoreboard for result in ordered), counter_max=policy.counter_max
        )
    except GoalOverflowError as e:
        # Only the combined totals overflow: replay sequentially to find the line
        logger.warning(f"Merged totals overflow ({e}). Re-aggregating sequentially.")
        return aggregator.aggregate(
            line for partition in partitions for line in partition
        )

    return AggregationResult(
        scoreboard=merged,
        errors=errors,
        records_applied=sum(result.records_applied for result in ordered),
    )


def aggregate_parallel(
    lines: Iterable[str],
    shard_count: Optional[int] = None,
    policy: Optional[AggregationPolicy] = None,
    max_workers: Optional[int] = None,
) -> AggregationResult:
    """Partitions lines into shards and aggregates them in parallel."""
    partitions = partition_lines(lines, shard_count or settings.shard_count)
    return aggregate_partitions(partitions, policy=policy, max_workers=max_workers)
