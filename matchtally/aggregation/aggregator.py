from typing import Iterable, List, Optional

from loguru import logger

from matchtally.config.settings import settings
from matchtally.errors import AggregationError, MatchTallyError, SelfMatchError
from matchtally.models.enums import ErrorPolicy, SelfMatchPolicy
from matchtally.models.match import MatchRecord
from matchtally.models.results import AggregationPolicy, AggregationResult
from matchtally.models.scoreboard import Scoreboard
from matchtally.parsing.record_parser import parse_line


def apply(
    scoreboard: Scoreboard,
    record: MatchRecord,
    self_match: Optional[SelfMatchPolicy] = None,
) -> None:
    """Adds one match result to a scoreboard.

    team_a is credited with (goals_a scored, goals_b conceded) and team_b with
    (goals_b scored, goals_a conceded). Teams seen for the first time start at
    zero. The update is all-or-nothing: on any error the board is unchanged.

    Raises:
        SelfMatchError: if team_a == team_b and the policy is REJECT.
        GoalOverflowError: if any running total would exceed the board's
            counter_max.
        FrozenScoreboardError: if the board has already been frozen.
    """
    policy = self_match or settings.self_match_policy
    if record.is_self_match and policy == SelfMatchPolicy.REJECT:
        raise SelfMatchError(record.team_a)
    scoreboard.credit(
        (record.team_a, record.goals_a, record.goals_b),
        (record.team_b, record.goals_b, record.goals_a),
    )


class Aggregator:
    """Folds raw match lines into a Scoreboard, one line at a time."""

    def __init__(self, policy: Optional[AggregationPolicy] = None):
        self.policy = policy or AggregationPolicy()
        logger.debug(f"Aggregator initialized with policy: {self.policy}")

    def aggregate(
        self, lines: Iterable[str], partition: Optional[int] = None
    ) -> AggregationResult:
        """Parses and applies every line in order.

        Args:
            lines: Raw `team_a,team_b,goals_a,goals_b` lines.
            partition: Index of the input partition these lines belong to,
                       used only to tag errors during parallel ingestion.

        Returns:
            An AggregationResult with a frozen scoreboard. Under
            SKIP_AND_COLLECT it also lists every skipped line.

        Raises:
            AggregationError: under FAIL_FAST, for the first line that fails
                to parse or apply. The underlying error is its `cause`.
        """
        scoreboard = Scoreboard(counter_max=self.policy.counter_max)
        errors: List[AggregationError] = []
        applied = 0

        for line_number, line in enumerate(lines, start=1):
            try:
                record = parse_line(line)
                apply(scoreboard, record, self_match=self.policy.self_match)
            except MatchTallyError as e:
                error = AggregationError(line_number, line, e, partition=partition)
                if self.policy.on_error == ErrorPolicy.FAIL_FAST:
                    logger.debug(f"Stopping aggregation at {error}")
                    raise error from e
                logger.warning(f"Skipping bad record at {error}")
                errors.append(error)
                continue
            applied += 1

        logger.info(
            f"Aggregation complete. Applied {applied} records for {len(scoreboard)} teams, skipped {len(errors)}."
        )
        return AggregationResult(
            scoreboard=scoreboard.freeze(), errors=errors, records_applied=applied
        )


def aggregate(
    lines: Iterable[str], policy: Optional[AggregationPolicy] = None
) -> AggregationResult:
    """Aggregates lines with a one-off Aggregator. See Aggregator.aggregate."""
    return Aggregator(policy).aggregate(lines)


def aggregate_text(
    text: str, policy: Optional[AggregationPolicy] = None
) -> AggregationResult:
    """Aggregates a block of text holding one record per line."""
    return aggregate(text.splitlines(), policy)
