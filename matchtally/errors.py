from typing import Any, Optional, Tuple

from matchtally.models.enums import GoalSide


class MatchTallyError(Exception):
    """Base exception for match aggregation errors.

    Subclasses carry structured context as attributes and compare equal when
    those attributes are equal, so the same bad input always yields an equal
    error.
    """

    def _key(self) -> Tuple[Any, ...]:
        return self.args

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash((type(self).__name__, self._key()))


class ParseError(MatchTallyError):
    """A raw line could not be turned into a MatchRecord."""

    def __init__(self, message: str, line: str):
        super().__init__(message)
        self.line = line

    def _key(self) -> Tuple[Any, ...]:
        return (str(self), self.line)


class MalformedRecordError(ParseError):
    """Raised when a line does not split into exactly four fields."""

    def __init__(self, line: str, field_count: int):
        super().__init__(
            f"Expected 4 comma-separated fields, found {field_count}: {line!r}", line
        )
        self.field_count = field_count


class InvalidGoalCountError(ParseError):
    """Raised when a goal field is not a base-10 non-negative integer."""

    def __init__(self, line: str, field: GoalSide, raw_text: str):
        super().__init__(
            f"Invalid goal count in {field.value}: {raw_text!r}", line
        )
        self.field = field
        self.raw_text = raw_text


class SelfMatchError(MatchTallyError):
    """Raised when a team plays itself and the self-match policy is REJECT."""

    def __init__(self, team: str):
        super().__init__(f"Team {team!r} cannot play itself")
        self.team = team


class GoalOverflowError(MatchTallyError, OverflowError):
    """Raised when a running total would exceed the goal counter's range."""

    def __init__(self, team: str, current: int, increment: int, limit: int):
        super().__init__(
            f"Goal total for {team!r} would overflow: {current} + {increment} > {limit}"
        )
        self.team = team
        self.current = current
        self.increment = increment
        self.limit = limit


class FrozenScoreboardError(MatchTallyError):
    """Raised on an attempt to write to a scoreboard already handed to callers."""

    pass


class AggregationError(MatchTallyError):
    """A per-line failure, tagged with where in the input it happened."""

    def __init__(
        self,
        line_number: int,
        line: str,
        cause: MatchTallyError,
        partition: Optional[int] = None,
    ):
        where = f"line {line_number}"
        if partition is not None:
            where = f"partition {partition}, {where}"
        super().__init__(f"{where}: {cause}")
        self.line_number = line_number
        self.line = line
        self.cause = cause
        self.partition = partition

    def _key(self) -> Tuple[Any, ...]:
        return (self.line_number, self.line, self.cause, self.partition)

