import re
from typing import List

from matchtally.errors import InvalidGoalCountError, MalformedRecordError
from matchtally.models.enums import GoalSide
from matchtally.models.match import MatchRecord

FIELD_SEPARATOR = ","
EXPECTED_FIELDS = 4

# Plain base-10 digits only: no sign, whitespace, underscores or non-ASCII digits
_GOAL_COUNT_RE = re.compile(r"[0-9]+", re.ASCII)


def parse_line(text: str) -> MatchRecord:
    """Parses one `team_a,team_b,goals_a,goals_b` line into a MatchRecord.

    Team names are taken literally: surrounding whitespace is kept and an
    empty name is allowed. Only a trailing line terminator is removed.

    Args:
        text: The raw line.

    Returns:
        The parsed MatchRecord.

    Raises:
        MalformedRecordError: if the line does not have exactly four fields.
        InvalidGoalCountError: if a goal field is not a non-negative integer.
            goals_a is checked before goals_b.
    """
    line = text
    if line.endswith("\r\n"):
        line = line[:-2]
    elif line.endswith("\n"):
        line = line[:-1]
    fields: List[str] = line.split(FIELD_SEPARATOR)
    if len(fields) != EXPECTED_FIELDS:
        raise MalformedRecordError(line, len(fields))

    team_a, team_b, raw_goals_a, raw_goals_b = fields
    return MatchRecord(
        team_a=team_a,
        team_b=team_b,
        goals_a=_parse_goal_count(line, GoalSide.GOALS_A, raw_goals_a),
        goals_b=_parse_goal_count(line, GoalSide.GOALS_B, raw_goals_b),
    )


def _parse_goal_count(line: str, field: GoalSide, raw_text: str) -> int:
    if not _GOAL_COUNT_RE.fullmatch(raw_text):
        raise InvalidGoalCountError(line, field, raw_text)
    try:
        return int(raw_text)
    except ValueError as e:
        # Digit strings past the interpreter's int conversion limit
        raise InvalidGoalCountError(line, field, raw_text) from e
