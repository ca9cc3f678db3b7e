from enum import Enum


class ErrorPolicy(str, Enum):
    FAIL_FAST = "FAIL_FAST"  # Stop at the first bad line
    SKIP_AND_COLLECT = "SKIP_AND_COLLECT"  # Skip bad lines, report them afterwards


class SelfMatchPolicy(str, Enum):
    ACCEPT = "ACCEPT"  # Team playing itself is counted on both sides
    REJECT = "REJECT"


class GoalSide(str, Enum):
    """Which goal field of a record a value came from."""

    GOALS_A = "goals_a"
    GOALS_B = "goals_b"
