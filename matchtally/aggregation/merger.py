from typing import Iterable, Optional

from loguru import logger

from matchtally.models.scoreboard import Scoreboard


def merge(boards: Iterable[Scoreboard], counter_max: Optional[int] = None) -> Scoreboard:
    """Combines independently built scoreboards into one.

    The result holds the union of all teams; each team's totals are the sum of
    its totals across every board that has it. Input boards are not modified.
    Because addition is associative and commutative, neither the order of the
    boards nor how they were grouped affects the result.

    Args:
        boards: Partial scoreboards, e.g. one per input partition.
        counter_max: Counter limit for the merged board. Defaults to the
                     configured counter width.

    Returns:
        A new, frozen Scoreboard. Empty input gives an empty board.

    Raises:
        GoalOverflowError: if a combined total would exceed counter_max.
    """
    merged = Scoreboard(counter_max=counter_max)
    board_count = 0
    for board in boards:
        board_count += 1
        for team, score in board.items():
            merged.credit((team, score.goals_scored, score.goals_conceded))

    logger.info(f"Merged {board_count} scoreboards into {len(merged)} teams.")
    return merged.freeze()
