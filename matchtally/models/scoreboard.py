from typing import Dict, FrozenSet, Iterator, Optional, Tuple

from matchtally.config.settings import settings
from matchtally.errors import FrozenScoreboardError
from matchtally.models.team import TeamScore

# (team, goals scored, goals conceded)
Credit = Tuple[str, int, int]


class Scoreboard:
    """Maps each team name to its cumulative TeamScore.

    A board is written only by the aggregation and merge operations. Those
    operations freeze the board before returning it, after which any write
    raises FrozenScoreboardError.
    """

    def __init__(self, counter_max: Optional[int] = None):
        self.counter_max: int = (
            counter_max if counter_max is not None else settings.counter_max
        )
        self._scores: Dict[str, TeamScore] = {}
        self._frozen = False

    # --- Read API ---

    def get(self, team: str) -> Optional[TeamScore]:
        return self._scores.get(team)

    def teams(self) -> FrozenSet[str]:
        return frozenset(self._scores)

    def items(self):
        return self._scores.items()

    def as_dict(self) -> Dict[str, Dict[str, int]]:
        """Plain-dict view for reporting, e.g. {"England": {"goals_scored": 6, ...}}."""
        return {
            team: score.model_dump(include={"goals_scored", "goals_conceded"})
            for team, score in self._scores.items()
        }

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def __contains__(self, team: object) -> bool:
        return team in self._scores

    def __len__(self) -> int:
        return len(self._scores)

    def __iter__(self) -> Iterator[str]:
        return iter(self._scores)

    def __eq__(self, other):
        # Insertion order and counter width do not affect equality
        if not isinstance(other, Scoreboard):
            return NotImplemented
        return self._scores == other._scores

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self):
        return f"Scoreboard(teams={len(self._scores)}, frozen={self._frozen})"

    # --- Write API (aggregation and merge only) ---

    def credit(self, *entries: Credit) -> None:
        """Adds goals to one or more teams as a single all-or-nothing update.

        Teams without an entry start from TeamScore.zero(). Every addition is
        checked against counter_max; if any would overflow, GoalOverflowError
        is raised and no entry is changed.
        """
        if self._frozen:
            raise FrozenScoreboardError("Scoreboard is frozen and cannot be updated")
        staged: Dict[str, TeamScore] = {}
        for team, scored, conceded in entries:
            if team in staged:
                current = staged[team]
            else:
                current = self._scores.get(team, TeamScore.zero())
            staged[team] = current.checked_add(scored, conceded, self.counter_max, team)
        self._scores.update(staged)

    def freeze(self) -> "Scoreboard":
        """Locks the board against further writes and returns it."""
        self._frozen = True
        return self
