# matchtally/models/team.py
from pydantic import BaseModel, ConfigDict, Field, computed_field

from matchtally.config.settings import settings
from matchtally.errors import GoalOverflowError
from matchtally.utils.counters import checked_add


class TeamScore(BaseModel):
    """Cumulative goals scored and conceded by one team."""

    model_config = ConfigDict(frozen=True)

    goals_scored: int = Field(0, ge=0)
    goals_conceded: int = Field(0, ge=0)

    @classmethod
    def zero(cls) -> "TeamScore":
        """The identity element: a team with no goals either way."""
        return cls()

    @computed_field  # type: ignore[misc]
    @property
    def goal_difference(self) -> int:
        return self.goals_scored - self.goals_conceded

    def checked_add(
        self, scored: int, conceded: int, limit: int, team: str = ""
    ) -> "TeamScore":
        """Returns a new score with the given goals added.

        Raises:
            GoalOverflowError: if either total would exceed `limit`.
        """
        new_scored = checked_add(self.goals_scored, scored, limit)
        if new_scored is None:
            raise GoalOverflowError(team, self.goals_scored, scored, limit)
        new_conceded = checked_add(self.goals_conceded, conceded, limit)
        if new_conceded is None:
            raise GoalOverflowError(team, self.goals_conceded, conceded, limit)
        return TeamScore(goals_scored=new_scored, goals_conceded=new_conceded)

    def __add__(self, other):
        """Component-wise sum, checked against the configured counter width."""
        if not isinstance(other, TeamScore):
            return NotImplemented
        return self.checked_add(
            other.goals_scored, other.goals_conceded, settings.counter_max
        )
