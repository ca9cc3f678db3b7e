from pydantic import BaseModel, ConfigDict, Field, computed_field


class MatchRecord(BaseModel):
    """One parsed match result: two teams and the goals each of them scored."""

    model_config = ConfigDict(frozen=True)  # Make instances immutable

    team_a: str = Field(..., description="First team, taken literally (no trimming).")
    team_b: str = Field(..., description="Second team, taken literally (no trimming).")
    goals_a: int = Field(..., ge=0, description="Goals scored by team_a.")
    goals_b: int = Field(..., ge=0, description="Goals scored by team_b.")

    @computed_field  # type: ignore[misc]
    @property
    def is_self_match(self) -> bool:
        """True when both sides name the same team."""
        return self.team_a == self.team_b

    def __str__(self) -> str:
        return f"{self.team_a},{self.team_b},{self.goals_a},{self.goals_b}"
