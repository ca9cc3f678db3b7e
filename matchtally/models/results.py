from typing import List

from pydantic import BaseModel, ConfigDict, Field, computed_field

from matchtally.config.settings import settings
from matchtally.errors import AggregationError
from matchtally.models.enums import ErrorPolicy, SelfMatchPolicy
from matchtally.models.scoreboard import Scoreboard


class AggregationPolicy(BaseModel):
    """How the aggregator treats bad lines, self-matches and counter limits."""

    model_config = ConfigDict(frozen=True)

    on_error: ErrorPolicy = Field(default_factory=lambda: settings.error_policy)
    self_match: SelfMatchPolicy = Field(
        default_factory=lambda: settings.self_match_policy
    )
    counter_max: int = Field(default_factory=lambda: settings.counter_max, ge=0)


class AggregationResult(BaseModel):
    """A finished scoreboard plus any lines skipped while building it."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    scoreboard: Scoreboard
    errors: List[AggregationError] = []
    records_applied: int = 0

    @computed_field  # type: ignore[misc]
    @property
    def ok(self) -> bool:
        """True when every line was applied."""
        return not self.errors
