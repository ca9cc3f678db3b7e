import logging
from typing import Optional

from pydantic import Field, ValidationError, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from matchtally.models.enums import ErrorPolicy, SelfMatchPolicy

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class AppSettings(BaseSettings):
    """Engine settings loaded from environment variables or .env file."""

    # Aggregation Policy
    error_policy: ErrorPolicy = Field(
        ErrorPolicy.FAIL_FAST,
        description="What to do with a bad line: stop (FAIL_FAST) or skip it (SKIP_AND_COLLECT).",
    )
    self_match_policy: SelfMatchPolicy = Field(
        SelfMatchPolicy.ACCEPT,
        description="Whether a record where a team plays itself is counted or rejected.",
    )

    # Counter Configuration
    counter_bits: int = Field(
        64, description="Width of the unsigned goal counters (32 or 64)."
    )

    # Parallel Ingestion
    shard_count: int = Field(
        4, ge=1, description="Default number of partitions for parallel ingestion."
    )
    max_workers: Optional[int] = Field(
        None,
        ge=1,
        description="Worker threads for parallel ingestion (None lets the executor decide).",
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @computed_field  # type: ignore[misc]
    @property
    def counter_max(self) -> int:
        """Largest total a single goal counter may hold."""
        return 2**self.counter_bits - 1

    @field_validator("counter_bits")
    @classmethod
    def check_counter_bits(cls, value: int) -> int:
        if value not in (32, 64):
            raise ValueError(f"counter_bits must be 32 or 64, got {value}")
        return value


def normalize_log_level(level: str) -> Optional[str]:
    """Upper-cases a level name, or returns None if it is not a standard level."""
    upper = level.strip().upper()
    return upper if upper in VALID_LOG_LEVELS else None


def load_settings() -> AppSettings:
    """Builds AppSettings from the environment.

    An unknown LOG_LEVEL is replaced with INFO. Any validation failure (a bad
    policy name, counter width or shard count) stops the process.
    """
    try:
        loaded = AppSettings()
    except ValidationError as e:
        logging.error(f"Invalid match tally settings: {e}")
        raise SystemExit("Failed to load match tally settings. Exiting.") from e

    log_level = normalize_log_level(loaded.log_level)
    if log_level is None:
        logging.warning(f"Unknown LOG_LEVEL '{loaded.log_level}'. Using INFO.")
        log_level = "INFO"
    loaded.log_level = log_level
    return loaded


settings: AppSettings = load_settings()
