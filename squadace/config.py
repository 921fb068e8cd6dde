"""
Engine configuration - pacing and table-size constants.

Values can be overridden through SQUADACE_* environment variables
(or a .env file). Delays are in seconds; the turn time limit is in
countdown units, one unit per tick_interval.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineConfig(BaseSettings):
    """Pacing contract of the turn engine."""
    model_config = SettingsConfigDict(
        env_prefix="SQUADACE_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    num_players: int = 2
    cards_per_player: int = Field(5, ge=1)

    ai_delay: float = Field(1.0, ge=0)
    reveal_delay: float = Field(1.0, ge=0)
    round_over_delay: float = Field(2.0, ge=0)

    turn_time_limit: int = Field(10, ge=1)
    tick_interval: float = Field(1.0, gt=0)

    # When False the engine waits for advance_to_next_round
    auto_advance: bool = True

    @field_validator("num_players")
    @classmethod
    def _two_players(cls, value: int) -> int:
        if value != 2:
            raise ValueError("Only two-player matches are supported")
        return value


DEFAULT_CONFIG = EngineConfig()
