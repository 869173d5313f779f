"""Configuration management."""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

from rogue_rummy.models.card import DEFAULT_CARD_VALUES, Rank


class RulesConfig(BaseModel):
    """Table rules: card values, meld bounds, dealing."""

    card_values: dict[Rank, int] = Field(
        default_factory=lambda: dict(DEFAULT_CARD_VALUES)
    )
    min_meld_size: int = 3
    max_set_size: int = 4
    cards_per_player: int = 7
    max_reshuffles: int = 2

    @field_validator("card_values")
    @classmethod
    def fill_card_values(cls, values: dict[Rank, int]) -> dict[Rank, int]:
        """Ranks missing from a partial table keep their default value."""
        return {**DEFAULT_CARD_VALUES, **values}


class ScoringConfig(BaseModel):
    """Per-action multipliers and round-end bonus constants."""

    # Action multipliers
    set_mod: float = 3.0
    run_mod: float = 2.0
    pair_mod: float = 2.0
    lay_mod: float = 1.5

    # Flat round-end bonuses
    win_bonus: int = 30
    deadwood_bonus_divisor: int = 10
    deadwood_bonus_cap: int = 20
    overflow_bonus: int = 10

    # Multiplicative round-end bonuses
    layoff_bonus_cap: int = 3
    layoff_bonus_per_level: float = 0.1
    alchemist_per_meld: float = 0.5
    alchemist_per_layoff: float = 0.1
    hut_hike_bonus: float = 2.5
    marathon_bonus: float = 2.0
    slot_machine_bonus: float = 3.0
    hexagram_bonus: float = 2.0
    hexagram_pairs: int = 3

    # Upgrade constants
    combo_bonus: int = 50
    combo_interval: int = 3
    wildfire_mult: float = 5.0
    recycled_wood_per_card: int = 5

    catchup_bonus_per_deficit: float = 0.005


class GameConfig(BaseModel):
    """Game configuration."""

    players: list[str] = Field(
        default_factory=lambda: ["Alice", "Bob", "Charlie", "Dana"]
    )
    num_rounds: int = 5
    upgrade_choices: int = 3
    seed: int | None = None


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    show_hands: bool = False


class GameLogSettings(BaseModel):
    """Replay log settings."""

    enabled: bool = False
    output_path: str = "logs"


class Config(BaseModel):
    """Root configuration."""

    rules: RulesConfig = RulesConfig()
    scoring: ScoringConfig = ScoringConfig()
    game: GameConfig = GameConfig()
    logging: LoggingConfig = LoggingConfig()
    game_log: GameLogSettings = GameLogSettings()


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses default config.

    Returns:
        Config object.
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f)

    return Config(**data) if data else Config()
