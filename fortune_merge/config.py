"""Configuration management."""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field


class TierWeights(BaseModel, frozen=True):
    """Categorical distribution over the three luck tiers."""

    tier1: float = 1.0
    tier2: float = 0.0
    tier3: float = 0.0


def _default_evolution_table() -> dict[int, TierWeights]:
    return {
        2: TierWeights(tier1=1, tier2=0, tier3=0),
        4: TierWeights(tier1=1, tier2=0, tier3=0),
        8: TierWeights(tier1=1, tier2=0, tier3=0),
        16: TierWeights(tier1=0.9, tier2=0.1, tier3=0),
        32: TierWeights(tier1=0.9, tier2=0.1, tier3=0),
        64: TierWeights(tier1=0.9, tier2=0.1, tier3=0),
        128: TierWeights(tier1=0.85, tier2=0.1, tier3=0.05),
        256: TierWeights(tier1=0.8, tier2=0.15, tier3=0.05),
        512: TierWeights(tier1=0.7, tier2=0.2, tier3=0.1),
        1024: TierWeights(tier1=0.3, tier2=0.4, tier3=0.3),
        2048: TierWeights(tier1=0, tier2=0.5, tier3=0.5),
    }


class RulesConfig(BaseModel):
    """Board rules and budgets."""

    column_count: int = 4
    queue_size: int = 3
    initial_deal_rounds: int = 2
    overflow_limit: int = 8
    starting_queue_value: int = 2

    undo_budget: int = 2
    undo_history_depth: int = 2
    trash_budget: int = 1

    # Highest card value that triggers the one-time deck unlock
    unlock_threshold: int = 64


class DeckConfig(BaseModel):
    """Deck composition (card value -> count)."""

    composition: dict[int, int] = Field(
        default_factory=lambda: {2: 24, 4: 18, 8: 12, 16: 6}
    )
    unlock_batch: dict[int, int] = Field(default_factory=lambda: {32: 18, 64: 4})


class LuckConfig(BaseModel):
    """Luck roll tables."""

    evolution_table: dict[int, TierWeights] = Field(default_factory=_default_evolution_table)
    suit_retention_chance: float = 0.5


class TimingConfig(BaseModel):
    """Delays (seconds) around merge resolution."""

    merge_start_delay: float = 0.1
    merge_settle_delay: float = 0.6


class FortuneConfig(BaseModel):
    """Fortune report thresholds."""

    top_card_count: int = 6
    dominant_suit_count: int = 4

    # Volatility score = 2 * tier3 + tier2 - tier1
    stable_max: int = 0
    mixed_max: int = 3

    surge_tier3_count: int = 3


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    show_board: bool = False


class GameLogConfig(BaseModel):
    """Configuration for game event logging."""

    enabled: bool = False
    output_path: str = "logs"


class NarrativeConfig(BaseModel):
    """Text-completion service used for fortune summaries."""

    enabled: bool = False
    base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-5"
    api_key_env: str = "OPENAI_API_KEY"
    timeout: float = 30.0
    max_output_tokens: int = 1200


class SimulationConfig(BaseModel):
    """Headless simulation settings."""

    num_games: int = 10
    salt: str = ""


class Config(BaseModel):
    """Root configuration."""

    rules: RulesConfig = RulesConfig()
    deck: DeckConfig = DeckConfig()
    luck: LuckConfig = LuckConfig()
    timing: TimingConfig = TimingConfig()
    fortune: FortuneConfig = FortuneConfig()
    logging: LoggingConfig = LoggingConfig()
    game_log: GameLogConfig = GameLogConfig()
    narrative: NarrativeConfig = NarrativeConfig()
    simulation: SimulationConfig = SimulationConfig()


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
