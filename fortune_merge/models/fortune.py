"""Fortune report models."""

from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, field_validator

from .card import Card, LuckSuit


class Volatility(str, Enum):
    """Ordered classification of the volatility score."""

    STABLE = "stable"
    MIXED = "mixed"
    VOLATILE = "volatile"


class FortuneHighlight(BaseModel, frozen=True):
    """A dominant suit with its occurrence count."""

    suit: LuckSuit
    suit_emoji: str
    suit_label: str
    count: int


class FortuneReport(BaseModel, frozen=True):
    """End-of-game luck summary. Never mutated once produced."""

    top_cards: tuple[Card, ...]
    highest_card: Card | None
    tier_counts: Mapping[int, int]  # Read-only view keyed by tier 1..3
    dominant_suits: tuple[FortuneHighlight, ...]
    tier3_count: int
    volatility: Volatility
    volatility_score: int
    summary_label: str
    summary_detail: str
    narrative_lines: tuple[str, ...]
    timestamp: datetime

    @field_validator("tier_counts")
    @classmethod
    def _freeze_tier_counts(cls, value: Mapping[int, int]) -> Mapping[int, int]:
        return MappingProxyType(dict(value))
