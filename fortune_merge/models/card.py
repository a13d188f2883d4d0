"""Card model and luck catalog."""

from enum import Enum, IntEnum

from pydantic import BaseModel, field_validator


class LuckTier(IntEnum):
    """Luck depth of a card (1 = common, 3 = destiny-grade)."""

    COMMON = 1
    SYMBOLIC = 2
    DESTINY = 3


class LuckSuit(str, Enum):
    """Flavor category of a card, partitioned by tier."""

    # Tier 1
    GROWTH = "growth"
    STAGNATION = "stagnation"
    SPROUT = "sprout"
    CHANGE = "change"
    DECLINE = "decline"

    # Tier 2
    LOVE = "love"
    WEALTH = "wealth"
    COMPLETION = "completion"
    HAPPINESS = "happiness"
    WILL = "will"

    # Tier 3
    DESTINY_LOVE = "destinyLove"
    DESTINY_WEALTH = "destinyWealth"
    DESTINY_HAPPINESS = "destinyHappiness"
    DESTINY_INSIGHT = "destinyInsight"
    DESTINY_DECISION = "destinyDecision"


class SuitInfo(BaseModel, frozen=True):
    """Display data for a suit."""

    emoji: str
    label: str
    tier: LuckTier


SUIT_CATALOG: dict[LuckSuit, SuitInfo] = {
    LuckSuit.GROWTH: SuitInfo(emoji="🌿", label="Growth", tier=LuckTier.COMMON),
    LuckSuit.STAGNATION: SuitInfo(emoji="💤", label="Stagnation", tier=LuckTier.COMMON),
    LuckSuit.SPROUT: SuitInfo(emoji="🌱", label="Beginning", tier=LuckTier.COMMON),
    LuckSuit.CHANGE: SuitInfo(emoji="🔮", label="Change", tier=LuckTier.COMMON),
    LuckSuit.DECLINE: SuitInfo(emoji="🌧️", label="Decline", tier=LuckTier.COMMON),
    LuckSuit.LOVE: SuitInfo(emoji="❤️", label="Love", tier=LuckTier.SYMBOLIC),
    LuckSuit.WEALTH: SuitInfo(emoji="💰", label="Wealth", tier=LuckTier.SYMBOLIC),
    LuckSuit.COMPLETION: SuitInfo(emoji="🌕", label="Completion", tier=LuckTier.SYMBOLIC),
    LuckSuit.HAPPINESS: SuitInfo(emoji="☀️", label="Happiness", tier=LuckTier.SYMBOLIC),
    LuckSuit.WILL: SuitInfo(emoji="🔥", label="Will", tier=LuckTier.SYMBOLIC),
    LuckSuit.DESTINY_LOVE: SuitInfo(emoji="💖", label="Love (Destiny)", tier=LuckTier.DESTINY),
    LuckSuit.DESTINY_WEALTH: SuitInfo(emoji="💎", label="Wealth (Destiny)", tier=LuckTier.DESTINY),
    LuckSuit.DESTINY_HAPPINESS: SuitInfo(
        emoji="🌞", label="Happiness (Destiny)", tier=LuckTier.DESTINY
    ),
    LuckSuit.DESTINY_INSIGHT: SuitInfo(emoji="🪞", label="Insight", tier=LuckTier.DESTINY),
    LuckSuit.DESTINY_DECISION: SuitInfo(emoji="🔱", label="Decision", tier=LuckTier.DESTINY),
}

# Suits available to each tier, in catalog order (draw order matters for seeds)
TIER_POOLS: dict[LuckTier, list[LuckSuit]] = {
    tier: [suit for suit, info in SUIT_CATALOG.items() if info.tier == tier]
    for tier in LuckTier
}

TIER_LABELS: dict[LuckTier, str] = {
    LuckTier.COMMON: "Everyday Flow",
    LuckTier.SYMBOLIC: "Symbolic Fruition",
    LuckTier.DESTINY: "Great Fortune",
}


class Card(BaseModel, frozen=True):
    """Single card: a power-of-two value tagged with luck attributes."""

    id: int
    value: int
    tier: LuckTier = LuckTier.COMMON
    suit: LuckSuit = LuckSuit.GROWTH

    @field_validator("value")
    @classmethod
    def _check_power_of_two(cls, value: int) -> int:
        if value < 2 or value & (value - 1):
            raise ValueError(f"Card value must be a power of two >= 2, got {value}")
        return value

    @property
    def suit_emoji(self) -> str:
        """Emoji of this card's suit."""
        return SUIT_CATALOG[self.suit].emoji

    @property
    def suit_label(self) -> str:
        """Human-readable suit label."""
        return SUIT_CATALOG[self.suit].label

    @property
    def tier_label(self) -> str:
        return TIER_LABELS[self.tier]

    def __str__(self) -> str:
        return f"{self.value}{self.suit_emoji}"

    def __repr__(self) -> str:
        return f"Card(id={self.id}, value={self.value}, tier={int(self.tier)}, suit={self.suit.value})"
