"""Luck attribute rolls (tier and suit) for new cards."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from fortune_merge.config import LuckConfig, TierWeights
from fortune_merge.models.card import SUIT_CATALOG, TIER_POOLS, LuckSuit, LuckTier

Random = Callable[[], float]

_DEFAULT_LUCK = LuckConfig()

# Narrative per suit, indexed by the tier the card was rolled at
SUIT_NARRATIVES: dict[LuckSuit, dict[LuckTier, str]] = {
    LuckSuit.GROWTH: {
        LuckTier.COMMON: "Steady growth continues. Small habits invite large change.",
        LuckTier.SYMBOLIC: "Growth becomes visible. The results of effort can be confirmed.",
        LuckTier.DESTINY: "Growth breaks through. A leap to a new level arrives.",
    },
    LuckSuit.STAGNATION: {
        LuckTier.COMMON: "The flow slows for a while. Catch your breath and rebalance.",
        LuckTier.SYMBOLIC: "A new sign is born inside the pause. Read the hidden signals.",
        LuckTier.DESTINY: "A stop signal before a great rise. Reset direction and climb fast.",
    },
    LuckSuit.SPROUT: {
        LuckTier.COMMON: "The seed of a new start grows. Take the first step.",
        LuckTier.SYMBOLIC: "A beginning widens into a meaningful event. Extend your connections.",
        LuckTier.DESTINY: "A great beginning unfolds. A bold attempt reshapes the course.",
    },
    LuckSuit.CHANGE: {
        LuckTier.COMMON: "A small change approaches. Stay flexible and it passes smoothly.",
        LuckTier.SYMBOLIC: "Change shakes the core. Prepare to break old patterns.",
        LuckTier.DESTINY: "Fate turns sharply. Choosing change opens great fortune.",
    },
    LuckSuit.DECLINE: {
        LuckTier.COMMON: "Energy dips for a moment. Focus on rest and recovery.",
        LuckTier.SYMBOLIC: "There is learning in the dip. Tidy up and the next step is bright.",
        LuckTier.DESTINY: "A cleansing storm passes. Clear out what is not needed.",
    },
    LuckSuit.LOVE: {
        LuckTier.COMMON: "A seed of affection sprouts. Empathy warms your relationships.",
        LuckTier.SYMBOLIC: "The sign of love shines. Sincerity deepens connection.",
        LuckTier.DESTINY: "Great fortune in love opens. A relationship reaches a new level.",
    },
    LuckSuit.WEALTH: {
        LuckTier.COMMON: "Finances settle. Start with a small plan.",
        LuckTier.SYMBOLIC: "Material results appear. Focus on offers of real value.",
        LuckTier.DESTINY: "Great fortune in wealth opens. Unexpected opportunities arrive.",
    },
    LuckSuit.COMPLETION: {
        LuckTier.COMMON: "An air of closure lingers. Finish what is left undone.",
        LuckTier.SYMBOLIC: "Completion shows itself. Shared achievements grow larger.",
        LuckTier.DESTINY: "Great completion unfolds. The result becomes a new start.",
    },
    LuckSuit.HAPPINESS: {
        LuckTier.COMMON: "Warm happiness seeps in. Look for everyday joys.",
        LuckTier.SYMBOLIC: "The sign of happiness sparkles. Share the joy around you.",
        LuckTier.DESTINY: "Happiness peaks. Blessings arrive one after another.",
    },
    LuckSuit.WILL: {
        LuckTier.COMMON: "Resolve hardens. The steadier your center, the calmer the flow.",
        LuckTier.SYMBOLIC: "The sign of will burns. Decision opens the road.",
        LuckTier.DESTINY: "Great will ignites. Strong drive moves everything.",
    },
    LuckSuit.DESTINY_LOVE: {
        LuckTier.COMMON: "Great fortune in love is foretold. Listen to what moves you.",
        LuckTier.SYMBOLIC: "Great fortune in love is near. A relationship enters a new phase.",
        LuckTier.DESTINY: "Great fortune in love bursts open. A fated meeting happens.",
    },
    LuckSuit.DESTINY_WEALTH: {
        LuckTier.COMMON: "Great fortune in wealth awakens. You gain as much as you prepare.",
        LuckTier.SYMBOLIC: "The door to wealth opens wide. Seize the key opportunity.",
        LuckTier.DESTINY: "Great fortune in wealth surges. Abundance keeps arriving.",
    },
    LuckSuit.DESTINY_HAPPINESS: {
        LuckTier.COMMON: "Great happiness warms up. Cultivate gratitude.",
        LuckTier.SYMBOLIC: "Waves of happiness amplify. Joy follows joy.",
        LuckTier.DESTINY: "Happiness reaches its peak. Blessings spread through every part of life.",
    },
    LuckSuit.DESTINY_INSIGHT: {
        LuckTier.COMMON: "Signs of insight appear. Answers show in stillness.",
        LuckTier.SYMBOLIC: "Insight arrives as a message. Follow your intuition.",
        LuckTier.DESTINY: "Great insight unfolds. Understanding fits every piece together.",
    },
    LuckSuit.DESTINY_DECISION: {
        LuckTier.COMMON: "The energy of decision buds. A small but firm choice is needed.",
        LuckTier.SYMBOLIC: "The sign of decision appears. Declare your direction clearly.",
        LuckTier.DESTINY: "Great decision arrives. Your choice opens your fate.",
    },
}


@dataclass(frozen=True)
class LuckAttributes:
    """Result of a luck roll."""

    tier: LuckTier
    suit: LuckSuit


def find_evolution_key(value: int, table: dict[int, TierWeights]) -> int:
    """Find the largest table threshold <= value (smallest threshold if none)."""
    keys = sorted(table)
    selected = keys[0]
    for key in keys:
        if value >= key:
            selected = key
    return selected


def get_evolution_probabilities(value: int, config: LuckConfig | None = None) -> TierWeights:
    """Get the tier distribution for a card value."""
    table = (config or _DEFAULT_LUCK).evolution_table
    if not table:
        return TierWeights()
    return table[find_evolution_key(value, table)]


def roll_luck_tier(value: int, rng: Random, config: LuckConfig | None = None) -> LuckTier:
    """Sample a tier for a card value. Consumes one rng draw."""
    weights = get_evolution_probabilities(value, config)
    roll = rng()

    if roll < weights.tier1:
        return LuckTier.COMMON
    if roll < weights.tier1 + weights.tier2:
        return LuckTier.SYMBOLIC
    return LuckTier.DESTINY


def pick_suit_for_tier(
    tier: LuckTier,
    rng: Random,
    previous_suit: LuckSuit | None = None,
    retention_chance: float = 0.5,
) -> LuckSuit:
    """Pick a suit from the tier's pool.

    If the previous suit belongs to the same tier it is kept with
    probability `retention_chance` (one extra draw).
    """
    pool = TIER_POOLS[tier]

    if previous_suit is not None and SUIT_CATALOG[previous_suit].tier == tier:
        if rng() < retention_chance:
            return previous_suit

    return pool[int(rng() * len(pool))]


def roll_luck_attributes(
    value: int,
    rng: Random,
    previous_suit: LuckSuit | None = None,
    previous_tier: LuckTier | None = None,
    config: LuckConfig | None = None,
) -> LuckAttributes:
    """Roll tier and suit for a card.

    Args:
        value: Face value of the card.
        rng: Seeded generator.
        previous_suit: Suit of the merge source card, if any.
        previous_tier: Tier of the merge source card, if any.
        config: Luck tables (defaults if not provided).

    Returns:
        LuckAttributes with the rolled tier and suit.
    """
    config = config or _DEFAULT_LUCK
    tier = roll_luck_tier(value, rng, config)
    lineage = previous_suit if previous_tier == tier else None
    suit = pick_suit_for_tier(tier, rng, lineage, config.suit_retention_chance)
    return LuckAttributes(tier=tier, suit=suit)


def get_suit_narrative(suit: LuckSuit, tier: LuckTier) -> str:
    """Get the narrative line for a suit at a tier."""
    narrative = SUIT_NARRATIVES.get(suit)
    if not narrative:
        return ""
    return narrative[tier]
