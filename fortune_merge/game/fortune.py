"""Fortune aggregation over the final card population."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Sequence

from fortune_merge.config import FortuneConfig
from fortune_merge.models.board import Column
from fortune_merge.models.card import SUIT_CATALOG, Card, LuckSuit, LuckTier
from fortune_merge.models.fortune import FortuneHighlight, FortuneReport, Volatility

from .luck import get_suit_narrative

_DEFAULT_FORTUNE = FortuneConfig()

LABEL_NO_DATA = "No fortune data"
LABEL_SURGE = "Destiny Surge"
LABEL_RISING = "Destiny Rising"
LABEL_SYMBOLIC = "Symbolic Focus"
LABEL_EVERYDAY = "Everyday Flow"

DETAIL_NO_DATA = "A fortune summary cannot be produced without cards."

VOLATILE_LINE = "⚡ Luck swings widely. Be ready for sudden shifts."
STABLE_LINE = "🌙 The flow is calm. Consistency is the key."


def sort_cards_desc(cards: Iterable[Card]) -> list[Card]:
    """Sort cards by value, highest first (stable)."""
    return sorted(cards, key=lambda c: c.value, reverse=True)


def calculate_tier_counts(cards: Iterable[Card]) -> dict[int, int]:
    """Count cards per tier, with zero for absent tiers."""
    counts = {int(tier): 0 for tier in LuckTier}
    for card in cards:
        counts[int(card.tier)] += 1
    return counts


def calculate_suit_highlights(cards: Sequence[Card], limit: int = 4) -> list[FortuneHighlight]:
    """Rank suits by occurrence count, keeping the first card seen for display."""
    counts: dict[LuckSuit, tuple[Card, int]] = {}
    for card in cards:
        first, count = counts.get(card.suit, (card, 0))
        counts[card.suit] = (first, count + 1)

    highlights = [
        FortuneHighlight(
            suit=suit,
            suit_emoji=first.suit_emoji,
            suit_label=first.suit_label,
            count=count,
        )
        for suit, (first, count) in counts.items()
    ]
    highlights.sort(key=lambda h: h.count, reverse=True)
    return highlights[:limit]


def compute_volatility(
    tier_counts: dict[int, int],
    config: FortuneConfig | None = None,
) -> tuple[int, Volatility]:
    """Score and classify the spread of luck tiers."""
    config = config or _DEFAULT_FORTUNE
    score = tier_counts[3] * 2 + tier_counts[2] - tier_counts[1]

    if score <= config.stable_max:
        return score, Volatility.STABLE
    if score <= config.mixed_max:
        return score, Volatility.MIXED
    return score, Volatility.VOLATILE


def derive_summary_label(
    tier_counts: dict[int, int],
    highest_card: Card | None,
    config: FortuneConfig | None = None,
) -> str:
    config = config or _DEFAULT_FORTUNE
    if highest_card is None:
        return LABEL_NO_DATA
    if tier_counts[3] >= config.surge_tier3_count:
        return LABEL_SURGE
    if tier_counts[3] > 0:
        return LABEL_RISING
    if tier_counts[2] >= tier_counts[1]:
        return LABEL_SYMBOLIC
    return LABEL_EVERYDAY


def build_narrative_lines(
    highlights: Sequence[FortuneHighlight],
    volatility: Volatility,
) -> list[str]:
    """Pair each dominant suit with its narrative, plus a volatility line."""
    lines = [
        f"{h.suit_emoji} {h.suit_label}: "
        f"{get_suit_narrative(h.suit, SUIT_CATALOG[h.suit].tier)}"
        for h in highlights
    ]

    if volatility == Volatility.VOLATILE:
        lines.append(VOLATILE_LINE)
    elif volatility == Volatility.STABLE:
        lines.append(STABLE_LINE)

    return lines


def evaluate_fortune(
    columns: Sequence[Column],
    queue: Sequence[Card],
    now: datetime | None = None,
    config: FortuneConfig | None = None,
) -> FortuneReport:
    """Build the fortune report for the final board.

    Args:
        columns: Final columns
        queue: Remaining queue cards
        now: Report timestamp (current UTC time if not provided)
        config: Report thresholds (defaults if not provided)

    Returns:
        FortuneReport
    """
    config = config or _DEFAULT_FORTUNE
    cards = sort_cards_desc([c for column in columns for c in column.cards] + list(queue))

    highest_card = cards[0] if cards else None
    tier_counts = calculate_tier_counts(cards)
    highlights = calculate_suit_highlights(cards, config.dominant_suit_count)
    volatility_score, volatility = compute_volatility(tier_counts, config)

    if highest_card is not None:
        summary_detail = get_suit_narrative(highest_card.suit, highest_card.tier)
    else:
        summary_detail = DETAIL_NO_DATA

    return FortuneReport(
        top_cards=tuple(cards[: config.top_card_count]),
        highest_card=highest_card,
        tier_counts=tier_counts,
        dominant_suits=tuple(highlights),
        tier3_count=tier_counts[3],
        volatility=volatility,
        volatility_score=volatility_score,
        summary_label=derive_summary_label(tier_counts, highest_card, config),
        summary_detail=summary_detail,
        narrative_lines=tuple(build_narrative_lines(highlights, volatility)),
        timestamp=now or datetime.now(timezone.utc),
    )
