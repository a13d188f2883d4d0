"""Prompt composition for fortune summaries."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Sequence

from fortune_merge.models.card import TIER_LABELS, LuckTier
from fortune_merge.models.fortune import FortuneReport

# Values above this are read as expansion, at or below as adjustment
EXPANSION_THRESHOLD = 128

SYSTEM_PROMPT = f"""You are a data-driven analyst of the flow of luck.
Every card is a signal describing a state of luck.
The value is intensity, the tier is depth, the suit is direction.

Threshold {EXPANSION_THRESHOLD}:
- above {EXPANSION_THRESHOLD}: expansion zone (luck surfaces or strengthens)
- {EXPANSION_THRESHOLD} or below: adjustment zone (tuning and review, not negative)
Never use "danger" or "decline"; say "adjustment" or "tuning" instead.

Tiers:
Tier 1 (everyday): 🌿Growth 💤Stagnation 🌱Beginning 🔮Change 🌧️Decline
Tier 2 (symbolic): ❤️Love 💰Wealth 🌕Completion ☀️Happiness 🔥Will
Tier 3 (destiny): 💖Love 💎Wealth 🌞Happiness 🪞Insight 🔱Decision

Principles:
1) Main flow: high values ({EXPANSION_THRESHOLD}+) and high tiers (2-3)
2) Supporting flow: middle or adjustment values (tiers 1-2)
3) Tuning signals: opposing forces or energy swings

Output rules:
- Format: today's fortune, one or two paragraphs
- Tone: clear, neutral, report-like
- No emotional exaggeration or prophecy
- Cite values, tiers and suits naturally as evidence

Write today's fortune from the input below."""


@dataclass(frozen=True)
class NarrativeMessage:
    """A chat message sent to the completion service."""

    role: str  # "system" or "user"
    content: str


def format_timestamp(timestamp: datetime) -> str:
    return timestamp.strftime("%Y-%m-%d %H:%M")


def format_top_cards(report: FortuneReport) -> str:
    """Format top cards as "- emoji label | value | tier N" lines."""
    return "\n".join(
        f"- {card.suit_emoji} {card.suit_label} | {card.value} | tier {int(card.tier)}"
        for card in report.top_cards
    )


def format_logs(report: FortuneReport, logs: Sequence[str]) -> str:
    """Format recent messages newest first, one minute apart."""
    if not logs:
        return "- no records | no recent messages"

    lines = []
    for index, message in enumerate(reversed(logs)):
        stamp = format_timestamp(report.timestamp - timedelta(minutes=index))
        lines.append(f"- {stamp} | {message}")
    return "\n".join(lines)


def build_fortune_messages(
    report: FortuneReport,
    score: int,
    logs: Sequence[str] = (),
) -> list[NarrativeMessage]:
    """Build the system and user messages for a fortune summary.

    Args:
        report: Fortune report of the finished game
        score: Final score
        logs: Optional recent game messages to include

    Returns:
        [system message, user message]
    """
    delta = report.volatility_score
    energy = f"+{delta}" if delta >= 0 else str(delta)
    counts = report.tier_counts

    user = f"""Date/time: {format_timestamp(report.timestamp)}

Final score: {score}

Cards:
{format_top_cards(report)}

Tier distribution: {TIER_LABELS[LuckTier.DESTINY]} {counts.get(3, 0)}, \
{TIER_LABELS[LuckTier.SYMBOLIC]} {counts.get(2, 0)}, {TIER_LABELS[LuckTier.COMMON]} {counts.get(1, 0)}

Energy swing: {energy}

Recent messages:
{format_logs(report, logs)}

[Output format]
Title: one-line summary (under 20 words, analytic)

Key points (3 lines):
- Main flow ({EXPANSION_THRESHOLD}+, upper tiers):
- Adjustment zone ({EXPANSION_THRESHOLD} or below, supporting tiers):
- Tuning signal (contrast or energy swing):

Interpretation (2-3 paragraphs).

Evidence (3-5 bullets, card values and tiers only).

Recommendations (3).

[Extra rules]
- If any tier 3 card is present, mention it in the first paragraph.
- Quote the {EXPANSION_THRESHOLD} threshold explicitly."""

    return [
        NarrativeMessage(role="system", content=SYSTEM_PROMPT),
        NarrativeMessage(role="user", content=user),
    ]
