"""Formatters for game log output."""

from typing import Iterable, Sequence

from fortune_merge.models.board import Column
from fortune_merge.models.card import Card


def format_card(card: Card) -> str:
    """Format a single card to string.

    Args:
        card: Card to format.

    Returns:
        "value:tier:suit" (e.g., "16:2:love").
    """
    return f"{card.value}:{int(card.tier)}:{card.suit.value}"


def format_cards(cards: Iterable[Card]) -> str:
    """Format cards to a comma-separated string.

    Empty string if no cards.
    """
    return ",".join(format_card(c) for c in cards)


def format_columns(columns: Sequence[Column]) -> dict[str, str]:
    """Format all columns to a dict keyed by column id."""
    return {str(column.id): format_cards(column.cards) for column in columns}
