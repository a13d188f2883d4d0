"""Deck construction and shuffling."""

from __future__ import annotations

import itertools
from typing import Callable, Sequence

from fortune_merge.config import DeckConfig, LuckConfig
from fortune_merge.models.card import Card

from .luck import roll_luck_attributes

Random = Callable[[], float]

_DEFAULT_DECK = DeckConfig()
DEFAULT_DECK_COMPOSITION = _DEFAULT_DECK.composition
DEFAULT_UNLOCK_BATCH = _DEFAULT_DECK.unlock_batch


def select_lineage(cards: Sequence[Card]) -> Card | None:
    """Pick the merge source whose luck carries over.

    The highest tier wins; on a tie the first card (the one lower in
    the column) is used.
    """
    if not cards:
        return None
    return max(cards, key=lambda c: c.tier)


class CardFactory:
    """Creates luck-rolled cards with monotonic ids.

    One factory exists per game and owns that game's generator, so every
    roll and shuffle draws from the same seeded stream.
    """

    def __init__(self, rng: Random, luck_config: LuckConfig | None = None, start_id: int = 1):
        """Initialize factory.

        Args:
            rng: Seeded generator shared by the whole game.
            luck_config: Luck tables (defaults if not provided).
            start_id: First card id to hand out.
        """
        self.rng = rng
        self.luck_config = luck_config
        self._ids = itertools.count(start_id)

    def create(self, value: int, lineage: Sequence[Card] = ()) -> Card:
        """Create a card, rolling its luck with optional merge lineage."""
        source = select_lineage(lineage)
        attributes = roll_luck_attributes(
            value,
            self.rng,
            previous_suit=source.suit if source else None,
            previous_tier=source.tier if source else None,
            config=self.luck_config,
        )
        return Card(id=next(self._ids), value=value, tier=attributes.tier, suit=attributes.suit)

    def create_many(self, composition: dict[int, int]) -> list[Card]:
        """Create cards for a value -> count table, in ascending value order."""
        cards: list[Card] = []
        for value in sorted(composition):
            for _ in range(composition[value]):
                cards.append(self.create(value))
        return cards


def create_finite_deck(
    factory: CardFactory,
    composition: dict[int, int] | None = None,
) -> list[Card]:
    """Create the base card population (unshuffled)."""
    if composition is None:
        composition = DEFAULT_DECK_COMPOSITION
    return factory.create_many(composition)


def create_unlock_batch(
    factory: CardFactory,
    batch: dict[int, int] | None = None,
) -> list[Card]:
    """Create the high-value cards added by the tier unlock."""
    if batch is None:
        batch = DEFAULT_UNLOCK_BATCH
    return factory.create_many(batch)


def shuffle_deck(cards: list[Card], rng: Random) -> list[Card]:
    """Shuffle in place with Fisher-Yates (one draw per element).

    Returns:
        The same list, shuffled.
    """
    current = len(cards)
    while current:
        index = int(rng() * current)
        current -= 1
        cards[current], cards[index] = cards[index], cards[current]
    return cards
