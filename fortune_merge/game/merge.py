"""Merge resolution for columns.

Two algorithms share the same pair rule (equal values double):

- process_chain_merge looks only at the top two cards and resolves one
  pair per call. Live play calls it repeatedly so each merge can settle
  visually before the next one.
- process_all_merges scans the whole column and resolves everything in
  one call. It is used when dealing the initial board.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from fortune_merge.models.card import Card

from .deck import CardFactory


@dataclass
class MergeResult:
    """Outcome of a merge pass."""

    cards: list[Card]
    score_gained: int = 0
    merged_card_ids: list[int] = field(default_factory=list)
    new_cards: list[Card] = field(default_factory=list)

    @property
    def merged(self) -> bool:
        return self.score_gained > 0


def find_top_pair(cards: Sequence[Card]) -> tuple[Card, Card] | None:
    """Get the top two cards if they can merge."""
    if len(cards) < 2:
        return None
    lower, upper = cards[-2], cards[-1]
    if lower.value != upper.value:
        return None
    return lower, upper


def _merge_pair(lower: Card, upper: Card, factory: CardFactory) -> Card:
    return factory.create(lower.value * 2, lineage=(lower, upper))


def process_chain_merge(cards: Sequence[Card], factory: CardFactory) -> MergeResult:
    """Resolve at most one merge, between the top two cards.

    Args:
        cards: Column cards, bottom first.
        factory: Card factory used to create the merged card.

    Returns:
        MergeResult with the updated cards. Unchanged with zero gain when
        the top two cards differ.
    """
    pair = find_top_pair(cards)
    if pair is None:
        return MergeResult(cards=list(cards))

    lower, upper = pair
    new_card = _merge_pair(lower, upper, factory)
    return MergeResult(
        cards=list(cards[:-2]) + [new_card],
        score_gained=new_card.value,
        merged_card_ids=[lower.id, upper.id],
        new_cards=[new_card],
    )


def process_all_merges(cards: Sequence[Card], factory: CardFactory) -> MergeResult:
    """Resolve every merge in a column.

    Each pass merges the first equal adjacent pair found from the bottom,
    then the scan restarts, until a pass finds nothing or fewer than two
    cards remain.
    """
    result = MergeResult(cards=list(cards))
    working = result.cards

    while len(working) >= 2:
        for i in range(len(working) - 1):
            lower, upper = working[i], working[i + 1]
            if lower.value == upper.value:
                new_card = _merge_pair(lower, upper, factory)
                working[i : i + 2] = [new_card]
                result.score_gained += new_card.value
                result.merged_card_ids.extend([lower.id, upper.id])
                result.new_cards.append(new_card)
                break
        else:
            break

    return result
