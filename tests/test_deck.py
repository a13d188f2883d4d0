"""Tests for deck construction and shuffling."""

from collections import Counter

import pytest

from fortune_merge.game.deck import (
    CardFactory,
    create_finite_deck,
    create_unlock_batch,
    select_lineage,
    shuffle_deck,
)
from fortune_merge.game.rng import create_seeded_random
from fortune_merge.models.card import Card, LuckSuit, LuckTier


@pytest.fixture
def factory():
    return CardFactory(create_seeded_random("deck"))


class TestCreateDeck:
    """Tests for deck creation."""

    def test_default_composition(self, factory):
        """Test default deck counts."""
        deck = create_finite_deck(factory)
        assert len(deck) == 60
        assert Counter(c.value for c in deck) == {2: 24, 4: 18, 8: 12, 16: 6}

    def test_unique_ids(self, factory):
        """Test ids are unique and monotonic."""
        deck = create_finite_deck(factory)
        assert [c.id for c in deck] == list(range(1, 61))

    def test_ascending_values(self, factory):
        """Test unshuffled deck is in ascending value order."""
        deck = create_finite_deck(factory)
        values = [c.value for c in deck]
        assert values == sorted(values)

    def test_custom_composition(self, factory):
        """Test custom composition."""
        deck = create_finite_deck(factory, {4: 2, 2: 1})
        assert [c.value for c in deck] == [2, 4, 4]

    def test_unlock_batch(self, factory):
        """Test default unlock batch."""
        batch = create_unlock_batch(factory)
        assert len(batch) == 22
        assert Counter(c.value for c in batch) == {32: 18, 64: 4}

    def test_empty_composition_is_kept(self, factory):
        """Test an explicitly empty table creates no cards."""
        assert create_finite_deck(factory, {}) == []
        assert create_unlock_batch(factory, {}) == []
        assert factory.create(2).id == 1


class TestShuffle:
    """Tests for Fisher-Yates shuffling."""

    def test_same_seed_same_order(self):
        """Test shuffle determinism."""
        a = shuffle_deck(list(range(60)), create_seeded_random("s"))
        b = shuffle_deck(list(range(60)), create_seeded_random("s"))
        assert a == b

    def test_permutation(self):
        """Test shuffle keeps every element."""
        cards = list(range(60))
        shuffled = shuffle_deck(list(cards), create_seeded_random("perm"))
        assert sorted(shuffled) == cards

    def test_in_place(self):
        """Test shuffle returns the same list."""
        cards = list(range(10))
        assert shuffle_deck(cards, create_seeded_random("x")) is cards

    def test_zero_draws(self):
        """Test swap order with a constant zero generator."""
        assert shuffle_deck(["a", "b", "c"], lambda: 0.0) == ["b", "c", "a"]

    def test_one_draw_per_element(self):
        """Test draw count equals length."""
        draws = []

        def rng():
            draws.append(1)
            return 0.5

        shuffle_deck(list(range(7)), rng)
        assert len(draws) == 7

    def test_empty(self):
        """Test empty deck."""
        assert shuffle_deck([], lambda: 0.0) == []


class TestCardFactory:
    """Tests for CardFactory."""

    def test_start_id(self):
        """Test custom first id."""
        factory = CardFactory(create_seeded_random("ids"), start_id=100)
        assert factory.create(2).id == 100
        assert factory.create(2).id == 101

    def test_create_many_ascending(self, factory):
        """Test cards are created lowest value first."""
        cards = factory.create_many({8: 1, 2: 2})
        assert [c.value for c in cards] == [2, 2, 8]

    def test_lineage_tie_prefers_lower_card(self):
        """Test equal tiers pass the lower card's suit."""
        draws = iter([0.5, 0.1])
        factory = CardFactory(lambda: next(draws))
        lower = Card(id=1, value=2, tier=LuckTier.COMMON, suit=LuckSuit.CHANGE)
        upper = Card(id=2, value=2, tier=LuckTier.COMMON, suit=LuckSuit.SPROUT)

        card = factory.create(4, lineage=(lower, upper))

        assert card.suit == LuckSuit.CHANGE


class TestSelectLineage:
    """Tests for lineage selection."""

    def test_higher_tier_wins(self):
        """Test higher tier source is chosen."""
        lower = Card(id=1, value=64, tier=LuckTier.COMMON)
        upper = Card(id=2, value=64, tier=LuckTier.SYMBOLIC, suit=LuckSuit.WILL)
        assert select_lineage((lower, upper)) is upper

    def test_tie_first_wins(self):
        """Test tie goes to the first card."""
        lower = Card(id=1, value=8)
        upper = Card(id=2, value=8)
        assert select_lineage((lower, upper)) is lower

    def test_empty(self):
        """Test no lineage."""
        assert select_lineage(()) is None
