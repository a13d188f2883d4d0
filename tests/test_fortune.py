"""Tests for the fortune aggregator."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from fortune_merge.config import FortuneConfig
from fortune_merge.game.fortune import (
    DETAIL_NO_DATA,
    LABEL_EVERYDAY,
    LABEL_NO_DATA,
    LABEL_RISING,
    LABEL_SURGE,
    LABEL_SYMBOLIC,
    STABLE_LINE,
    VOLATILE_LINE,
    calculate_suit_highlights,
    compute_volatility,
    evaluate_fortune,
)
from fortune_merge.game.luck import get_suit_narrative
from fortune_merge.models.board import Column
from fortune_merge.models.card import Card, LuckSuit, LuckTier
from fortune_merge.models.fortune import Volatility

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

COMMON = LuckTier.COMMON
SYMBOLIC = LuckTier.SYMBOLIC
DESTINY = LuckTier.DESTINY


def card(card_id: int, value: int, tier=COMMON, suit=None) -> Card:
    if suit is None:
        suit = {COMMON: LuckSuit.GROWTH, SYMBOLIC: LuckSuit.LOVE, DESTINY: LuckSuit.DESTINY_LOVE}[tier]
    return Card(id=card_id, value=value, tier=tier, suit=suit)


def columns_of(*stacks) -> list[Column]:
    return [Column(id=i, cards=list(cards)) for i, cards in enumerate(stacks, 1)]


class TestEvaluateFortune:
    """Tests for evaluate_fortune."""

    def test_empty_board(self):
        """Test report without cards."""
        report = evaluate_fortune(columns_of([], [], [], []), [], now=NOW)

        assert report.summary_label == LABEL_NO_DATA
        assert report.summary_detail == DETAIL_NO_DATA
        assert report.highest_card is None
        assert report.top_cards == ()
        assert report.tier_counts == {1: 0, 2: 0, 3: 0}
        assert report.volatility == Volatility.STABLE
        assert report.narrative_lines == (STABLE_LINE,)

    def test_includes_queue(self):
        """Test queue cards count toward the report."""
        report = evaluate_fortune(columns_of([card(1, 4)]), [card(2, 8)], now=NOW)

        assert report.highest_card.id == 2
        assert report.tier_counts[1] == 2

    def test_top_cards_sorted_and_limited(self):
        """Test top cards are the six highest, ties in board order."""
        board = columns_of(
            [card(1, 64), card(2, 8)],
            [card(3, 64), card(4, 2)],
            [card(5, 16), card(6, 4), card(7, 2)],
        )
        report = evaluate_fortune(board, [card(8, 32)], now=NOW)

        assert [c.id for c in report.top_cards] == [1, 3, 8, 5, 2, 6]

    def test_timestamp(self):
        """Test supplied timestamp is used."""
        report = evaluate_fortune(columns_of([card(1, 2)]), [], now=NOW)
        assert report.timestamp == NOW

    def test_default_timestamp_is_utc(self):
        """Test default timestamp is timezone-aware UTC."""
        report = evaluate_fortune(columns_of([card(1, 2)]), [])
        assert report.timestamp.utcoffset() == timedelta(0)

    def test_summary_detail_uses_highest_card(self):
        """Test detail comes from the highest card's suit and tier."""
        high = card(1, 256, SYMBOLIC, LuckSuit.WILL)
        report = evaluate_fortune(columns_of([high, card(2, 4)]), [], now=NOW)
        assert report.summary_detail == get_suit_narrative(LuckSuit.WILL, SYMBOLIC)

    def test_report_frozen(self):
        """Test report cannot be modified."""
        report = evaluate_fortune(columns_of([card(1, 2)]), [], now=NOW)
        with pytest.raises(ValidationError):
            report.summary_label = "changed"

    def test_tier_counts_read_only(self):
        """Test tier counts cannot be changed after the report is built."""
        report = evaluate_fortune(columns_of([card(1, 2)]), [], now=NOW)
        with pytest.raises(TypeError):
            report.tier_counts[3] = 9
        assert report.tier_counts[3] == 0
        assert report.tier3_count == 0


class TestSummaryLabel:
    """Tests for summary labels."""

    def test_surge(self):
        """Test three destiny cards."""
        cards = [card(i, 2, DESTINY) for i in range(1, 4)]
        report = evaluate_fortune(columns_of(cards), [], now=NOW)
        assert report.summary_label == LABEL_SURGE
        assert report.tier3_count == 3

    def test_rising(self):
        """Test any destiny card below the surge count."""
        cards = [card(1, 512), card(2, 4, DESTINY)]
        report = evaluate_fortune(columns_of(cards), [], now=NOW)
        assert report.summary_label == LABEL_RISING

    def test_symbolic(self):
        """Test symbolic cards at least matching common cards."""
        cards = [card(1, 8, SYMBOLIC), card(2, 4)]
        report = evaluate_fortune(columns_of(cards), [], now=NOW)
        assert report.summary_label == LABEL_SYMBOLIC

    def test_everyday(self):
        """Test mostly common cards."""
        cards = [card(1, 8, SYMBOLIC), card(2, 4), card(3, 2)]
        report = evaluate_fortune(columns_of(cards), [], now=NOW)
        assert report.summary_label == LABEL_EVERYDAY

    def test_custom_surge_threshold(self):
        """Test configured surge count."""
        cards = [card(1, 2, DESTINY)]
        report = evaluate_fortune(columns_of(cards), [], now=NOW, config=FortuneConfig(surge_tier3_count=1))
        assert report.summary_label == LABEL_SURGE


class TestVolatility:
    """Tests for volatility scoring."""

    @pytest.mark.parametrize(
        "counts, score, volatility",
        [
            ({1: 0, 2: 0, 3: 0}, 0, Volatility.STABLE),
            ({1: 5, 2: 1, 3: 1}, -2, Volatility.STABLE),
            ({1: 0, 2: 1, 3: 0}, 1, Volatility.MIXED),
            ({1: 0, 2: 3, 3: 0}, 3, Volatility.MIXED),
            ({1: 0, 2: 4, 3: 0}, 4, Volatility.VOLATILE),
            ({1: 1, 2: 0, 3: 3}, 5, Volatility.VOLATILE),
        ],
    )
    def test_classification(self, counts, score, volatility):
        """Test score formula and thresholds."""
        assert compute_volatility(counts) == (score, volatility)

    def test_volatile_line(self):
        """Test volatile boards get the volatility line."""
        cards = [card(i, 2, DESTINY) for i in range(1, 4)]
        report = evaluate_fortune(columns_of(cards), [], now=NOW)
        assert report.volatility == Volatility.VOLATILE
        assert report.narrative_lines[-1] == VOLATILE_LINE

    def test_mixed_has_no_extra_line(self):
        """Test mixed boards only list suits."""
        cards = [card(1, 2, SYMBOLIC)]
        report = evaluate_fortune(columns_of(cards), [], now=NOW)
        assert report.volatility == Volatility.MIXED
        assert len(report.narrative_lines) == 1


class TestSuitHighlights:
    """Tests for dominant suits."""

    def test_ranked_by_count(self):
        """Test most frequent suit first."""
        cards = [
            card(1, 8, suit=LuckSuit.CHANGE),
            card(2, 4, suit=LuckSuit.GROWTH),
            card(3, 2, suit=LuckSuit.GROWTH),
        ]
        highlights = calculate_suit_highlights(cards)
        assert [(h.suit, h.count) for h in highlights] == [(LuckSuit.GROWTH, 2), (LuckSuit.CHANGE, 1)]

    def test_ties_keep_first_seen(self):
        """Test equal counts keep encounter order."""
        cards = [
            card(1, 8, suit=LuckSuit.DECLINE),
            card(2, 4, suit=LuckSuit.SPROUT),
            card(3, 2, suit=LuckSuit.CHANGE),
        ]
        highlights = calculate_suit_highlights(cards)
        assert [h.suit for h in highlights] == [LuckSuit.DECLINE, LuckSuit.SPROUT, LuckSuit.CHANGE]

    def test_limit(self):
        """Test at most four suits."""
        suits = [LuckSuit.GROWTH, LuckSuit.STAGNATION, LuckSuit.SPROUT, LuckSuit.CHANGE, LuckSuit.DECLINE]
        cards = [card(i, 2, suit=suit) for i, suit in enumerate(suits, 1)]
        assert len(calculate_suit_highlights(cards)) == 4

    def test_narrative_line_format(self):
        """Test narrative lines pair suit display with its narrative."""
        cards = [card(1, 8, suit=LuckSuit.CHANGE), card(2, 4, SYMBOLIC, LuckSuit.WEALTH)]
        report = evaluate_fortune(columns_of(cards), [], now=NOW)

        expected = f"🔮 Change: {get_suit_narrative(LuckSuit.CHANGE, COMMON)}"
        assert report.narrative_lines[0] == expected
        assert [h.suit for h in report.dominant_suits] == [LuckSuit.CHANGE, LuckSuit.WEALTH]
