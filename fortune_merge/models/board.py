"""Board and game state models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .card import Card

DEFAULT_COLUMN_COUNT = 4


class GameOverReason(str, Enum):
    """Why a game ended."""

    OVERFLOW = "overflow"  # A column reached the overflow limit
    DECK_EMPTY = "deckEmpty"  # Deck and queue both exhausted
    DEADLOCK = "deadlock"  # Current card fits nowhere and no discard remains


class EnginePhase(str, Enum):
    """Phase of the move/merge resolution cycle."""

    IDLE = "idle"  # Accepting requests
    AWAITING_MERGE = "awaiting_merge"  # Card placed, waiting before the next merge check
    ANIMATING = "animating"  # A merge pair is highlighted and settling
    SETTLED = "settled"  # Chain drained, running unlock and game-over checks


class GameOverStatus(BaseModel, frozen=True):
    """Result of a game-over evaluation."""

    is_game_over: bool = False
    trigger_column_id: int | None = None
    reason: GameOverReason | None = None


class Column(BaseModel):
    """A vertical stack of cards. Index 0 is the bottom."""

    id: int
    cards: list[Card] = Field(default_factory=list)

    def top(self) -> Card | None:
        """Get the top card, or None if the column is empty."""
        return self.cards[-1] if self.cards else None

    def is_empty(self) -> bool:
        return not self.cards

    def __len__(self) -> int:
        return len(self.cards)

    def __str__(self) -> str:
        return f"C{self.id}[" + ", ".join(str(c) for c in self.cards) + "]"


def create_columns(count: int = DEFAULT_COLUMN_COUNT) -> list[Column]:
    """Create empty columns with ids 1..count."""
    return [Column(id=i) for i in range(1, count + 1)]


class StateSnapshot(BaseModel, frozen=True):
    """Settled copy of the board, used by the undo buffer."""

    columns: tuple[tuple[Card, ...], ...]
    queue: tuple[Card, ...]
    deck: tuple[Card, ...]
    score: int
    discard_pile: tuple[Card, ...] = ()


class GameState(BaseModel):
    """Mutable state of one game. Owned by the GameEngine."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    seed: str = ""
    columns: list[Column] = Field(default_factory=create_columns)
    queue: list[Card] = Field(default_factory=list)  # Last card is placeable
    deck: list[Card] = Field(default_factory=list)  # Top of deck is the end
    score: int = 0
    higher_tier_cards_added: bool = False

    # Budgets (never replenished within a game)
    undo_count: int = 2
    trash_count: int = 1

    discard_pile: list[Card] = Field(default_factory=list)
    move_count: int = 0

    card_factory: Any = None  # CardFactory, but Any for pydantic compatibility

    def column(self, column_id: int) -> Column | None:
        """Find a column by id."""
        for column in self.columns:
            if column.id == column_id:
                return column
        return None

    def placeable_card(self) -> Card | None:
        """Get the current placeable card (last in queue)."""
        return self.queue[-1] if self.queue else None

    def live_cards(self) -> list[Card]:
        """All cards currently on the board, in the queue or in the deck."""
        cards = [c for column in self.columns for c in column.cards]
        return cards + list(self.queue) + list(self.deck)

    def total_value(self) -> int:
        """Sum of card values including discarded cards.

        Merges conserve this sum; only the tier unlock increases it.
        """
        return sum(c.value for c in self.live_cards()) + sum(c.value for c in self.discard_pile)

    def snapshot(self) -> StateSnapshot:
        """Take a settled copy of the board."""
        return StateSnapshot(
            columns=tuple(tuple(column.cards) for column in self.columns),
            queue=tuple(self.queue),
            deck=tuple(self.deck),
            score=self.score,
            discard_pile=tuple(self.discard_pile),
        )

    def restore(self, snapshot: StateSnapshot) -> None:
        """Restore board contents from a snapshot. Budgets are left untouched."""
        for column, cards in zip(self.columns, snapshot.columns):
            column.cards = list(cards)
        self.queue = list(snapshot.queue)
        self.deck = list(snapshot.deck)
        self.score = snapshot.score
        self.discard_pile = list(snapshot.discard_pile)

    def __str__(self) -> str:
        parts = [f"Score {self.score}", f"Deck {len(self.deck)}"]
        if self.higher_tier_cards_added:
            parts.append("[UNLOCKED]")
        return " ".join(parts)


class BoardView(BaseModel, frozen=True):
    """Read-only view of a settled (or animating) board for renderers."""

    columns: tuple[tuple[Card, ...], ...]
    queue: tuple[Card, ...]
    deck_count: int
    score: int
    elapsed_seconds: float
    undo_count: int
    trash_count: int
    phase: EnginePhase
    animating_card_ids: frozenset[int] = frozenset()
    game_over: GameOverStatus = GameOverStatus()

    @property
    def is_animating(self) -> bool:
        return self.phase == EnginePhase.ANIMATING

    @property
    def placeable_card(self) -> Card | None:
        return self.queue[-1] if self.queue else None
