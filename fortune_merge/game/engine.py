"""Game engine for fortune-merge."""

from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from typing import Awaitable, Callable

from fortune_merge.config import Config
from fortune_merge.logging import GameLogger, format_card
from fortune_merge.models.board import (
    BoardView,
    EnginePhase,
    GameOverStatus,
    GameState,
    StateSnapshot,
    create_columns,
)
from fortune_merge.models.fortune import FortuneReport

from .deck import CardFactory, create_finite_deck, create_unlock_batch, shuffle_deck
from .evaluator import check_game_over
from .fortune import evaluate_fortune
from .merge import find_top_pair, process_all_merges, process_chain_merge
from .rng import create_seeded_random
from .rules import MoveValidator

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class GameEngine:
    """Owns the GameState and sequences every change to it.

    Moves are coroutines: the card is placed immediately, then merges on the
    target column resolve one pair at a time with a pause before each check
    and while each merge settles. Requests arriving while a chain is in
    flight are rejected. Game over is evaluated only once the chain drains.
    """

    def __init__(
        self,
        config: Config | None = None,
        game_logger: GameLogger | None = None,
        sleep: Sleep | None = None,
    ):
        """Initialize game engine.

        Args:
            config: Configuration (uses defaults if not provided)
            game_logger: GameLogger instance for detailed logging
            sleep: Coroutine used for merge delays (asyncio.sleep by default)
        """
        self.config = config or Config()
        self.rules = self.config.rules
        self.timing = self.config.timing
        self.game_logger = game_logger
        self._sleep = sleep or asyncio.sleep

        self.validator = MoveValidator(self.rules)

        self.game_number = 0
        self.state = GameState()
        self.phase = EnginePhase.IDLE
        self.animating_card_ids: set[int] = set()
        self.game_over = GameOverStatus()
        self.fortune_report: FortuneReport | None = None

        self._history: deque[StateSnapshot] = deque(maxlen=self.rules.undo_history_depth)
        self._started_at = time.monotonic()
        self._finished_at: float | None = None

        self._on_game_over: Callable[[FortuneReport, int], None] | None = None
        self._on_settled: Callable[[BoardView], None] | None = None

    def set_callbacks(
        self,
        on_game_over: Callable[[FortuneReport, int], None] | None = None,
        on_settled: Callable[[BoardView], None] | None = None,
    ) -> None:
        """Set event callbacks.

        Args:
            on_game_over: Called once per game with (report, final score)
            on_settled: Called with a board view after every settled change
        """
        self._on_game_over = on_game_over
        self._on_settled = on_settled

    # --- Game setup ---

    def new_game(self, seed: str | int) -> GameState:
        """Deal a new game, replacing any current state.

        Args:
            seed: Seed for the game's generator (e.g. a daily seed)

        Returns:
            The new GameState
        """
        rng = create_seeded_random(seed)
        factory = CardFactory(rng, self.config.luck)

        deck = shuffle_deck(create_finite_deck(factory, self.config.deck.composition), rng)

        # Deal one card per column per round, from the top of the deck
        columns = create_columns(self.rules.column_count)
        for _ in range(self.rules.initial_deal_rounds):
            for column in columns:
                if deck:
                    column.cards.append(deck.pop())

        score = 0
        for column in columns:
            column.cards.sort(key=lambda c: c.value, reverse=True)
            result = process_all_merges(column.cards, factory)
            column.cards = result.cards
            score += result.score_gained

        # The queue starts with fresh low cards; the same number leaves the deck
        starting_value = self.rules.starting_queue_value
        queue = [factory.create(starting_value) for _ in range(self.rules.queue_size)]
        for _ in range(self.rules.queue_size):
            for index, card in enumerate(deck):
                if card.value == starting_value:
                    del deck[index]
                    break

        self.state = GameState(
            seed=str(seed),
            columns=columns,
            queue=queue,
            deck=deck,
            score=score,
            undo_count=self.rules.undo_budget,
            trash_count=self.rules.trash_budget,
            card_factory=factory,
        )
        self.game_number += 1
        self.phase = EnginePhase.IDLE
        self.animating_card_ids = set()
        self.game_over = GameOverStatus()
        self.fortune_report = None
        self._history.clear()
        self._started_at = time.monotonic()
        self._finished_at = None

        logger.info(
            f"Game {self.game_number} initialized (seed={seed!r}, score={score}, "
            f"deck={len(deck)})"
        )
        if self.game_logger:
            self.game_logger.log_game_start(self.game_number, self.state)

        self.evaluate()
        self._notify_settled()
        return self.state

    def restart(self, seed: str | int) -> GameState:
        """Discard the current game and deal a new one.

        A merge chain still in flight finishes on the discarded state and
        does not touch the new game.
        """
        return self.new_game(seed)

    # --- Requests ---

    async def move(self, column_id: int) -> bool:
        """Move the placeable queue card onto a column and resolve merges.

        Args:
            column_id: Target column id

        Returns:
            True if the move was applied, False if it was ignored
        """
        if self.phase != EnginePhase.IDLE:
            logger.debug(f"Move to column {column_id} ignored: engine is {self.phase.value}")
            return False
        if self.game_over.is_game_over:
            logger.debug(f"Move to column {column_id} ignored: game is over")
            return False

        validation = self.validator.validate(self.state, column_id)
        if not validation.is_valid:
            logger.debug(f"Move to column {column_id} ignored: {validation.error_message}")
            return False

        state = self.state
        self._history.appendleft(state.snapshot())

        card = state.queue.pop()
        state.column(column_id).cards.append(card)
        self._draw_into_queue(state)
        state.move_count += 1
        self.phase = EnginePhase.AWAITING_MERGE

        logger.debug(f"Move {state.move_count}: {format_card(card)} -> column {column_id}")
        if self.game_logger:
            self.game_logger.log_move(self.game_number, column_id, card, state)

        await self._resolve_merges(state, column_id)
        return True

    def undo(self) -> bool:
        """Restore the most recent settled snapshot.

        Returns:
            True if a snapshot was restored
        """
        if self.phase != EnginePhase.IDLE or self.game_over.is_game_over:
            return False

        state = self.state
        if state.undo_count <= 0 or not self._history:
            logger.debug("Undo ignored: no budget or history left")
            return False

        state.restore(self._history.popleft())
        state.undo_count -= 1

        logger.debug(f"Undo applied ({state.undo_count} left)")
        if self.game_logger:
            self.game_logger.log_special(
                self.game_number,
                "undo",
                {"undo_left": state.undo_count, "score": state.score},
            )

        self.evaluate()
        self._notify_settled()
        return True

    def discard(self) -> bool:
        """Throw away the placeable card and draw a replacement.

        Returns:
            True if a card was discarded
        """
        if self.phase != EnginePhase.IDLE or self.game_over.is_game_over:
            return False

        state = self.state
        if state.trash_count <= 0 or not state.queue:
            logger.debug("Discard ignored: no budget or empty queue")
            return False

        card = state.queue.pop()
        state.discard_pile.append(card)
        self._draw_into_queue(state)
        state.trash_count -= 1

        logger.debug(f"Discarded {format_card(card)} ({state.trash_count} left)")
        if self.game_logger:
            self.game_logger.log_special(
                self.game_number,
                "discard",
                {"card": format_card(card), "trash_left": state.trash_count},
            )

        self.evaluate()
        self._notify_settled()
        return True

    # --- Resolution ---

    def _draw_into_queue(self, state: GameState) -> None:
        """Draw the deck's top card into the front of the queue."""
        if state.deck:
            state.queue.insert(0, state.deck.pop())

    def _is_current(self, state: GameState) -> bool:
        return state is self.state

    async def _resolve_merges(self, state: GameState, column_id: int) -> None:
        """Resolve merges on a column one pair at a time, then settle."""
        game_number = self.game_number
        column = state.column(column_id)

        await self._sleep(self.timing.merge_start_delay)

        while True:
            pair = find_top_pair(column.cards)
            if pair is None:
                break

            merging_ids = {card.id for card in pair}
            if self._is_current(state):
                self.phase = EnginePhase.ANIMATING
                self.animating_card_ids |= merging_ids

            await self._sleep(self.timing.merge_settle_delay)

            result = process_chain_merge(column.cards, state.card_factory)
            column.cards = result.cards
            state.score += result.score_gained

            if self._is_current(state):
                self.animating_card_ids -= merging_ids
                self.phase = EnginePhase.AWAITING_MERGE

            new_card = result.new_cards[0]
            logger.debug(
                f"Merged {result.merged_card_ids} into {format_card(new_card)} "
                f"on column {column_id} (+{result.score_gained})"
            )
            if self.game_logger:
                self.game_logger.log_merge(
                    game_number,
                    column_id,
                    result.merged_card_ids,
                    new_card,
                    state.score,
                )

            await self._sleep(self.timing.merge_start_delay)

        if not self._is_current(state):
            logger.debug(f"Merge chain finished on a discarded game {game_number}")
            return

        self.phase = EnginePhase.SETTLED
        self.unlock_higher_tier_cards()
        self.evaluate()
        self.phase = EnginePhase.IDLE
        self._notify_settled()

    def unlock_higher_tier_cards(self) -> bool:
        """Add the high-value batch to the deck once a column reaches the threshold.

        Fires at most once per game. Snapshots taken before the unlock are
        dropped so undo cannot remove the injected cards.

        Returns:
            True if the unlock fired on this call
        """
        state = self.state
        if state.higher_tier_cards_added:
            return False

        threshold = self.rules.unlock_threshold
        if not any(c.value >= threshold for column in state.columns for c in column.cards):
            return False

        batch = create_unlock_batch(state.card_factory, self.config.deck.unlock_batch)
        state.deck.extend(batch)
        shuffle_deck(state.deck, state.card_factory.rng)
        state.higher_tier_cards_added = True
        self._history.clear()

        logger.info(f"Higher tier unlocked: {len(batch)} cards added (deck={len(state.deck)})")
        if self.game_logger:
            self.game_logger.log_special(
                self.game_number,
                "unlock",
                {"added": len(batch), "deck_count": len(state.deck)},
            )
        return True

    def evaluate(self) -> GameOverStatus:
        """Re-evaluate game over on the current (settled) state."""
        status = check_game_over(self.state, self.rules.overflow_limit)
        was_over = self.game_over.is_game_over
        self.game_over = status

        if status.is_game_over and not was_over:
            self._finish()
        return status

    def _finish(self) -> None:
        """Produce the fortune report and notify the collaborator."""
        state = self.state
        self._finished_at = time.monotonic()
        self.fortune_report = evaluate_fortune(
            state.columns,
            state.queue,
            config=self.config.fortune,
        )

        reason = self.game_over.reason.value if self.game_over.reason else None
        logger.info(
            f"Game {self.game_number} over ({reason}): score={state.score}, "
            f"moves={state.move_count}, fortune={self.fortune_report.summary_label!r}"
        )
        if self.game_logger:
            self.game_logger.log_game_over(
                self.game_number,
                self.game_over,
                state,
                self.fortune_report,
            )

        if self._on_game_over:
            try:
                self._on_game_over(self.fortune_report, state.score)
            except Exception:
                logger.exception("Game-over callback failed")

    def _notify_settled(self) -> None:
        if self._on_settled:
            try:
                self._on_settled(self.view())
            except Exception:
                logger.exception("Settled callback failed")

    # --- Read access ---

    @property
    def is_animating(self) -> bool:
        return self.phase == EnginePhase.ANIMATING

    def elapsed_seconds(self) -> float:
        """Seconds since the game started (frozen at game over)."""
        end = self._finished_at if self._finished_at is not None else time.monotonic()
        return end - self._started_at

    def view(self) -> BoardView:
        """Get a read-only view of the board."""
        state = self.state
        return BoardView(
            columns=tuple(tuple(column.cards) for column in state.columns),
            queue=tuple(state.queue),
            deck_count=len(state.deck),
            score=state.score,
            elapsed_seconds=self.elapsed_seconds(),
            undo_count=state.undo_count,
            trash_count=state.trash_count,
            phase=self.phase,
            animating_card_ids=frozenset(self.animating_card_ids),
            game_over=self.game_over,
        )
