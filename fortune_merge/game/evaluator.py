"""Game-over evaluation."""

from fortune_merge.models.board import GameOverReason, GameOverStatus, GameState

from .rules import has_any_placement

DEFAULT_OVERFLOW_LIMIT = 8


def check_game_over(state: GameState, overflow_limit: int = DEFAULT_OVERFLOW_LIMIT) -> GameOverStatus:
    """Evaluate whether a settled state is terminal.

    Conditions are checked in priority order and only the first match is
    reported:

    1. overflow: a column holds `overflow_limit` or more cards
    2. deckEmpty: deck and queue are both empty
    3. deadlock: the placeable card fits no column and no discard remains

    Args:
        state: Settled game state (never call mid-chain)
        overflow_limit: Column height that ends the game

    Returns:
        GameOverStatus
    """
    for column in state.columns:
        if len(column) >= overflow_limit:
            return GameOverStatus(
                is_game_over=True,
                trigger_column_id=column.id,
                reason=GameOverReason.OVERFLOW,
            )

    if not state.deck and not state.queue:
        return GameOverStatus(is_game_over=True, reason=GameOverReason.DECK_EMPTY)

    card = state.placeable_card()
    if card is not None and state.trash_count <= 0:
        if not has_any_placement(card, state.columns):
            return GameOverStatus(is_game_over=True, reason=GameOverReason.DEADLOCK)

    return GameOverStatus()
