"""Greedy autoplay strategy.

Strategy:
- Merge: place on a column whose top card has the same value
- Stack: otherwise place on the smallest top card that still accepts it
- Open: otherwise use an empty column
- Otherwise discard while the budget lasts, then stop
"""

from fortune_merge.models.board import BoardView

from .base import Action, Strategy


class GreedyStrategy(Strategy):
    """Places each card where it merges now or wastes the least headroom."""

    def select_action(self, view: BoardView) -> Action:
        card = view.placeable_card
        if card is None:
            return Action.stop()

        merge_target: int | None = None
        stack_target: tuple[int, int] | None = None  # (top value, column id)
        empty_target: int | None = None

        for index, cards in enumerate(view.columns):
            column_id = index + 1
            if not cards:
                if empty_target is None:
                    empty_target = column_id
                continue

            top = cards[-1]
            if top.value == card.value and merge_target is None:
                merge_target = column_id
            elif top.value > card.value:
                if stack_target is None or top.value < stack_target[0]:
                    stack_target = (top.value, column_id)

        if merge_target is not None:
            return Action.move(merge_target)
        if stack_target is not None:
            return Action.move(stack_target[1])
        if empty_target is not None:
            return Action.move(empty_target)
        if view.trash_count > 0:
            return Action.discard()
        return Action.stop()
