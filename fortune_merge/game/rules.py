"""Placement rule and move validation."""

from dataclasses import dataclass
from typing import Iterable

from fortune_merge.config import RulesConfig
from fortune_merge.models.board import Column, GameState
from fortune_merge.models.card import Card


def can_place(card: Card, column: Column) -> bool:
    """Check the descending-stack rule.

    A card may go on an empty column, or on a top card of equal or
    greater value.
    """
    top = column.top()
    if top is None:
        return True
    return card.value <= top.value


def has_any_placement(card: Card, columns: Iterable[Column]) -> bool:
    """Check whether a card fits at least one column."""
    return any(can_place(card, column) for column in columns)


def placement_error_message(card: Card, column: Column) -> str | None:
    """Explain why a card cannot be placed (None if it can)."""
    if can_place(card, column):
        return None
    top = column.top()
    return f"{card.value} is larger than {top.value} and cannot be placed on column {column.id}"


@dataclass
class ValidationResult:
    """Result of move validation."""

    is_valid: bool
    error_message: str = ""


class MoveValidator:
    """Validates queue-to-column moves against the board."""

    def __init__(self, rules: RulesConfig | None = None):
        """Initialize validator.

        Args:
            rules: Board rules (defaults if not provided)
        """
        self.rules = rules or RulesConfig()

    def validate(self, state: GameState, column_id: int) -> ValidationResult:
        """Validate moving the placeable queue card onto a column.

        Args:
            state: Current game state
            column_id: Target column id

        Returns:
            ValidationResult
        """
        card = state.placeable_card()
        if card is None:
            return ValidationResult(is_valid=False, error_message="Queue is empty")

        column = state.column(column_id)
        if column is None:
            return ValidationResult(
                is_valid=False,
                error_message=f"Column {column_id} does not exist",
            )

        if len(column) >= self.rules.overflow_limit:
            return ValidationResult(
                is_valid=False,
                error_message=f"Column {column_id} is full",
            )

        error = placement_error_message(card, column)
        if error:
            return ValidationResult(is_valid=False, error_message=error)

        return ValidationResult(is_valid=True)
