"""Base strategy class for autoplay.

Defines the interface that all autoplay strategies must implement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from fortune_merge.models.board import BoardView


class ActionType(str, Enum):
    """Kind of request a strategy can make."""

    MOVE = "move"
    DISCARD = "discard"
    STOP = "stop"


@dataclass(frozen=True)
class Action:
    """A request to the engine."""

    type: ActionType
    column_id: int | None = None

    @classmethod
    def move(cls, column_id: int) -> "Action":
        return cls(ActionType.MOVE, column_id)

    @classmethod
    def discard(cls) -> "Action":
        return cls(ActionType.DISCARD)

    @classmethod
    def stop(cls) -> "Action":
        return cls(ActionType.STOP)


class Strategy(ABC):
    """Abstract base class for autoplay strategies."""

    @abstractmethod
    def select_action(self, view: BoardView) -> Action:
        """Choose the next request for a settled board.

        Args:
            view: Current board view (column id = index + 1)

        Returns:
            Action to submit
        """
