"""Autoplay strategies."""

from .base import Action, ActionType, Strategy
from .greedy import GreedyStrategy

__all__ = ["Action", "ActionType", "GreedyStrategy", "Strategy"]
