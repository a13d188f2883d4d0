"""Game models."""

from .board import (
    BoardView,
    Column,
    EnginePhase,
    GameOverReason,
    GameOverStatus,
    GameState,
    StateSnapshot,
    create_columns,
)
from .card import SUIT_CATALOG, TIER_POOLS, Card, LuckSuit, LuckTier, SuitInfo
from .fortune import FortuneHighlight, FortuneReport, Volatility

__all__ = [
    "BoardView",
    "Card",
    "Column",
    "EnginePhase",
    "FortuneHighlight",
    "FortuneReport",
    "GameOverReason",
    "GameOverStatus",
    "GameState",
    "LuckSuit",
    "LuckTier",
    "SUIT_CATALOG",
    "StateSnapshot",
    "SuitInfo",
    "TIER_POOLS",
    "Volatility",
    "create_columns",
]
