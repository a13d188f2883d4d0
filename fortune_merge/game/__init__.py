"""Game logic."""

from .deck import CardFactory, create_finite_deck, create_unlock_batch, shuffle_deck
from .engine import GameEngine
from .evaluator import check_game_over
from .fortune import evaluate_fortune
from .luck import LuckAttributes, roll_luck_attributes
from .merge import MergeResult, process_all_merges, process_chain_merge
from .rng import SeededRandom, create_seeded_random, daily_seed
from .rules import MoveValidator, ValidationResult, can_place

__all__ = [
    "CardFactory",
    "GameEngine",
    "LuckAttributes",
    "MergeResult",
    "MoveValidator",
    "SeededRandom",
    "ValidationResult",
    "can_place",
    "check_game_over",
    "create_finite_deck",
    "create_seeded_random",
    "create_unlock_batch",
    "daily_seed",
    "evaluate_fortune",
    "process_all_merges",
    "process_chain_merge",
    "roll_luck_attributes",
    "shuffle_deck",
]
