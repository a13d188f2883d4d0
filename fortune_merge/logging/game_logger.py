"""Game logger for detailed game replay."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

from fortune_merge.config import GameLogConfig
from fortune_merge.models.board import GameOverStatus, GameState
from fortune_merge.models.card import Card
from fortune_merge.models.fortune import FortuneReport

from .formatters import format_card, format_cards, format_columns


class GameLogger:
    """Logger for detailed game events in JSONL format.

    Each line in the output file is a JSON object representing one event.
    This allows step-by-step replay of the game.
    """

    def __init__(self, config: GameLogConfig | None = None):
        """Initialize game logger.

        Args:
            config: Logging configuration. If None, logging is disabled.
                `output_path` is the JSONL file to append to.
        """
        self.config = config or GameLogConfig()
        self._file: TextIO | None = None

    def __enter__(self) -> "GameLogger":
        """Context manager entry."""
        if self.config.enabled and self.config.output_path:
            path = Path(self.config.output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(path, "a", encoding="utf-8")
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None

    def _write(self, event: dict[str, Any]) -> None:
        """Write an event to the log file.

        Args:
            event: Event dictionary to write as JSON.
        """
        if self._file:
            self._file.write(json.dumps(event, ensure_ascii=False) + "\n")
            self._file.flush()

    def log_session_start(self, num_games: int, salt: str) -> None:
        """Log session start.

        Args:
            num_games: Number of games planned.
            salt: Seed salt for the session.
        """
        self._write({
            "type": "session_start",
            "timestamp": datetime.now().isoformat(),
            "num_games": num_games,
            "salt": salt,
        })

    def log_game_start(self, game_num: int, state: GameState) -> None:
        """Log game start with the dealt board.

        Args:
            game_num: Game number.
            state: Freshly dealt state.
        """
        self._write({
            "type": "game_start",
            "game": game_num,
            "seed": state.seed,
            "columns": format_columns(state.columns),
            "queue": format_cards(state.queue),
            "deck_count": len(state.deck),
            "score": state.score,
        })

    def log_move(self, game_num: int, column_id: int, card: Card, state: GameState) -> None:
        """Log a queue-to-column move (before merges resolve).

        Args:
            game_num: Game number.
            column_id: Target column.
            card: Card that was placed.
            state: State right after placement.
        """
        self._write({
            "type": "move",
            "game": game_num,
            "move": state.move_count,
            "column": column_id,
            "card": format_card(card),
            "queue": format_cards(state.queue),
            "deck_count": len(state.deck),
        })

    def log_merge(
        self,
        game_num: int,
        column_id: int,
        merged_ids: list[int],
        new_card: Card,
        score: int,
    ) -> None:
        """Log one resolved merge.

        Args:
            game_num: Game number.
            column_id: Column where the merge happened.
            merged_ids: Ids of the two destroyed cards.
            new_card: Card created by the merge.
            score: Score after the merge.
        """
        self._write({
            "type": "merge",
            "game": game_num,
            "column": column_id,
            "merged_ids": merged_ids,
            "new_card": format_card(new_card),
            "score": score,
        })

    def log_special(
        self,
        game_num: int,
        event: str,
        detail: dict[str, Any] | None = None,
    ) -> None:
        """Log a special event.

        Args:
            game_num: Game number.
            event: Event type (e.g., "discard", "undo", "unlock").
            detail: Additional event details.
        """
        record: dict[str, Any] = {
            "type": event,
            "game": game_num,
        }
        if detail:
            record["detail"] = detail
        self._write(record)

    def log_game_over(
        self,
        game_num: int,
        status: GameOverStatus,
        state: GameState,
        report: FortuneReport | None,
    ) -> None:
        """Log game end with the fortune summary.

        Args:
            game_num: Game number.
            status: Game-over status.
            state: Final state.
            report: Fortune report for the final board.
        """
        record: dict[str, Any] = {
            "type": "game_over",
            "game": game_num,
            "reason": status.reason.value if status.reason else None,
            "trigger_column": status.trigger_column_id,
            "score": state.score,
            "moves": state.move_count,
            "columns": format_columns(state.columns),
        }
        if report:
            record["fortune"] = {
                "label": report.summary_label,
                "volatility": report.volatility.value,
                "volatility_score": report.volatility_score,
                "tier_counts": {str(k): v for k, v in report.tier_counts.items()},
                "top_cards": format_cards(report.top_cards),
            }
        self._write(record)

    def log_session_end(self, total_games: int, scores: list[int]) -> None:
        """Log session end with final results.

        Args:
            total_games: Total number of games played.
            scores: Final score per game, in play order.
        """
        self._write({
            "type": "session_end",
            "total_games": total_games,
            "scores": scores,
            "best": max(scores) if scores else 0,
        })
