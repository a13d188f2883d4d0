"""Logging utilities and board display."""

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fortune_merge.models.board import BoardView, GameOverStatus
    from fortune_merge.models.fortune import FortuneReport


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


class BoardDisplay:
    """Display board state to stdout."""

    def __init__(self, show_board: bool = False):
        """Initialize display.

        Args:
            show_board: Whether to print the board after every settled change
        """
        self.show_board = show_board

    def print_separator(self) -> None:
        """Print a separator line."""
        print("=" * 60)

    def print_game_start(self, game_number: int, num_games: int, seed: str) -> None:
        """Print game start message."""
        self.print_separator()
        print(f"GAME {game_number}/{num_games} (seed: {seed})")
        self.print_separator()

    def print_board(self, view: "BoardView") -> None:
        """Print columns bottom to top, then the queue (if show_board is enabled)."""
        if not self.show_board:
            return

        print()
        for index, cards in enumerate(view.columns, 1):
            stack = " ".join(str(card) for card in cards) if cards else "-"
            print(f"  C{index}: {stack}")

        # Placeable card is the rightmost queue entry
        queue = " ".join(str(card) for card in view.queue) if view.queue else "-"
        print(f"  Queue: {queue}")
        print(
            f"  Score: {view.score} | Deck: {view.deck_count} | "
            f"Undo: {view.undo_count} | Trash: {view.trash_count}"
        )

    def print_game_end(
        self,
        game_number: int,
        score: int,
        status: "GameOverStatus",
        report: "FortuneReport",
    ) -> None:
        """Print game end results with the fortune summary."""
        reason = status.reason.value if status.reason else "-"
        trigger = f" (column {status.trigger_column_id})" if status.trigger_column_id else ""
        print(f"\nGame {game_number} finished: {reason}{trigger}")
        print(f"  Score: {score}")
        print(f"  Fortune: {report.summary_label} [{report.volatility.value}]")
        print(f"  {report.summary_detail}")

        if report.top_cards:
            print(f"  Top cards: {' '.join(str(card) for card in report.top_cards)}")
        for highlight in report.dominant_suits:
            print(f"    {highlight.suit_emoji} {highlight.suit_label} x{highlight.count}")
        for line in report.narrative_lines:
            print(f"  - {line}")

    def print_narrative(self, summary: str) -> None:
        """Print a fetched fortune summary."""
        print("\nFortune summary:")
        for line in summary.splitlines():
            print(f"  {line}")

    def print_final_results(self, scores: list[int], labels: list[str]) -> None:
        """Print final session results."""
        self.print_separator()
        print("FINAL RESULTS")
        self.print_separator()

        for game_number, (score, label) in enumerate(zip(scores, labels), 1):
            print(f"  Game {game_number}: {score} points - {label}")

        if scores:
            average = sum(scores) / len(scores)
            print(f"\n  Best: {max(scores)} | Average: {average:.1f}")
