"""Main entry point for the fortune-merge simulation runner."""

import argparse
import asyncio
import logging
import sys
from datetime import date, datetime
from pathlib import Path

from fortune_merge.config import Config, GameLogConfig, TimingConfig, load_config
from fortune_merge.game.engine import GameEngine
from fortune_merge.game.rng import daily_seed
from fortune_merge.logging import GameLogger
from fortune_merge.models.fortune import FortuneReport
from fortune_merge.narrative import NarrativeService
from fortune_merge.strategy import ActionType, GreedyStrategy, Strategy
from fortune_merge.utils.logger import BoardDisplay, setup_logging

logger = logging.getLogger(__name__)

# Guards against a strategy that never reaches game over
MAX_ACTIONS_PER_GAME = 10_000


def generate_log_filename(log_dir: str, day: date, salt: str) -> str:
    """Generate log filename with timestamp, seed day and salt.

    Format: {ISO timestamp}_{YYYY-MM-DD}[_{salt}].jsonl

    Args:
        log_dir: Directory for log files.
        day: Seed day of the session.
        salt: Seed salt of the session.

    Returns:
        Full path to log file.
    """
    timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    parts = [timestamp, day.isoformat()]
    if salt:
        parts.append(salt)
    filename = "_".join(parts) + ".jsonl"
    return str(Path(log_dir) / filename)


def game_seed(day: date, salt: str, game_number: int) -> str:
    """Seed for one game of a session: the daily seed salted with the game number."""
    game_salt = f"{salt}-{game_number}" if salt else str(game_number)
    return daily_seed(day, game_salt)


async def play_game(engine: GameEngine, strategy: Strategy, seed: str) -> bool:
    """Play one game to completion.

    Args:
        engine: Engine to drive
        strategy: Strategy choosing each request
        seed: Game seed

    Returns:
        True if the game reached game over
    """
    engine.new_game(seed)

    for _ in range(MAX_ACTIONS_PER_GAME):
        if engine.game_over.is_game_over:
            return True

        action = strategy.select_action(engine.view())
        if action.type == ActionType.STOP:
            break

        if action.type == ActionType.MOVE:
            accepted = await engine.move(action.column_id)
        else:
            accepted = engine.discard()

        if not accepted:
            logger.warning(f"Strategy request rejected: {action}")
            break

    logger.warning(f"Game {engine.game_number} abandoned before game over")
    return engine.game_over.is_game_over


async def run_session(
    config: Config,
    day: date,
    display: BoardDisplay,
    game_logger: GameLogger,
) -> list[int]:
    """Run a simulation session.

    Returns:
        Final score per game, in play order
    """
    num_games = config.simulation.num_games
    salt = config.simulation.salt

    engine = GameEngine(config, game_logger)
    strategy = GreedyStrategy()
    narrative = NarrativeService(config.narrative)

    finished: list[tuple[FortuneReport, int]] = []
    engine.set_callbacks(
        on_game_over=lambda report, score: finished.append((report, score)),
        on_settled=display.print_board,
    )

    game_logger.log_session_start(num_games, salt)
    scores: list[int] = []
    labels: list[str] = []

    for game_number in range(1, num_games + 1):
        seed = game_seed(day, salt, game_number)
        display.print_game_start(game_number, num_games, seed)
        finished.clear()

        await play_game(engine, strategy, seed)

        scores.append(engine.state.score)
        if not finished:
            labels.append("(unfinished)")
            continue

        report, score = finished[-1]
        labels.append(report.summary_label)
        display.print_game_end(game_number, score, engine.game_over, report)

        if config.narrative.enabled:
            result = await narrative.summarize(report, score)
            if result.ok:
                display.print_narrative(result.summary)
            else:
                print(f"\nFortune summary unavailable: {result.error}")

    game_logger.log_session_end(num_games, scores)
    display.print_final_results(scores, labels)
    return scores


def main() -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success)
    """
    parser = argparse.ArgumentParser(
        description="fortune-merge headless simulation runner"
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config file (YAML)",
    )
    parser.add_argument(
        "-n",
        "--num-games",
        type=int,
        help="Number of games to play (overrides config)",
    )
    parser.add_argument(
        "-s",
        "--salt",
        help="Seed salt, e.g. a player name (overrides config)",
    )
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        help="Seed day as YYYY-MM-DD (default: today)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--show-board",
        action="store_true",
        help="Print the board after every settled change",
    )
    parser.add_argument(
        "--game-log",
        type=Path,
        help="Directory for game log files (filename auto-generated)",
    )
    parser.add_argument(
        "--narrative",
        action="store_true",
        help="Request a fortune summary for each finished game",
    )

    args = parser.parse_args()

    # Load config
    config = load_config(args.config)

    # Apply command-line overrides
    if args.num_games:
        config.simulation.num_games = args.num_games
    if args.salt is not None:
        config.simulation.salt = args.salt
    if args.verbose:
        config.logging.level = "DEBUG"
    if args.show_board:
        config.logging.show_board = True
    if args.narrative:
        config.narrative.enabled = True

    # Headless play does not wait on merge animation
    config.timing = TimingConfig(merge_start_delay=0, merge_settle_delay=0)

    day = args.date or date.today()

    # Determine game log directory (CLI argument overrides config file)
    game_log_enabled = args.game_log is not None or config.game_log.enabled
    game_log_dir = str(args.game_log) if args.game_log else config.game_log.output_path

    setup_logging(config.logging.level)
    display = BoardDisplay(show_board=config.logging.show_board)

    print("fortune-merge simulation starting...")
    print(f"Seed day: {day.isoformat()}")
    print(f"Games: {config.simulation.num_games}")
    if config.simulation.salt:
        print(f"Salt: {config.simulation.salt}")

    if game_log_enabled:
        log_path = generate_log_filename(game_log_dir, day, config.simulation.salt)
        game_log_config = GameLogConfig(enabled=True, output_path=log_path)
        print(f"Game log: {log_path}")
    else:
        game_log_config = GameLogConfig(enabled=False)
    print()

    try:
        with GameLogger(game_log_config) as game_logger:
            asyncio.run(run_session(config, day, display, game_logger))
        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"Simulation error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
