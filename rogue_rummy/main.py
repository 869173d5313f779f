"""Main entry point for the Rogue Rummy simulator."""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from rogue_rummy.config import load_config
from rogue_rummy.game.engine import ActionResult, GameEngine
from rogue_rummy.logging import GameLogConfig, GameLogger
from rogue_rummy.strategy import SimpleStrategy, Strategy
from rogue_rummy.utils.logger import GameDisplay, setup_logging

logger = logging.getLogger(__name__)


def generate_log_filename(log_dir: str, names: list[str]) -> str:
    """Generate log filename with timestamp and player names.

    Format: {ISO timestamp}_{player1}_{player2}_..._{playerN}.jsonl
    Player names are sorted alphabetically.

    Args:
        log_dir: Directory for log files.
        names: Player names.

    Returns:
        Full path to log file.
    """
    timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    player_names = "_".join(sorted(names))
    filename = f"{timestamp}_{player_names}.jsonl"
    return str(Path(log_dir) / filename)


def describe_turn(result: ActionResult) -> str:
    """One-line summary of how a turn ended."""
    if result.stalemate:
        return "stalemate"
    if result.player_won:
        return "went out"
    if result.card is not None:
        return f"discarded {result.card}"
    return result.reason or "no action"


def play_round(
    engine: GameEngine,
    strategies: dict[str, Strategy],
    display: GameDisplay,
) -> None:
    """Play one round to settlement."""
    display.print_round_start(engine.round_number, engine.config.game.num_rounds)
    engine.start_new_round()
    display.print_hands(engine.players)

    while True:
        player = engine.current_player
        display.print_turn(engine.state)
        result = strategies[player.name].play_turn(engine)
        display.print_move(player, describe_turn(result))
        if result.round_result is not None:
            break

    display.print_table(engine.get_all_melds())
    display.print_round_end(result.round_result, engine.get_total_scores())


def offer_upgrades(
    engine: GameEngine,
    strategies: dict[str, Strategy],
    display: GameDisplay,
) -> None:
    """Let every player pick an upgrade between rounds."""
    for player in engine.players:
        offers = engine.offer_upgrades(player)
        choice = strategies[player.name].choose_upgrade(offers, player)
        if choice is not None and engine.apply_upgrade(player, choice.id):
            display.print_upgrade(player, choice)


def play_game(
    engine: GameEngine,
    strategies: dict[str, Strategy],
    display: GameDisplay,
) -> list[tuple[str, int]]:
    """Play every configured round.

    Returns:
        Final standings, best first
    """
    if engine.game_logger:
        engine.game_logger.log_session_start(engine.players, engine.config.game.seed)

    while not engine.is_game_over():
        play_round(engine, strategies, display)
        if not engine.is_game_over():
            offer_upgrades(engine, strategies, display)

    standings = engine.final_standings()
    display.print_final_results(standings)
    return standings


def main() -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success)
    """
    parser = argparse.ArgumentParser(
        description="Rogue Rummy: rummy with roguelike upgrades (bot simulation)"
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config file (YAML)",
    )
    parser.add_argument(
        "-r",
        "--rounds",
        type=int,
        help="Number of rounds to play (overrides config)",
    )
    parser.add_argument(
        "-s",
        "--seed",
        type=int,
        help="Random seed (overrides config)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--show-hands",
        action="store_true",
        help="Show player hands in output",
    )
    parser.add_argument(
        "--game-log",
        type=Path,
        help="Directory for game log files (filename auto-generated)",
    )

    args = parser.parse_args()

    # Load config
    config = load_config(args.config)

    # Apply command-line overrides
    if args.rounds:
        config.game.num_rounds = args.rounds
    if args.seed is not None:
        config.game.seed = args.seed
    if args.verbose:
        config.logging.level = "DEBUG"
    if args.show_hands:
        config.logging.show_hands = True

    # Determine game log directory (CLI argument overrides config file)
    game_log_enabled = args.game_log is not None or config.game_log.enabled
    game_log_dir = str(args.game_log) if args.game_log else config.game_log.output_path

    setup_logging(config.logging.level)
    display = GameDisplay(show_hands=config.logging.show_hands)

    print("Rogue Rummy starting...")
    print(f"Players: {', '.join(config.game.players)}")
    print(f"Rounds: {config.game.num_rounds}")
    if config.game.seed is not None:
        print(f"Seed: {config.game.seed}")

    if game_log_enabled:
        log_path = generate_log_filename(game_log_dir, config.game.players)
        game_log_config = GameLogConfig(enabled=True, output_path=log_path)
        print(f"Game log: {log_path}")
    else:
        game_log_config = GameLogConfig(enabled=False)
    print()

    try:
        with GameLogger(game_log_config) as game_logger:
            engine = GameEngine(config, game_logger=game_logger)
            strategies: dict[str, Strategy] = {
                p.name: SimpleStrategy(engine.rng) for p in engine.players
            }
            play_game(engine, strategies, display)
        return 0

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"Game error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
