"""Logging utilities and game state display."""

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rogue_rummy.models.game_state import GameState, RoundRecord
    from rogue_rummy.models.meld import Meld
    from rogue_rummy.models.player import Player
    from rogue_rummy.models.upgrade import Upgrade


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


class GameDisplay:
    """Display game state to stdout."""

    def __init__(self, show_hands: bool = False):
        """Initialize display.

        Args:
            show_hands: Whether to show player hands
        """
        self.show_hands = show_hands

    def print_separator(self) -> None:
        """Print a separator line."""
        print("=" * 60)

    def print_round_start(self, round_number: int, num_rounds: int) -> None:
        """Print round start message."""
        self.print_separator()
        print(f"ROUND {round_number}/{num_rounds}")
        self.print_separator()

    def print_turn(self, state: "GameState") -> None:
        """Print turn information."""
        player = state.current_player
        top = state.round.discard_top()
        print(
            f"\n{player.name}'s turn (stock {state.round.stock.size()}, "
            f"discard {top if top else '-'})"
        )

    def print_move(self, player: "Player", description: str) -> None:
        """Print a player's move."""
        print(f"  -> {player.name}: {description}")

    def print_table(self, melds: list["Meld"]) -> None:
        """Print melds on the table."""
        if not melds:
            return
        print("Table:")
        for i, meld in enumerate(melds):
            print(f"  [{i}] {meld.owner}: {meld}")

    def print_hands(self, players: list["Player"]) -> None:
        """Print hands for all players (if show_hands is enabled)."""
        if not self.show_hands:
            return

        print("\nHands:")
        for player in players:
            hand = " ".join(str(c) for c in player.hand)
            print(f"  {player.name}: {hand or '[EMPTY]'}")

    def print_round_end(self, record: "RoundRecord", totals: dict[str, int]) -> None:
        """Print the round report."""
        if record.stalemate:
            print(f"\nRound {record.round_number} ended in STALEMATE")
        else:
            print(f"\nRound {record.round_number} won by {record.winner}!")

        for entry in record.auto_layoffs:
            print(
                f"  Auto-layoff: {entry.player} {entry.card} -> "
                f"{entry.meld_owner}'s meld (+{entry.score})"
            )
        for entry in record.recycled_wood:
            print(
                f"  Recycled wood: {entry.player} "
                f"{entry.deadwood_count} cards (+{entry.score})"
            )

        print("Results:")
        for name, detail in record.bonus_details.items():
            bonuses = [f"+{b.value:g} {b.name}" for b in detail.flat_bonuses]
            bonuses += [f"x{b.value:.2f} {b.name}" for b in detail.multipliers]
            bonus_str = f" ({', '.join(bonuses)})" if bonuses else ""
            print(
                f"  {name}: {detail.round_points} pts{bonus_str} "
                f"= {detail.final_score} (total {totals[name]})"
            )

    def print_upgrade(self, player: "Player", upgrade: "Upgrade") -> None:
        """Print an upgrade pick."""
        print(f"  {player.name} picked {upgrade.icon} {upgrade.display_name}")

    def print_final_results(self, standings: list[tuple[str, int]]) -> None:
        """Print final game results."""
        self.print_separator()
        print("FINAL RESULTS")
        self.print_separator()

        for rank, (name, total) in enumerate(standings, 1):
            print(f"  #{rank}: {name} - {total} points")
