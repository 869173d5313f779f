"""Base strategy class for automated players.

Defines the interface that all AI strategies must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rogue_rummy.game.engine import ActionResult, GameEngine
    from rogue_rummy.models.card import Card
    from rogue_rummy.models.player import Player
    from rogue_rummy.models.upgrade import Upgrade


class DrawSource(str, Enum):
    """Where to draw from."""

    STOCK = "stock"
    DISCARD = "discard"


class Strategy(ABC):
    """Abstract base class for game strategies.

    Strategies only read engine state and issue engine commands.
    """

    @abstractmethod
    def choose_draw(self, engine: GameEngine, player: Player) -> DrawSource:
        """Pick the draw source for this turn.

        Args:
            engine: Running game
            player: Player whose turn it is

        Returns:
            DrawSource to draw from
        """
        pass

    @abstractmethod
    def play_actions(self, engine: GameEngine, player: Player) -> ActionResult | None:
        """Issue meld and layoff commands for the action phase.

        Args:
            engine: Running game
            player: Player whose turn it is

        Returns:
            The result that ended the round, or None if the turn continues
        """
        pass

    @abstractmethod
    def choose_discard(self, engine: GameEngine, player: Player) -> Card:
        """Pick the card to discard.

        Args:
            engine: Running game
            player: Player whose turn it is

        Returns:
            Card from the player's hand
        """
        pass

    @abstractmethod
    def choose_upgrade(self, offers: list[Upgrade], player: Player) -> Upgrade | None:
        """Pick one of the offered upgrades, or None to skip."""
        pass

    def play_turn(self, engine: GameEngine) -> ActionResult:
        """Play a full turn: draw, act, discard.

        Args:
            engine: Running game in the DRAW phase

        Returns:
            Result of the last command issued. Its ``round_result`` is set
            when the turn ended the round.
        """
        player = engine.current_player

        if self.choose_draw(engine, player) == DrawSource.DISCARD:
            result = engine.draw_from_discard()
            if not result.success:
                result = engine.draw_from_stock()
        else:
            result = engine.draw_from_stock()
        if result.stalemate:
            return result

        ended = self.play_actions(engine, player)
        if ended is not None:
            return ended

        return engine.discard(self.choose_discard(engine, player))
