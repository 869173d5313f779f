"""Simple strategy implementation.

Strategy:
- Draw: take the discard top if it completes a meld, else draw from stock
- Act: meld every run, then every set, then lay off whatever fits
- Discard: random card
- Upgrade: random pick
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from rogue_rummy.config import RulesConfig
from rogue_rummy.game.finder import (
    find_all_potential_melds,
    find_all_runs,
    find_all_sets,
    find_valid_layoffs,
)
from rogue_rummy.models.meld import Meld
from rogue_rummy.strategy.base import DrawSource, Strategy

if TYPE_CHECKING:
    from rogue_rummy.game.engine import ActionResult, GameEngine
    from rogue_rummy.models.card import Card
    from rogue_rummy.models.player import Player
    from rogue_rummy.models.upgrade import Upgrade


class SimpleStrategy(Strategy):
    """Greedy bot: meld and lay off as much as possible every turn."""

    def __init__(self, rng: random.Random | None = None):
        """Initialize strategy.

        Args:
            rng: Random source for discards and upgrade picks
        """
        self.rng = rng or random.Random()

    def choose_draw(self, engine: GameEngine, player: Player) -> DrawSource:
        top = engine.state.round.discard_top()
        if top is None:
            return DrawSource.STOCK

        rules = engine.rules
        if find_all_potential_melds(
            [*player.hand, top], rules.min_meld_size, rules.max_set_size
        ):
            return DrawSource.DISCARD
        return DrawSource.STOCK

    def play_actions(self, engine: GameEngine, player: Player) -> ActionResult | None:
        # Runs first, then sets from what is left
        for meld in self._planned_melds(player.hand, engine.rules):
            result = engine.create_meld(meld.cards)
            if result.round_result is not None:
                return result

        for card in list(player.hand):
            targets = find_valid_layoffs(card, engine.get_all_melds())
            if not targets:
                continue
            result = engine.layoff(card, targets[0].meld_index)
            if result.round_result is not None:
                return result

        return None

    def _planned_melds(
        self, hand: list[Card], rules: RulesConfig | None = None
    ) -> list[Meld]:
        rules = rules or RulesConfig()
        remaining = list(hand)
        runs = find_all_runs(remaining, rules.min_meld_size)
        for run in runs:
            for card in run.cards:
                remaining.remove(card)
        return runs + find_all_sets(
            remaining, rules.min_meld_size, rules.max_set_size
        )

    def choose_discard(self, engine: GameEngine, player: Player) -> Card:
        return self.rng.choice(player.hand)

    def choose_upgrade(self, offers: list[Upgrade], player: Player) -> Upgrade | None:
        if not offers:
            return None
        return self.rng.choice(offers)
