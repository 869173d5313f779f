"""Game engine for Rogue Rummy."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum

from rogue_rummy import upgrades
from rogue_rummy.config import Config
from rogue_rummy.logging import GameLogger
from rogue_rummy.models.card import Card
from rogue_rummy.models.deck import Deck
from rogue_rummy.models.game_state import (
    AutoLayoff,
    GameState,
    Phase,
    RecycledWood,
    RoundRecord,
    RoundState,
)
from rogue_rummy.models.meld import Meld, MeldType
from rogue_rummy.models.player import Player
from rogue_rummy.models.upgrade import Upgrade, UpgradeId

from .scoring import (
    ScoreBreakdown,
    advance_combo,
    catchup_multiplier,
    layoff_score,
    meld_score,
    settle_player,
)
from .validator import ErrorKind, MoveValidator

logger = logging.getLogger(__name__)

FULL_DECK_SIZE = 52


class IllegalTransitionError(RuntimeError):
    """A command was issued in a phase that does not allow it."""


class Event(str, Enum):
    """Inputs to the turn state machine."""

    START_ROUND = "start_round"
    DRAW = "draw"
    STALEMATE = "stalemate"
    MELD = "meld"  # Meld or layoff
    WENT_OUT = "went_out"  # Hand emptied
    DISCARD = "discard"
    NEXT_PLAYER = "next_player"
    FINISH_GAME = "finish_game"


TRANSITIONS: dict[tuple[Phase, Event], Phase] = {
    (Phase.DRAW, Event.DRAW): Phase.ACTION,
    (Phase.DRAW, Event.STALEMATE): Phase.STALEMATE,
    (Phase.ACTION, Event.MELD): Phase.ACTION,
    (Phase.ACTION, Event.WENT_OUT): Phase.ROUND_END,
    (Phase.ACTION, Event.DISCARD): Phase.DISCARD,
    (Phase.DISCARD, Event.NEXT_PLAYER): Phase.DRAW,
    (Phase.DISCARD, Event.WENT_OUT): Phase.ROUND_END,
    (Phase.ROUND_END, Event.START_ROUND): Phase.DRAW,
    (Phase.STALEMATE, Event.START_ROUND): Phase.DRAW,
    (Phase.ROUND_END, Event.FINISH_GAME): Phase.GAME_END,
    (Phase.STALEMATE, Event.FINISH_GAME): Phase.GAME_END,
}


@dataclass
class ActionResult:
    """Outcome of an engine command."""

    success: bool
    error: ErrorKind | None = None
    reason: str = ""
    card: Card | None = None  # Card drawn, laid off or discarded
    meld: Meld | None = None
    score: ScoreBreakdown | None = None
    player_won: bool = False
    stalemate: bool = False
    round_result: RoundRecord | None = None  # Set when the command ended the round


class GameEngine:
    """Main game engine for Rogue Rummy.

    The engine is the only mutator of game state. Every command checks the
    transition table first, validates, and only then changes anything, so a
    rejected command leaves hands, melds, piles and scores untouched.
    """

    def __init__(
        self,
        config: Config | None = None,
        rng: random.Random | None = None,
        game_logger: GameLogger | None = None,
    ):
        """Initialize game engine.

        Args:
            config: Configuration (uses defaults if not provided)
            rng: Random source for shuffles, auto-layoffs and upgrade offers
                (seeded from ``config.game.seed`` if not provided)
            game_logger: GameLogger instance for detailed logging

        Raises:
            ValueError: If the deck cannot cover the deal.
        """
        self.config = config or Config()
        self.rules = self.config.rules
        self.scoring = self.config.scoring
        self.rng = rng or random.Random(self.config.game.seed)
        self.game_logger = game_logger

        self.validator = MoveValidator(self.rules)

        names = self.config.game.players
        needed = len(names) * self.rules.cards_per_player + 1
        if not names or needed > FULL_DECK_SIZE:
            raise ValueError(
                f"Cannot deal {self.rules.cards_per_player} cards to "
                f"{len(names)} players from one deck"
            )

        self.state = GameState(players=[Player(name=name) for name in names])

    def _require(self, event: Event) -> None:
        if (self.state.phase, event) not in TRANSITIONS:
            raise IllegalTransitionError(
                f"Cannot {event.value} during {self.state.phase.value} phase"
            )

    def _transition(self, event: Event) -> None:
        self._require(event)
        new_phase = TRANSITIONS[(self.state.phase, event)]
        logger.debug(f"Phase {self.state.phase.value} -> {new_phase.value}")
        self.state.phase = new_phase

    @property
    def players(self) -> list[Player]:
        """Players in seat order."""
        return self.state.players

    @property
    def phase(self) -> Phase:
        """Current turn phase."""
        return self.state.phase

    @property
    def round_number(self) -> int:
        """Number of the current (or next) round."""
        return self.state.round_number

    @property
    def current_player(self) -> Player:
        """Player whose turn it is."""
        return self.state.current_player

    @property
    def stock(self) -> Deck:
        """Stock for the current round."""
        return self.state.round.stock

    @property
    def discard_pile(self) -> list[Card]:
        """Discard pile for the current round (top = last)."""
        return self.state.round.discard_pile

    def get_all_melds(self) -> list[Meld]:
        """Every meld on the table, in seat order then creation order."""
        return [meld for player in self.players for meld in player.melds]

    def get_total_scores(self) -> dict[str, int]:
        """Cumulative scores over completed rounds."""
        totals = {p.name: 0 for p in self.players}
        for record in self.state.history:
            for name, score in record.scores.items():
                totals[name] += score
        return totals

    def is_game_over(self) -> bool:
        """Check if the configured number of rounds has been played."""
        return self.state.phase == Phase.GAME_END

    def final_standings(self) -> list[tuple[str, int]]:
        """Players ranked by total score.

        Ties go to the player with more round wins, then to the higher
        single-round score.
        """
        totals = self.get_total_scores()

        def sort_key(name: str) -> tuple[int, int, int]:
            wins = sum(1 for r in self.state.history if r.winner == name)
            best = max((r.scores.get(name, 0) for r in self.state.history), default=0)
            return (-totals[name], -wins, -best)

        ranking = sorted(totals, key=sort_key)
        return [(name, totals[name]) for name in ranking]

    def start_new_round(self) -> None:
        """Reset round state, shuffle, deal and seed the discard pile.

        Raises:
            IllegalTransitionError: If a round is in progress or the game is over.
        """
        self._require(Event.START_ROUND)

        for player in self.players:
            player.reset_round_state()

        stock = Deck()
        stock.shuffle(self.rng)
        self.state.round = RoundState(stock=stock)

        for _ in range(self.rules.cards_per_player):
            for player in self.players:
                player.add_card(stock.draw())
        self.state.round.discard_pile.append(stock.draw())

        self.state.current_player_index = 0
        self._transition(Event.START_ROUND)

        logger.info(
            f"Round {self.state.round_number} started, "
            f"stock {stock.size()}, discard {self.state.round.discard_top()}"
        )
        if self.game_logger:
            self.game_logger.log_round_start(
                self.state.round_number,
                self.players,
                self.state.round.discard_top(),
                stock.size(),
            )

    def _reshuffle(self) -> bool:
        """Move the discard pile under a fresh stock, keeping its top card.

        Returns:
            False if the reshuffle limit has been reached.
        """
        rs = self.state.round
        if rs.reshuffle_count >= self.rules.max_reshuffles:
            return False

        rs.reshuffle_count += 1
        top = rs.discard_pile.pop() if rs.discard_pile else None
        rs.stock = Deck(rs.discard_pile)
        rs.stock.shuffle(self.rng)
        rs.discard_pile = [top] if top is not None else []

        logger.info(
            f"Reshuffled discard pile into stock "
            f"({rs.reshuffle_count}/{self.rules.max_reshuffles}), "
            f"stock {rs.stock.size()}"
        )
        if self.game_logger:
            self.game_logger.log_reshuffle(
                self.state.round_number, rs.reshuffle_count, rs.stock.size()
            )
        return True

    def draw_from_stock(self) -> ActionResult:
        """Draw the top stock card, reshuffling the discard pile if needed.

        Ends the round in stalemate when the stock is empty and no reshuffles
        remain.
        """
        self._require(Event.DRAW)
        player = self.current_player
        rs = self.state.round

        while rs.stock.is_empty():
            if not self._reshuffle():
                logger.warning(
                    f"Stalemate in round {self.state.round_number}: "
                    f"stock empty after {rs.reshuffle_count} reshuffles"
                )
                self._transition(Event.STALEMATE)
                record = self._settle_round(winner=None)
                return ActionResult(
                    success=False,
                    error=ErrorKind.STALEMATE,
                    reason="Stock is empty and no reshuffles remain",
                    stalemate=True,
                    round_result=record,
                )

        card = rs.stock.draw()
        player.add_card(card)
        self._transition(Event.DRAW)

        logger.debug(f"{player.name} drew {card} from stock")
        if self.game_logger:
            self.game_logger.log_action(
                self.state.round_number, player, "draw_stock", [card]
            )
        return ActionResult(success=True, card=card)

    def draw_from_discard(self) -> ActionResult:
        """Take the top card of the discard pile."""
        self._require(Event.DRAW)
        player = self.current_player
        rs = self.state.round

        if not rs.discard_pile:
            return ActionResult(
                success=False,
                error=ErrorKind.EMPTY_SOURCE,
                reason="Discard pile is empty",
            )

        card = rs.discard_pile.pop()
        player.add_card(card)
        self._transition(Event.DRAW)

        logger.debug(f"{player.name} took {card} from discard pile")
        if self.game_logger:
            self.game_logger.log_action(
                self.state.round_number, player, "draw_discard", [card]
            )
        return ActionResult(success=True, card=card)

    def create_meld(self, cards: list[Card]) -> ActionResult:
        """Meld cards from the current player's hand and score it."""
        self._require(Event.MELD)
        player = self.current_player

        validation = self.validator.validate_meld(cards, player)
        if not validation.is_valid:
            return ActionResult(
                success=False,
                error=validation.error,
                reason=validation.error_message,
            )

        player.remove_cards(cards)
        meld = Meld(cards, owner=player.name, meld_type=validation.meld_type)
        player.round.melds.append(meld)

        rs = player.round
        rs.meld_count += 1
        if meld.meld_type == MeldType.PAIR:
            rs.pairs_melded += 1
        elif meld.meld_type == MeldType.SET:
            rs.set_count += 1
        elif meld.meld_type == MeldType.RUN:
            rs.run_count += 1

        breakdown = meld_score(meld, player, self.scoring, self.rules.card_values)
        player.add_score(breakdown.final_score)
        breakdown.combo_bonus = advance_combo(player, self.scoring)
        player.add_score(breakdown.combo_bonus)

        logger.debug(
            f"{player.name} melded {meld.meld_type.value} {meld} "
            f"for {breakdown.total} points"
        )
        if self.game_logger:
            self.game_logger.log_action(
                self.state.round_number,
                player,
                "meld",
                list(cards),
                meld,
                breakdown.total,
            )
        return self._after_action(
            player, ActionResult(success=True, meld=meld, score=breakdown)
        )

    def layoff(self, card: Card, meld_index: int) -> ActionResult:
        """Lay a card from the current player's hand onto any table meld."""
        self._require(Event.MELD)
        player = self.current_player
        melds = self.get_all_melds()

        validation = self.validator.validate_layoff(card, meld_index, melds, player)
        if not validation.is_valid:
            return ActionResult(
                success=False,
                error=validation.error,
                reason=validation.error_message,
            )

        meld = melds[meld_index]
        player.remove_card(card)
        meld.add_card(card)

        breakdown = layoff_score(card, player, self.scoring, self.rules.card_values)
        player.add_score(breakdown.final_score)
        player.round.layoff_count += 1
        breakdown.combo_bonus = advance_combo(player, self.scoring)
        player.add_score(breakdown.combo_bonus)

        logger.debug(
            f"{player.name} laid off {card} on {meld.owner}'s {meld} "
            f"for {breakdown.total} points"
        )
        if self.game_logger:
            self.game_logger.log_action(
                self.state.round_number,
                player,
                "layoff",
                [card],
                meld,
                breakdown.total,
            )
        return self._after_action(
            player, ActionResult(success=True, card=card, meld=meld, score=breakdown)
        )

    def _after_action(self, player: Player, result: ActionResult) -> ActionResult:
        """Finish a successful meld or layoff, ending the round on an empty hand."""
        if not player.has_won():
            self._transition(Event.MELD)
            return result

        player.round.emptied_hand_early = True
        logger.info(f"{player.name} went out during the action phase")
        self._transition(Event.WENT_OUT)
        result.player_won = True
        result.round_result = self._settle_round(winner=player)
        return result

    def discard(self, card: Card, advance: bool = True) -> ActionResult:
        """Discard a card, ending the turn.

        Args:
            card: Card from the current player's hand
            advance: Move on to the next player. With False the phase stays
                DISCARD until ``next_player()`` is called.
        """
        self._require(Event.DISCARD)
        player = self.current_player

        validation = self.validator.validate_discard(card, player)
        if not validation.is_valid:
            return ActionResult(
                success=False,
                error=validation.error,
                reason=validation.error_message,
            )

        player.remove_card(card)
        self.state.round.discard_pile.append(card)
        if player.has_upgrade(UpgradeId.RECYCLING_PLANT):
            player.round.recycling_plant_bonus += 1
        self._transition(Event.DISCARD)

        logger.debug(f"{player.name} discarded {card}")
        if self.game_logger:
            self.game_logger.log_action(
                self.state.round_number, player, "discard", [card]
            )

        result = ActionResult(success=True, card=card)
        if player.has_won():
            logger.info(f"{player.name} went out by discarding {card}")
            self._transition(Event.WENT_OUT)
            result.player_won = True
            result.round_result = self._settle_round(winner=player)
        elif advance:
            self.next_player()
        return result

    def next_player(self) -> None:
        """Pass the turn to the next seat."""
        self._transition(Event.NEXT_PLAYER)
        self.state.current_player_index = (
            self.state.current_player_index + 1
        ) % len(self.players)

    def _auto_layoff(self, winner: Player | None) -> list[AutoLayoff]:
        """Lay off whatever deadwood fits onto random eligible melds."""
        placed: list[AutoLayoff] = []
        melds = self.get_all_melds()
        if not melds:
            return placed

        for player in self.players:
            if player is winner or not player.hand:
                continue
            for card in list(player.hand):
                eligible = [m for m in melds if m.can_layoff(card)]
                if not eligible:
                    continue
                meld = self.rng.choice(eligible)
                player.remove_card(card)
                meld.add_card(card)

                breakdown = layoff_score(
                    card, player, self.scoring, self.rules.card_values
                )
                player.add_score(breakdown.final_score)
                player.round.layoff_count += 1
                placed.append(
                    AutoLayoff(
                        player=player.name,
                        card=str(card),
                        meld_owner=meld.owner,
                        score=breakdown.final_score,
                    )
                )
                logger.debug(
                    f"Auto-layoff: {player.name} {card} -> {meld.owner}'s {meld}"
                )
        return placed

    def _recycle_wood(self) -> list[RecycledWood]:
        """Score and clear deadwood for ``recycled_wood`` owners."""
        recycled: list[RecycledWood] = []
        for player in self.players:
            if not player.has_upgrade(UpgradeId.RECYCLED_WOOD) or not player.hand:
                continue
            count = len(player.hand)
            score = count * self.scoring.recycled_wood_per_card
            player.add_score(score)
            self.state.round.discard_pile.extend(player.hand)
            player.hand.clear()
            recycled.append(
                RecycledWood(player=player.name, deadwood_count=count, score=score)
            )
        return recycled

    def _settle_round(self, winner: Player | None) -> RoundRecord:
        """Score the round, record it and prepare carryover state.

        Args:
            winner: Player who went out, or None on stalemate

        Returns:
            The appended history record
        """
        stalemate = winner is None
        auto_layoffs = self._auto_layoff(winner)
        recycled = self._recycle_wood()

        values = self.rules.card_values
        opponent_deadwood = sum(
            p.deadwood_value(values) for p in self.players if p is not winner
        )

        details = {
            p.name: settle_player(
                p,
                is_winner=p is winner,
                opponent_deadwood=opponent_deadwood,
                scoring=self.scoring,
                stalemate=stalemate,
                card_values=values,
            )
            for p in self.players
        }
        record = RoundRecord(
            round_number=self.state.round_number,
            scores={name: d.final_score for name, d in details.items()},
            bonus_details=details,
            winner=winner.name if winner else None,
            stalemate=stalemate,
            auto_layoffs=tuple(auto_layoffs),
            recycled_wood=tuple(recycled),
        )
        self.state.history.append(record)

        totals = self.get_total_scores()
        leader_total = max(totals.values())
        for player in self.players:
            player.carryover_multiplier = catchup_multiplier(
                leader_total,
                totals[player.name],
                self.scoring.catchup_bonus_per_deficit,
            )

            won = player is winner
            if player.has_upgrade(UpgradeId.EVO_SCALE):
                if won:
                    player.evo_scale_wins += 1
                else:
                    player.evo_scale_losses += 1
            if player.has_upgrade(UpgradeId.EVO_BASE):
                if won:
                    player.evo_base_wins += 1
                else:
                    player.evo_base_losses += 1

        if stalemate:
            logger.info(f"Round {record.round_number} ended in stalemate")
        else:
            logger.info(f"Round {record.round_number} won by {record.winner}")
        logger.debug(f"Round {record.round_number} scores: {record.scores}")

        if self.game_logger:
            self.game_logger.log_round_end(record, totals)

        self.state.round_number += 1
        if self.state.round_number > self.config.game.num_rounds:
            self._transition(Event.FINISH_GAME)
            logger.info(f"Game over after {record.round_number} rounds")
            if self.game_logger:
                self.game_logger.log_game_end(
                    len(self.state.history), self.final_standings()
                )
        return record

    def offer_upgrades(self, player: Player, count: int | None = None) -> list[Upgrade]:
        """Draw distinct upgrades the player does not own yet."""
        return upgrades.random_upgrades(
            self.rng,
            count if count is not None else self.config.game.upgrade_choices,
            exclude=player.upgrades,
        )

    def apply_upgrade(self, player: Player, upgrade_id: str | UpgradeId) -> bool:
        """Give a player an upgrade. Unknown or already owned ids return False."""
        applied = upgrades.apply_upgrade(player, upgrade_id)
        if applied:
            logger.info(f"{player.name} picked upgrade {upgrade_id}")
            if self.game_logger:
                self.game_logger.log_upgrade(
                    self.state.round_number, player, UpgradeId(upgrade_id).value
                )
        else:
            logger.debug(f"Upgrade {upgrade_id} not applied to {player.name}")
        return applied

    def remove_upgrade(self, player: Player, upgrade_id: str | UpgradeId) -> bool:
        """Take an upgrade away from a player and undo its effect."""
        removed = upgrades.remove_upgrade(player, upgrade_id)
        if removed:
            logger.info(f"{player.name} lost upgrade {upgrade_id}")
        return removed
