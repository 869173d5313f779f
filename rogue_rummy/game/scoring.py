"""Per-action scoring and round-end bonus computation.

Action score::

    base = card values + base_mod + recycling plant + evo base
    final = round_half_up(base * action_mult * upgrade_mult)

Round-end score::

    final = round_half_up((round points + flat bonuses) * product(multipliers))
"""

import math
from dataclasses import dataclass

from rogue_rummy.config import ScoringConfig
from rogue_rummy.models.card import Card, Rank
from rogue_rummy.models.game_state import BonusLine, PlayerRoundResult
from rogue_rummy.models.meld import Meld, MeldType
from rogue_rummy.models.player import Player
from rogue_rummy.models.upgrade import UpgradeId
from rogue_rummy.upgrades import EVO_BASE_STEP, EVO_SCALE_STEP


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity."""
    return math.floor(value + 0.5)


@dataclass
class ScoreBreakdown:
    """How an action score was computed."""

    base_score: int  # Card values only
    base_mod: int  # Flat addend from upgrades
    modifier: float  # Action multiplier
    upgrade_mult: float
    final_score: int
    meld_type: MeldType | None = None  # None for layoffs
    combo_bonus: int = 0

    @property
    def total(self) -> int:
        """Points the action added, combo included."""
        return self.final_score + self.combo_bonus


def action_base_mod(player: Player) -> int:
    """Flat addend applied once per action."""
    total = player.base_mod
    if player.has_upgrade(UpgradeId.RECYCLING_PLANT):
        total += player.round.recycling_plant_bonus
    if player.has_upgrade(UpgradeId.EVO_BASE):
        total += (player.evo_base_wins + player.evo_base_losses) * EVO_BASE_STEP
    return total


def _evo_scale_mult(player: Player) -> float:
    if not player.has_upgrade(UpgradeId.EVO_SCALE):
        return 1.0
    return 1 + (player.evo_scale_wins + player.evo_scale_losses) * EVO_SCALE_STEP


def action_multiplier(meld_type: MeldType, scoring: ScoringConfig) -> float:
    """Multiplier for creating a meld of ``meld_type``."""
    if meld_type == MeldType.PAIR:
        return scoring.pair_mod
    if meld_type == MeldType.SET:
        return scoring.set_mod
    return scoring.run_mod


def meld_score(
    meld: Meld,
    player: Player,
    scoring: ScoringConfig,
    card_values: dict[Rank, int] | None = None,
) -> ScoreBreakdown:
    """Score a newly created meld.

    Consumes the player's wildfire charge when one is available.
    """
    card_total = sum(player.card_value(c, card_values) for c in meld.cards)
    base_mod = action_base_mod(player)
    modifier = action_multiplier(meld.meld_type, scoring)

    upgrade_mult = player.multipliers.meld * player.multipliers.all
    if player.has_upgrade(UpgradeId.WILDFIRE) and player.round.wildfire_available:
        upgrade_mult *= scoring.wildfire_mult
        player.round.wildfire_available = False
    upgrade_mult *= _evo_scale_mult(player)

    return ScoreBreakdown(
        base_score=card_total,
        base_mod=base_mod,
        modifier=modifier,
        upgrade_mult=upgrade_mult,
        final_score=round_half_up((card_total + base_mod) * modifier * upgrade_mult),
        meld_type=meld.meld_type,
    )


def layoff_score(
    card: Card,
    player: Player,
    scoring: ScoringConfig,
    card_values: dict[Rank, int] | None = None,
) -> ScoreBreakdown:
    """Score a single layoff card. Wildfire never applies."""
    card_total = player.card_value(card, card_values)
    base_mod = action_base_mod(player)
    upgrade_mult = (
        player.multipliers.layoff * player.multipliers.all * _evo_scale_mult(player)
    )

    return ScoreBreakdown(
        base_score=card_total,
        base_mod=base_mod,
        modifier=scoring.lay_mod,
        upgrade_mult=upgrade_mult,
        final_score=round_half_up(
            (card_total + base_mod) * scoring.lay_mod * upgrade_mult
        ),
    )


def advance_combo(player: Player, scoring: ScoringConfig) -> int:
    """Count one meld/layoff action and return any combo bonus earned."""
    player.round.combo_count += 1
    if (
        player.has_upgrade(UpgradeId.COMBO_MASTER)
        and player.round.combo_count % scoring.combo_interval == 0
    ):
        return round_half_up(scoring.combo_bonus * player.multipliers.all)
    return 0


def round_end_bonuses(
    player: Player,
    is_winner: bool,
    opponent_deadwood: int,
    scoring: ScoringConfig,
    stalemate: bool = False,
) -> tuple[list[BonusLine], list[BonusLine]]:
    """Compute flat bonuses and multipliers for one player.

    Args:
        player: Player being settled
        is_winner: Whether the player went out this round
        opponent_deadwood: Base value of every other player's hand
        scoring: Scoring constants
        stalemate: Flat bonuses are skipped entirely on stalemate

    Returns:
        (flat_bonuses, multipliers)
    """
    flat: list[BonusLine] = []
    mults: list[BonusLine] = []
    rs = player.round

    if not stalemate:
        if is_winner:
            flat.append(BonusLine(name="Win Bonus", value=scoring.win_bonus))
            deadwood_bonus = min(
                round_half_up(opponent_deadwood / scoring.deadwood_bonus_divisor),
                scoring.deadwood_bonus_cap,
            )
            flat.append(
                BonusLine(
                    name="Deadwood Bonus",
                    value=deadwood_bonus,
                    detail=f"{opponent_deadwood} opponent deadwood",
                )
            )
        if rs.emptied_hand_early:
            flat.append(BonusLine(name="Overflow Bonus", value=scoring.overflow_bonus))

    if rs.layoff_count > 0:
        capped = min(rs.layoff_count, scoring.layoff_bonus_cap)
        detail = f"{rs.layoff_count} layoffs"
        if rs.layoff_count > scoring.layoff_bonus_cap:
            detail += f" (capped at {scoring.layoff_bonus_cap})"
        mults.append(
            BonusLine(
                name="Layoff Bonus",
                value=1 + capped * scoring.layoff_bonus_per_level,
                detail=detail,
            )
        )

    if rs.meld_count > 0 or rs.layoff_count > 0:
        mults.append(
            BonusLine(
                name="Alchemist",
                value=1
                + rs.meld_count * scoring.alchemist_per_meld
                + rs.layoff_count * scoring.alchemist_per_layoff,
                detail=f"{rs.meld_count} melds, {rs.layoff_count} layoffs",
            )
        )

    if rs.set_count > 0 and rs.run_count > 0:
        mults.append(
            BonusLine(name="Hut Hike", value=scoring.hut_hike_bonus, detail="set + run")
        )

    if rs.run_count >= 2:
        mults.append(
            BonusLine(
                name="Marathon",
                value=scoring.marathon_bonus,
                detail=f"{rs.run_count} runs",
            )
        )

    if rs.set_count >= 2:
        mults.append(
            BonusLine(
                name="Slot Machine",
                value=scoring.slot_machine_bonus,
                detail=f"{rs.set_count} sets",
            )
        )

    if rs.pairs_melded >= scoring.hexagram_pairs:
        mults.append(
            BonusLine(
                name="Hexagram",
                value=scoring.hexagram_bonus,
                detail=f"melded {rs.pairs_melded} pairs",
            )
        )

    if player.carryover_multiplier > 1.0:
        mults.append(
            BonusLine(
                name="Catchup Bonus",
                value=player.carryover_multiplier,
                detail="from previous round",
            )
        )

    return flat, mults


def settle_player(
    player: Player,
    is_winner: bool,
    opponent_deadwood: int,
    scoring: ScoringConfig,
    stalemate: bool = False,
    card_values: dict[Rank, int] | None = None,
) -> PlayerRoundResult:
    """Final round score for one player."""
    flat, mults = round_end_bonuses(
        player, is_winner, opponent_deadwood, scoring, stalemate
    )
    total_multiplier = math.prod(m.value for m in mults)
    flat_total = sum(b.value for b in flat)

    return PlayerRoundResult(
        round_points=player.points,
        flat_bonuses=tuple(flat),
        multipliers=tuple(mults),
        total_multiplier=total_multiplier,
        final_score=round_half_up((player.points + flat_total) * total_multiplier),
        deadwood=player.deadwood_value(card_values),
    )


def catchup_multiplier(leader_total: int, player_total: int, rate: float) -> float:
    """Next-round multiplier for a trailing player. Exactly 1.0 at or above the leader."""
    deficit = leader_total - player_total
    if deficit <= 0:
        return 1.0
    return 1 + deficit * rate
