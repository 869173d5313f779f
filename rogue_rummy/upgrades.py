"""Upgrade catalog.

Each upgrade is a ``UpgradeId`` variant with display metadata. Upgrades that
change persistent player fields register an apply/remove hook pair in
``_APPLY``/``_REMOVE``; the rest (``combo_master``, ``recycled_wood``) are
pure data read by the scoring code.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Callable

from rogue_rummy.models.card import Rank
from rogue_rummy.models.upgrade import Upgrade, UpgradeId

if TYPE_CHECKING:
    from rogue_rummy.models.player import Player


FACE_CARD_VALUE = 20
EVO_SCALE_START = 1.5
EVO_SCALE_STEP = 0.5  # Per win or loss
EVO_BASE_START = 10
EVO_BASE_STEP = 5  # Per win or loss

UPGRADES: dict[UpgradeId, Upgrade] = {
    UpgradeId.WILDFIRE: Upgrade(
        UpgradeId.WILDFIRE,
        "Wildfire",
        "🔥",
        "First meld each round scores x5",
        "One-time boost per round. Greys out after use, resets next round.",
    ),
    UpgradeId.FACE_CARDS: Upgrade(
        UpgradeId.FACE_CARDS,
        "Face Cards",
        "👑",
        "J/Q/K worth 20 instead of 10",
        "Increases base score for face cards in melds and layoffs. Permanent.",
    ),
    UpgradeId.COMBO_MASTER: Upgrade(
        UpgradeId.COMBO_MASTER,
        "Combo Master",
        "⚡",
        "Every 3rd meld/layoff gives +50 bonus",
        "+50 flat bonus, scaled by your all-actions multiplier. Counter shows X/3.",
    ),
    UpgradeId.RECYCLING_PLANT: Upgrade(
        UpgradeId.RECYCLING_PLANT,
        "Recycling Plant",
        "♻️",
        "+X to all actions, X increases by 1 when you discard",
        "X starts at 0 each round. +1 per discard. Added to base before multipliers.",
    ),
    UpgradeId.GEMINI: Upgrade(
        UpgradeId.GEMINI,
        "Gemini",
        "♊",
        "You can meld Pairs, they score x2",
        "Pairs = 2 matching cards. Anyone can layoff. Meld 3+ pairs for Hexagram.",
    ),
    UpgradeId.EVO_SCALE: Upgrade(
        UpgradeId.EVO_SCALE,
        "Evo Scale",
        "✖️",
        "x1.5 to all actions, +x0.5 after each win/loss",
        "Starts at x1.5. Grows by x0.5 every round. Applied after action multipliers.",
    ),
    UpgradeId.EVO_BASE: Upgrade(
        UpgradeId.EVO_BASE,
        "Evo Base",
        "➕",
        "+10 to all actions, +5 after each win/loss",
        "Starts at +10. Grows by +5 every round. Added to base before multipliers.",
    ),
    # Scored at round end but never offered; there is no unlock path for it.
    UpgradeId.RECYCLED_WOOD: Upgrade(
        UpgradeId.RECYCLED_WOOD,
        "Recycled Wood",
        "🪵",
        "Deadwood scores +5 per card at round end",
        "Leftover cards are scored and cleared before round-end bonuses.",
        offerable=False,
    ),
}


def _apply_wildfire(player: Player) -> None:
    player.round.wildfire_available = True


def _remove_wildfire(player: Player) -> None:
    player.round.wildfire_available = False


def _apply_face_cards(player: Player) -> None:
    for rank in (Rank.JACK, Rank.QUEEN, Rank.KING):
        player.card_value_overrides[rank] = FACE_CARD_VALUE


def _remove_face_cards(player: Player) -> None:
    for rank in (Rank.JACK, Rank.QUEEN, Rank.KING):
        player.card_value_overrides.pop(rank, None)


def _reset_recycling_plant(player: Player) -> None:
    player.round.recycling_plant_bonus = 0


def _apply_gemini(player: Player) -> None:
    player.can_meld_pairs = True


def _remove_gemini(player: Player) -> None:
    player.can_meld_pairs = False


def _apply_evo_scale(player: Player) -> None:
    player.multipliers.all *= EVO_SCALE_START
    player.evo_scale_wins = 0
    player.evo_scale_losses = 0


def _remove_evo_scale(player: Player) -> None:
    player.multipliers.all /= EVO_SCALE_START
    player.evo_scale_wins = 0
    player.evo_scale_losses = 0


def _apply_evo_base(player: Player) -> None:
    player.base_mod += EVO_BASE_START
    player.evo_base_wins = 0
    player.evo_base_losses = 0


def _remove_evo_base(player: Player) -> None:
    player.base_mod -= EVO_BASE_START
    player.evo_base_wins = 0
    player.evo_base_losses = 0


_APPLY: dict[UpgradeId, Callable[[Player], None]] = {
    UpgradeId.WILDFIRE: _apply_wildfire,
    UpgradeId.FACE_CARDS: _apply_face_cards,
    UpgradeId.RECYCLING_PLANT: _reset_recycling_plant,
    UpgradeId.GEMINI: _apply_gemini,
    UpgradeId.EVO_SCALE: _apply_evo_scale,
    UpgradeId.EVO_BASE: _apply_evo_base,
}

_REMOVE: dict[UpgradeId, Callable[[Player], None]] = {
    UpgradeId.WILDFIRE: _remove_wildfire,
    UpgradeId.FACE_CARDS: _remove_face_cards,
    UpgradeId.RECYCLING_PLANT: _reset_recycling_plant,
    UpgradeId.GEMINI: _remove_gemini,
    UpgradeId.EVO_SCALE: _remove_evo_scale,
    UpgradeId.EVO_BASE: _remove_evo_base,
}

_missing = set(UpgradeId) - set(UPGRADES)
if _missing:
    raise RuntimeError(f"Upgrades missing from catalog: {sorted(_missing)}")
if set(_APPLY) != set(_REMOVE):
    raise RuntimeError("Upgrade apply/remove hooks must come in pairs")


def parse_upgrade_id(value: str | UpgradeId) -> UpgradeId | None:
    """Return the UpgradeId for ``value``, or None if it is unknown."""
    try:
        return UpgradeId(value)
    except ValueError:
        return None


def get_upgrade(upgrade_id: str | UpgradeId) -> Upgrade | None:
    """Look up catalog metadata."""
    parsed = parse_upgrade_id(upgrade_id)
    return UPGRADES[parsed] if parsed is not None else None


def apply_upgrade(player: Player, upgrade_id: str | UpgradeId) -> bool:
    """Give ``player`` an upgrade.

    Unknown ids are rejected and already-owned upgrades are left alone.

    Returns:
        True if the upgrade was newly applied.
    """
    parsed = parse_upgrade_id(upgrade_id)
    if parsed is None:
        return False
    if not player.add_upgrade(parsed):
        return False
    hook = _APPLY.get(parsed)
    if hook is not None:
        hook(player)
    return True


def remove_upgrade(player: Player, upgrade_id: str | UpgradeId) -> bool:
    """Take an upgrade away and undo its effect.

    Returns:
        True if the player owned it.
    """
    parsed = parse_upgrade_id(upgrade_id)
    if parsed is None or not player.has_upgrade(parsed):
        return False
    player.upgrades.remove(parsed)
    hook = _REMOVE.get(parsed)
    if hook is not None:
        hook(player)
    return True


def random_upgrades(
    rng: random.Random,
    count: int = 3,
    exclude: list[UpgradeId] | None = None,
) -> list[Upgrade]:
    """Draw up to ``count`` distinct offerable upgrades not in ``exclude``."""
    excluded = set(exclude or [])
    available = [
        u for u in UPGRADES.values() if u.offerable and u.id not in excluded
    ]
    rng.shuffle(available)
    return available[:count]
