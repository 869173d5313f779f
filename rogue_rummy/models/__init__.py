"""Game models."""

from .card import Card, Rank, Suit
from .deck import Deck
from .game_state import GameState, Phase, RoundRecord, RoundState
from .meld import Meld, MeldType
from .player import Player, PlayerRoundState
from .upgrade import Upgrade, UpgradeId

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "Deck",
    "Meld",
    "MeldType",
    "Player",
    "PlayerRoundState",
    "GameState",
    "Phase",
    "RoundRecord",
    "RoundState",
    "Upgrade",
    "UpgradeId",
]
