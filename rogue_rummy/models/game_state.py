"""Game state models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .card import Card
from .deck import Deck
from .player import Player


class Phase(str, Enum):
    """Turn phase."""

    DRAW = "draw"
    ACTION = "action"  # Meld / layoff, repeatable
    DISCARD = "discard"
    ROUND_END = "round_end"
    STALEMATE = "stalemate"
    GAME_END = "game_end"


class RoundState(BaseModel):
    """Round-scoped table state, replaced wholesale every round."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    stock: Deck = Field(default_factory=lambda: Deck([]))
    discard_pile: list[Card] = Field(default_factory=list)  # Top = last
    reshuffle_count: int = 0

    def discard_top(self) -> Card | None:
        """Top of the discard pile, if any."""
        return self.discard_pile[-1] if self.discard_pile else None


class BonusLine(BaseModel, frozen=True):
    """One round-end bonus applied to a player."""

    name: str
    value: float
    detail: str = ""


class PlayerRoundResult(BaseModel, frozen=True):
    """Settlement breakdown for one player."""

    round_points: int
    flat_bonuses: tuple[BonusLine, ...] = ()
    multipliers: tuple[BonusLine, ...] = ()
    total_multiplier: float = 1.0
    final_score: int = 0
    deadwood: int = 0


class AutoLayoff(BaseModel, frozen=True):
    """A deadwood card placed automatically at round end."""

    player: str
    card: str
    meld_owner: str
    score: int


class RecycledWood(BaseModel, frozen=True):
    """Deadwood scored and cleared by ``recycled_wood``."""

    player: str
    deadwood_count: int
    score: int


class RoundRecord(BaseModel, frozen=True):
    """Immutable history entry for a completed round."""

    round_number: int
    scores: dict[str, int]
    bonus_details: dict[str, PlayerRoundResult]
    winner: str | None = None
    stalemate: bool = False
    auto_layoffs: tuple[AutoLayoff, ...] = ()
    recycled_wood: tuple[RecycledWood, ...] = ()


class GameState(BaseModel):
    """Overall game state."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    players: list[Player] = Field(default_factory=list)
    current_player_index: int = 0
    phase: Phase = Phase.ROUND_END
    round: RoundState = Field(default_factory=RoundState)
    round_number: int = 1
    history: list[RoundRecord] = Field(default_factory=list)

    @property
    def current_player(self) -> Player:
        """Player whose turn it is."""
        return self.players[self.current_player_index]

    def total_cards(self) -> int:
        """Cards across hands, melds, stock and discard pile."""
        in_hands = sum(len(p.hand) for p in self.players)
        in_melds = sum(len(m) for p in self.players for m in p.melds)
        return (
            in_hands
            + in_melds
            + self.round.stock.size()
            + len(self.round.discard_pile)
        )

    def __str__(self) -> str:
        parts = [f"Round {self.round_number}", f"[{self.phase.value.upper()}]"]
        if self.players:
            parts.append(f"{self.current_player.name}'s turn")
        return " ".join(parts)
