"""Player model."""

from pydantic import BaseModel, ConfigDict, Field

from .card import DEFAULT_CARD_VALUES, Card, Rank
from .meld import Meld
from .upgrade import UpgradeId


class UpgradeMultipliers(BaseModel):
    """Multiplier accumulators installed by upgrades."""

    meld: float = 1.0  # Applied to melds
    layoff: float = 1.0  # Applied to layoffs
    all: float = 1.0  # Applied to every action


class PlayerRoundState(BaseModel):
    """Round-scoped player state, replaced wholesale at every round start."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    hand: list[Card] = Field(default_factory=list)
    melds: list[Meld] = Field(default_factory=list)
    points: int = 0  # Points accumulated from actions this round

    layoff_count: int = 0
    meld_count: int = 0
    set_count: int = 0
    run_count: int = 0
    pairs_melded: int = 0
    combo_count: int = 0  # Meld/layoff actions, for combo_master
    emptied_hand_early: bool = False  # Overflow win

    wildfire_available: bool = False
    recycling_plant_bonus: int = 0


class Player(BaseModel):
    """Player state.

    Persistent fields survive round resets and only change through upgrades
    or round-end settlement.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str

    # Upgrades
    upgrades: list[UpgradeId] = Field(default_factory=list)
    multipliers: UpgradeMultipliers = Field(default_factory=UpgradeMultipliers)
    base_mod: int = 0  # Added to base points before multipliers
    card_value_overrides: dict[Rank, int] = Field(default_factory=dict)
    can_meld_pairs: bool = False

    # Evolving upgrade counters (persist across rounds)
    evo_scale_wins: int = 0
    evo_scale_losses: int = 0
    evo_base_wins: int = 0
    evo_base_losses: int = 0

    # Catchup bonus inherited from the previous round's standings
    carryover_multiplier: float = 1.0

    round: PlayerRoundState = Field(default_factory=PlayerRoundState)

    @property
    def hand(self) -> list[Card]:
        """Cards in hand this round."""
        return self.round.hand

    @property
    def melds(self) -> list[Meld]:
        """Melds this player created this round."""
        return self.round.melds

    @property
    def points(self) -> int:
        """Action points accumulated this round."""
        return self.round.points

    def has_upgrade(self, upgrade_id: UpgradeId) -> bool:
        """Check if the player owns an upgrade."""
        return upgrade_id in self.upgrades

    def add_upgrade(self, upgrade_id: UpgradeId) -> bool:
        """Record ownership. Returns False if already owned."""
        if upgrade_id in self.upgrades:
            return False
        self.upgrades.append(upgrade_id)
        return True

    def card_value(
        self, card: Card, values: dict[Rank, int] | None = None
    ) -> int:
        """Card value including this player's rank overrides."""
        if card.rank in self.card_value_overrides:
            return self.card_value_overrides[card.rank]
        return card.value(values if values is not None else DEFAULT_CARD_VALUES)

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.round.hand.append(card)

    def has_card(self, card: Card) -> bool:
        """Check if the card (by identity) is in hand."""
        return card in self.round.hand

    def has_cards(self, cards: list[Card]) -> bool:
        """Check that every card is in hand and none is listed twice."""
        if len(set(cards)) != len(cards):
            return False
        return all(c in self.round.hand for c in cards)

    def remove_card(self, card: Card) -> bool:
        """Remove a card from the hand. Returns False if it was not there."""
        try:
            self.round.hand.remove(card)
        except ValueError:
            return False
        return True

    def remove_cards(self, cards: list[Card]) -> None:
        """Remove several cards from the hand."""
        for card in cards:
            self.remove_card(card)

    def add_score(self, points: int) -> None:
        """Add action points for this round."""
        self.round.points += points

    def deadwood_value(self, values: dict[Rank, int] | None = None) -> int:
        """Base value of the cards left in hand."""
        return sum(c.value(values) for c in self.round.hand)

    def has_won(self) -> bool:
        """Check if the hand is empty."""
        return not self.round.hand

    def reset_round_state(self) -> None:
        """Start a fresh round. Persistent upgrade state is kept."""
        self.round = PlayerRoundState(
            wildfire_available=self.has_upgrade(UpgradeId.WILDFIRE),
        )

    def __str__(self) -> str:
        return f"{self.name} ({len(self.hand)} cards, {self.points} pts)"
