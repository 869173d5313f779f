"""Move validation for meld, layoff and discard commands."""

from dataclasses import dataclass
from enum import Enum

from rogue_rummy.config import RulesConfig
from rogue_rummy.models.card import Card
from rogue_rummy.models.meld import Meld, MeldType, classify
from rogue_rummy.models.player import Player


class ErrorKind(str, Enum):
    """Why a command was rejected."""

    INVALID_MELD = "invalid_meld"
    INVALID_LAYOFF_TARGET = "invalid_layoff_target"
    EMPTY_SOURCE = "empty_source"
    STALEMATE = "stalemate"
    CARD_NOT_IN_HAND = "card_not_in_hand"


@dataclass
class ValidationResult:
    """Result of move validation."""

    is_valid: bool
    error: ErrorKind | None = None
    error_message: str = ""
    meld_type: MeldType | None = None


class MoveValidator:
    """Validates player commands before the engine applies them."""

    def __init__(self, rules: RulesConfig | None = None):
        """Initialize validator.

        Args:
            rules: Table rules (uses defaults if not provided)
        """
        self.rules = rules or RulesConfig()

    def validate_meld(self, cards: list[Card], player: Player) -> ValidationResult:
        """Validate a new meld.

        Args:
            cards: Cards selected from the player's hand
            player: Acting player

        Returns:
            ValidationResult with the classified meld type on success
        """
        if not player.has_cards(cards):
            return ValidationResult(
                is_valid=False,
                error=ErrorKind.CARD_NOT_IN_HAND,
                error_message="Player does not have the selected cards",
            )

        # Two cards can only ever be a pair
        if len(cards) == 2 and not player.can_meld_pairs:
            return ValidationResult(
                is_valid=False,
                error=ErrorKind.INVALID_MELD,
                error_message="Pairs require the gemini upgrade",
            )

        meld_type = classify(
            cards,
            allow_pairs=player.can_meld_pairs,
            min_size=self.rules.min_meld_size,
            max_set_size=self.rules.max_set_size,
        )
        if meld_type == MeldType.INVALID:
            if len(cards) < self.rules.min_meld_size and len(cards) != 2:
                message = f"Meld must have at least {self.rules.min_meld_size} cards"
            elif len(cards) == 2:
                message = "Two cards must have the same rank"
            else:
                message = "Cards do not form a valid set or run"
            return ValidationResult(
                is_valid=False,
                error=ErrorKind.INVALID_MELD,
                error_message=message,
            )

        return ValidationResult(is_valid=True, meld_type=meld_type)

    def validate_layoff(
        self,
        card: Card,
        meld_index: int,
        melds: list[Meld],
        player: Player,
    ) -> ValidationResult:
        """Validate laying ``card`` off onto ``melds[meld_index]``."""
        if not player.has_card(card):
            return ValidationResult(
                is_valid=False,
                error=ErrorKind.CARD_NOT_IN_HAND,
                error_message=f"{card} is not in hand",
            )

        if not 0 <= meld_index < len(melds):
            return ValidationResult(
                is_valid=False,
                error=ErrorKind.INVALID_LAYOFF_TARGET,
                error_message="Invalid meld index",
            )

        if not melds[meld_index].can_layoff(card):
            return ValidationResult(
                is_valid=False,
                error=ErrorKind.INVALID_LAYOFF_TARGET,
                error_message="Card cannot be laid off on this meld",
            )

        return ValidationResult(is_valid=True)

    def validate_discard(self, card: Card, player: Player) -> ValidationResult:
        """Validate discarding ``card``."""
        if not player.has_card(card):
            return ValidationResult(
                is_valid=False,
                error=ErrorKind.CARD_NOT_IN_HAND,
                error_message=f"{card} is not in hand",
            )
        return ValidationResult(is_valid=True)
