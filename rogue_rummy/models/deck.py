"""Stock deck."""

import random

from .card import RANK_ORDER, SUIT_ORDER, Card


def create_full_deck(deck_index: int = 0) -> list[Card]:
    """Create the 52 distinct cards in suit-then-rank order."""
    return [
        Card(rank=rank, suit=suit, deck_index=deck_index)
        for suit in SUIT_ORDER
        for rank in RANK_ORDER
    ]


class Deck:
    """Ordered card stock. The top of the stock is the end of the list."""

    def __init__(self, cards: list[Card] | None = None):
        """Initialize deck.

        Args:
            cards: Initial cards (bottom first). A full 52-card deck if omitted.
        """
        self.cards: list[Card] = list(cards) if cards is not None else create_full_deck()

    def shuffle(self, rng: random.Random) -> None:
        """Shuffle in place with a uniform (Fisher-Yates) permutation."""
        rng.shuffle(self.cards)

    def draw(self) -> Card:
        """Remove and return the top card.

        Raises:
            IndexError: If the deck is empty.
        """
        return self.cards.pop()

    def size(self) -> int:
        """Number of cards left."""
        return len(self.cards)

    def is_empty(self) -> bool:
        """Check if the deck is empty."""
        return not self.cards

    def __len__(self) -> int:
        return len(self.cards)

    def __repr__(self) -> str:
        return f"Deck({len(self.cards)} cards)"
