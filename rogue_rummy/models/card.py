"""Card model and card notation helpers."""

import re
from enum import Enum
from typing import Iterable

from pydantic import BaseModel


class Suit(str, Enum):
    """Card suit. Declaration order is the canonical sort order (s-h-c-d)."""

    SPADE = "s"
    HEART = "h"
    CLUB = "c"
    DIAMOND = "d"


class Rank(str, Enum):
    """Card rank. Declaration order defines run adjacency (Ace is low only)."""

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"


RANK_ORDER: tuple[Rank, ...] = tuple(Rank)
SUIT_ORDER: tuple[Suit, ...] = tuple(Suit)

RANK_INDEX: dict[Rank, int] = {rank: i for i, rank in enumerate(RANK_ORDER)}
SUIT_INDEX: dict[Suit, int] = {suit: i for i, suit in enumerate(SUIT_ORDER)}

DEFAULT_CARD_VALUES: dict[Rank, int] = {
    Rank.ACE: 11,
    Rank.TWO: 2,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 10,
    Rank.QUEEN: 10,
    Rank.KING: 10,
}

_CARD_PATTERN = re.compile(r"^([a2-9]|10|[jqk])([shcd])$")


class Card(BaseModel, frozen=True):
    """Single card.

    Equality and hashing cover rank, suit and ``deck_index``, so two copies of
    the same face from different deck instances stay distinguishable.
    """

    rank: Rank
    suit: Suit
    deck_index: int = 0

    @property
    def rank_index(self) -> int:
        """Position of the rank in ``RANK_ORDER`` (A=0 .. K=12)."""
        return RANK_INDEX[self.rank]

    def value(self, values: dict[Rank, int] | None = None) -> int:
        """Point value of the card.

        Args:
            values: Rank->points table. Defaults to ``DEFAULT_CARD_VALUES``.
        """
        table = values if values is not None else DEFAULT_CARD_VALUES
        return table[self.rank]

    def sort_key(self) -> tuple[int, int, int]:
        """Suit-first ordering key (s-h-c-d, then A-K)."""
        return (SUIT_INDEX[self.suit], self.rank_index, self.deck_index)

    def __str__(self) -> str:
        return f"{self.rank.value}{self.suit.value}"

    def __repr__(self) -> str:
        return str(self)


def parse_card(text: str) -> Card:
    """Parse card notation such as ``"7s"`` or ``"10H"`` (case insensitive).

    Raises:
        ValueError: If the text is not valid card notation.
    """
    match = _CARD_PATTERN.match(text.strip().lower())
    if not match:
        raise ValueError(f"Invalid card notation: {text!r}")
    rank, suit = match.groups()
    return Card(rank=Rank(rank.upper()), suit=Suit(suit))


def parse_card_list(text: str) -> list[Card]:
    """Parse a dash separated card list such as ``"3s-3h-3d"``."""
    return [parse_card(part) for part in text.split("-")]


def sort_by_suit(cards: Iterable[Card]) -> list[Card]:
    """Sort suit first, then rank."""
    return sorted(cards, key=lambda c: c.sort_key())


def sort_by_rank(cards: Iterable[Card]) -> list[Card]:
    """Sort rank first, then suit."""
    return sorted(
        cards, key=lambda c: (c.rank_index, SUIT_INDEX[c.suit], c.deck_index)
    )


def format_cards(cards: Iterable[Card]) -> str:
    """Space separated card notation."""
    return " ".join(str(c) for c in cards)
