"""Meld model: classification, layoff extension and notation."""

from enum import Enum
from typing import Iterable, Iterator

from .card import RANK_INDEX, SUIT_INDEX, Card, Rank, parse_card

MIN_MELD_SIZE = 3
MAX_SET_SIZE = 4


class MeldType(str, Enum):
    """Kind of meld on the table."""

    SET = "set"  # Same rank, distinct suits
    RUN = "run"  # Same suit, consecutive ranks
    PAIR = "pair"  # Two same-rank cards (gemini only)
    INVALID = "invalid"


def is_set(
    cards: list[Card],
    min_size: int = MIN_MELD_SIZE,
    max_size: int = MAX_SET_SIZE,
) -> bool:
    """Check for 3-4 cards of one rank with distinct suits."""
    if not min_size <= len(cards) <= max_size:
        return False
    rank = cards[0].rank
    if any(c.rank != rank for c in cards):
        return False
    return len({c.suit for c in cards}) == len(cards)


def is_run(cards: list[Card], min_size: int = MIN_MELD_SIZE) -> bool:
    """Check for a same-suit run of consecutive ranks (no wraparound)."""
    if len(cards) < min_size:
        return False
    suit = cards[0].suit
    if any(c.suit != suit for c in cards):
        return False
    indices = sorted(c.rank_index for c in cards)
    for i in range(1, len(indices)):
        if indices[i] != indices[i - 1] + 1:
            return False
    return True


def is_pair(cards: list[Card]) -> bool:
    """Check for exactly two cards of the same rank."""
    return len(cards) == 2 and cards[0].rank == cards[1].rank


def classify(
    cards: Iterable[Card],
    allow_pairs: bool = False,
    min_size: int = MIN_MELD_SIZE,
    max_set_size: int = MAX_SET_SIZE,
) -> MeldType:
    """Classify a group of cards.

    Args:
        cards: Candidate cards.
        allow_pairs: Whether the owner may meld pairs.
        min_size: Minimum set/run size.
        max_set_size: Maximum set size at creation.

    Returns:
        MeldType, INVALID when the cards form nothing meldable.
    """
    cards = list(cards)
    if not cards:
        return MeldType.INVALID
    if is_set(cards, min_size, max_set_size):
        return MeldType.SET
    if is_run(cards, min_size):
        return MeldType.RUN
    if allow_pairs and is_pair(cards):
        return MeldType.PAIR
    return MeldType.INVALID


class Meld:
    """A committed group of cards on the table.

    The kind is fixed when the meld is created; layoffs only grow it.
    """

    def __init__(
        self,
        cards: Iterable[Card],
        owner: str,
        meld_type: MeldType | None = None,
        layoff_cards: Iterable[Card] = (),
    ):
        """Initialize meld.

        Args:
            cards: Member cards in creation order.
            owner: Name of the player who melded it.
            meld_type: Kind of meld. Classified from the cards if omitted
                (pairs need an explicit ``MeldType.PAIR``).
            layoff_cards: Members that arrived via layoff.
        """
        self.cards: list[Card] = list(cards)
        self.owner = owner
        self.meld_type = meld_type if meld_type is not None else classify(self.cards)
        self.layoff_cards: set[Card] = set(layoff_cards)
        self._sort_cards()

    @property
    def rank(self) -> Rank:
        """Shared rank of a set or pair."""
        return self.cards[0].rank

    def can_layoff(self, card: Card) -> bool:
        """Check whether ``card`` can extend this meld.

        Sets and pairs take any card of their rank, without a size cap. Runs
        take a same-suit card adjacent to either end.
        """
        if card in self.cards:
            return False
        if self.meld_type in (MeldType.SET, MeldType.PAIR):
            return card.rank == self.rank
        if self.meld_type == MeldType.RUN:
            if card.suit != self.cards[0].suit:
                return False
            indices = [c.rank_index for c in self.cards]
            return card.rank_index in (min(indices) - 1, max(indices) + 1)
        return False

    def add_card(self, card: Card, is_layoff: bool = True) -> None:
        """Append a card, tag it as a layoff and restore display order."""
        self.cards.append(card)
        if is_layoff:
            self.layoff_cards.add(card)
        self._sort_cards()

    def is_layoff_card(self, card: Card) -> bool:
        """Check whether ``card`` was added via layoff."""
        return card in self.layoff_cards

    def value(self, values: dict[Rank, int] | None = None) -> int:
        """Sum of member card values."""
        return sum(c.value(values) for c in self.cards)

    def _sort_cards(self) -> None:
        if self.meld_type == MeldType.RUN:
            self.cards.sort(key=lambda c: RANK_INDEX[c.rank])
        elif self.meld_type in (MeldType.SET, MeldType.PAIR):
            self.cards.sort(key=lambda c: SUIT_INDEX[c.suit])

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __str__(self) -> str:
        return "-".join(
            f"[{c}]" if c in self.layoff_cards else str(c) for c in self.cards
        )

    def __repr__(self) -> str:
        return f"Meld({self.meld_type.value}, {self}, owner={self.owner!r})"


def parse_meld(text: str, owner: str, meld_type: MeldType | None = None) -> Meld:
    """Rebuild a meld from its notation, e.g. ``"3h-[4h]-5h"``.

    Bracketed cards become layoff cards. Unless given, the kind is classified
    from the melded (non-layoff) cards, so a pair that took a layoff stays a
    pair. Cores that do not form a meld on their own fall back to all cards.

    Raises:
        ValueError: If any card is not valid notation.
    """
    cards: list[Card] = []
    layoffs: list[Card] = []
    for part in text.split("-"):
        part = part.strip()
        if part.startswith("[") and part.endswith("]"):
            card = parse_card(part[1:-1])
            layoffs.append(card)
        else:
            card = parse_card(part)
        cards.append(card)

    if meld_type is None:
        core = [c for c in cards if c not in layoffs]
        meld_type = classify(core, allow_pairs=True)
        if meld_type == MeldType.INVALID:
            meld_type = classify(cards, allow_pairs=True)

    return Meld(cards, owner, meld_type=meld_type, layoff_cards=layoffs)
