"""Meld search over a hand."""

from dataclasses import dataclass
from typing import Iterable

from rogue_rummy.models.card import RANK_ORDER, SUIT_ORDER, Card
from rogue_rummy.models.meld import MAX_SET_SIZE, MIN_MELD_SIZE, Meld, MeldType, classify


@dataclass(frozen=True)
class LayoffTarget:
    """A table meld that can take a given card."""

    meld_index: int  # Index into the engine's get_all_melds()
    owner: str


def find_all_runs(hand: Iterable[Card], min_size: int = MIN_MELD_SIZE) -> list[Meld]:
    """Find maximal same-suit runs.

    Each suit's cards are sorted by rank and split wherever the sequence
    breaks. A run of 5 is reported once, not as overlapping windows.

    Args:
        hand: Cards to search (not modified)
        min_size: Minimum run length

    Returns:
        Unowned run melds
    """
    hand = list(hand)
    runs: list[Meld] = []

    for suit in SUIT_ORDER:
        in_suit = sorted(
            (c for c in hand if c.suit == suit), key=lambda c: c.rank_index
        )
        if len(in_suit) < min_size:
            continue

        current = [in_suit[0]]
        for card in in_suit[1:]:
            if card.rank_index == current[-1].rank_index + 1:
                current.append(card)
                continue
            _collect_run(current, runs, min_size)
            current = [card]
        _collect_run(current, runs, min_size)

    return runs


def _collect_run(cards: list[Card], runs: list[Meld], min_size: int) -> None:
    if len(cards) < min_size:
        return
    if classify(cards, min_size=min_size) == MeldType.RUN:
        runs.append(Meld(cards, owner="", meld_type=MeldType.RUN))


def find_all_sets(
    hand: Iterable[Card],
    min_size: int = MIN_MELD_SIZE,
    max_size: int = MAX_SET_SIZE,
) -> list[Meld]:
    """Find sets, one per rank. Groups of 3 or 4 are never split."""
    hand = list(hand)
    sets: list[Meld] = []

    for rank in RANK_ORDER:
        of_rank = [c for c in hand if c.rank == rank]
        if not min_size <= len(of_rank) <= max_size:
            continue
        if classify(of_rank, min_size=min_size, max_set_size=max_size) == MeldType.SET:
            sets.append(Meld(of_rank, owner="", meld_type=MeldType.SET))

    return sets


def find_all_potential_melds(
    hand: Iterable[Card],
    min_size: int = MIN_MELD_SIZE,
    max_set_size: int = MAX_SET_SIZE,
) -> list[Meld]:
    """Runs followed by sets found in ``hand``. The same card may appear in both.

    Args:
        hand: Cards to search (not modified)
        min_size: Minimum meld length
        max_set_size: Largest set to report

    Returns:
        Unowned run and set melds
    """
    hand = list(hand)
    return find_all_runs(hand, min_size) + find_all_sets(hand, min_size, max_set_size)



def find_valid_layoffs(card: Card, melds: list[Meld]) -> list[LayoffTarget]:
    """List every meld ``card`` can be laid off onto."""
    return [
        LayoffTarget(meld_index=i, owner=meld.owner)
        for i, meld in enumerate(melds)
        if meld.can_layoff(card)
    ]
