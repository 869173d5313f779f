"""Formatters for game log output."""

from typing import Iterable

from rogue_rummy.models.card import Card, sort_by_suit
from rogue_rummy.models.meld import Meld
from rogue_rummy.models.player import Player


def format_card(card: Card) -> str:
    """Format a single card to string.

    Args:
        card: Card to format.

    Returns:
        Card notation (e.g., "10s", "Ah").
    """
    return str(card)


def format_cards(cards: Iterable[Card]) -> str:
    """Format cards to a comma-separated string.

    Args:
        cards: Cards to format.

    Returns:
        Comma-separated card strings (e.g., "8s,8h,8d").
        Empty string if no cards.
    """
    return ",".join(format_card(c) for c in cards)


def format_meld(meld: Meld) -> dict[str, str]:
    """Format a meld with its owner and kind.

    Args:
        meld: Meld to format.

    Returns:
        Dict with owner, type and notation (layoff cards bracketed).
    """
    return {
        "owner": meld.owner,
        "type": meld.meld_type.value,
        "cards": str(meld),
    }


def format_hands(players: list[Player]) -> dict[str, str]:
    """Format all players' hands to dict.

    Args:
        players: Players whose hands to format.

    Returns:
        Dict mapping player name to formatted hand string.
    """
    return {p.name: format_cards(sort_by_suit(p.hand)) for p in players}
