"""Card rank and suit definitions and utilities.

Rank order (high to low): A > K > Q > J > 10 > 9 > 8 > 7 > 6 > 5 > 4 > 3 > 2

This module provides:
- Rank and suit enumerations
- Card representation and token parsing
- Card index encoding (0-51) for array work
- Fixed-size rank/suit counting helpers
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List


class Rank(IntEnum):
    """Card ranks ordered by strength (higher value = stronger rank).

    The value doubles as the canonical rank index used by the classifiers.
    """

    TWO = 0  # Lowest rank
    THREE = 1
    FOUR = 2
    FIVE = 3
    SIX = 4
    SEVEN = 5
    EIGHT = 6
    NINE = 7
    TEN = 8
    JACK = 9
    QUEEN = 10
    KING = 11
    ACE = 12


class Suit(IntEnum):
    """Card suits. Suits are unranked; the value is only an array index."""

    SPADE = 0
    HEART = 1
    DIAMOND = 2
    CLUB = 3


NUM_RANKS = len(Rank)
NUM_SUITS = len(Suit)
NUM_CARDS = NUM_RANKS * NUM_SUITS

# Rank symbols for display
RANK_SYMBOLS = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

# Suit symbols for display
SUIT_SYMBOLS = {
    Suit.SPADE: "♠",
    Suit.HEART: "♥",
    Suit.DIAMOND: "♦",
    Suit.CLUB: "♣",
}

# Symbol to rank/suit mapping (for parsing)
SYMBOL_TO_RANK = {v: k for k, v in RANK_SYMBOLS.items()}
SYMBOL_TO_SUIT = {v: k for k, v in SUIT_SYMBOLS.items()}
SYMBOL_TO_SUIT.update({"S": Suit.SPADE, "H": Suit.HEART, "D": Suit.DIAMOND, "C": Suit.CLUB})
SYMBOL_TO_SUIT.update({"s": Suit.SPADE, "h": Suit.HEART, "d": Suit.DIAMOND, "c": Suit.CLUB})


class MalformedCardError(ValueError):
    """Raised when a card token has no known rank or suit."""

    pass


@dataclass(frozen=True)
class Card:
    """A playing card with rank and suit.

    Immutable and hashable for use in sets. Cards carry no ordering of their
    own; sort by rank with ``sort_cards``.
    """

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{RANK_SYMBOLS[self.rank]}{SUIT_SYMBOLS[self.suit]}"

    def __repr__(self) -> str:
        return f"Card({RANK_SYMBOLS[self.rank]}{SUIT_SYMBOLS[self.suit]})"

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse a card from a token like '3♥' or '10♠'.

        Args:
            s: Card token in format "RANK+SUIT"

        Returns:
            Card object

        Raises:
            MalformedCardError: If the token cannot be parsed
        """
        if not isinstance(s, str) or len(s) < 2:
            raise MalformedCardError(f"Invalid card token: {s!r}")

        suit_char = s[-1]
        rank_str = s[:-1]

        if suit_char not in SYMBOL_TO_SUIT:
            raise MalformedCardError(f"Invalid suit {suit_char!r} in card token {s!r}")
        if rank_str not in SYMBOL_TO_RANK:
            raise MalformedCardError(f"Invalid rank {rank_str!r} in card token {s!r}")

        return cls(rank=SYMBOL_TO_RANK[rank_str], suit=SYMBOL_TO_SUIT[suit_char])


# Card encoding: 0-51 for standard deck (4 suits × 13 ranks)
# card_idx = suit * 13 + rank
def card_to_idx(card: Card) -> int:
    """Convert Card to index 0-51."""
    return int(card.suit) * NUM_RANKS + int(card.rank)


def idx_to_card(idx: int) -> Card:
    """Convert index 0-51 to Card."""
    if not 0 <= idx < NUM_CARDS:
        raise MalformedCardError(f"Card index out of range: {idx}")
    return Card(rank=Rank(idx % NUM_RANKS), suit=Suit(idx // NUM_RANKS))


def get_rank_counts(cards: Iterable[Card]) -> List[int]:
    """Count occurrences of each rank in a list of cards.

    Returns:
        List of 13 counts indexed by Rank value
    """
    counts = [0] * NUM_RANKS
    for card in cards:
        counts[card.rank] += 1
    return counts


def get_suit_counts(cards: Iterable[Card]) -> List[int]:
    """Count occurrences of each suit in a list of cards.

    Returns:
        List of 4 counts indexed by Suit value
    """
    counts = [0] * NUM_SUITS
    for card in cards:
        counts[card.suit] += 1
    return counts


def create_standard_deck() -> List[Card]:
    """Create a standard 52-card deck.

    Returns:
        List of 52 Card objects in card index order
    """
    return [idx_to_card(idx) for idx in range(NUM_CARDS)]


def sort_cards(cards: Iterable[Card]) -> List[Card]:
    """Sort cards by rank (ascending). Equal ranks keep their input order."""
    return sorted(cards, key=lambda card: card.rank)
