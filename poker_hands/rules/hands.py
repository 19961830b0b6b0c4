"""Five-card hand parsing and category classification.

Categories, lowest to highest:
- High card: nothing better
- One pair: two cards of one rank
- Two pairs: two different pairs
- Three of a kind: three cards of one rank
- Straight: five consecutive ranks (A-2-3-4-5 counts, Ace low)
- Flush: five cards of one suit
- Full house: three of a kind plus a pair
- Four of a kind: four cards of one rank
- Straight flush: a straight that is also a flush

Classification rules:
- Several predicates can hold at once (a straight flush is also a straight
  and a flush), so categories are tried from highest to lowest and the first
  match wins.
- Only the category is computed; hands of one category are not ranked
  against each other.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, List, Sequence, Tuple, Union

from .ranks import (
    Card,
    Rank,
    Suit,
    NUM_RANKS,
    get_rank_counts,
    get_suit_counts,
    sort_cards,
)

HAND_SIZE = 5

# Ranks of the wheel, A-2-3-4-5
WHEEL_RANKS = frozenset([Rank.ACE, Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE])


class RankCategory(IntEnum):
    """Hand categories; the value gives their total order."""

    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIRS = 2
    THREE_OF_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_KIND = 7
    STRAIGHT_FLUSH = 8


class InvalidHandError(ValueError):
    """Raised when cards do not form a legal five-card hand."""

    pass


@dataclass(frozen=True)
class Hand:
    """An ordered five-card hand, as dealt.

    Attributes:
        cards: The cards in input order
    """

    cards: Tuple[Card, ...]

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __getitem__(self, index: int) -> Card:
        return self.cards[index]

    def __str__(self) -> str:
        return " ".join(str(c) for c in self.cards)

    def to_tokens(self) -> List[str]:
        """Serialise back to card tokens, input order preserved."""
        return [str(c) for c in self.cards]


HandLike = Union[Hand, Sequence[Card]]


def parse_hand(tokens: Sequence[str]) -> Hand:
    """Parse five card tokens into a Hand.

    Args:
        tokens: Card tokens such as "10♥" or "A♠"

    Returns:
        Hand with cards in the same order as the tokens

    Raises:
        MalformedCardError: If a token has an unknown rank or suit
        InvalidHandError: If there are not exactly five tokens
    """
    if isinstance(tokens, str):
        raise InvalidHandError("Expected a sequence of card tokens, got a single string")

    cards = tuple(Card.from_string(token) for token in tokens)
    if len(cards) != HAND_SIZE:
        raise InvalidHandError(f"A hand has {HAND_SIZE} cards, got {len(cards)}")
    return Hand(cards=cards)


def validate_hand(hand: HandLike) -> List[Card]:
    """Check that cards form a legal five-card hand.

    Returns:
        The cards as a list

    Raises:
        InvalidHandError: On a wrong card count or a repeated card
    """
    cards = list(hand)
    if len(cards) != HAND_SIZE:
        raise InvalidHandError(f"A hand has {HAND_SIZE} cards, got {len(cards)}")
    if not all(isinstance(c, Card) for c in cards):
        raise InvalidHandError(f"Hand contains a non-card value: {cards!r}")
    for card in cards:
        if not isinstance(card.rank, Rank) or not isinstance(card.suit, Suit):
            raise InvalidHandError(
                f"Card has an unknown rank or suit: rank={card.rank!r}, suit={card.suit!r}"
            )
    if len(set(cards)) != HAND_SIZE:
        dupes = sorted({str(c) for c in cards if cards.count(c) > 1})
        raise InvalidHandError(f"Hand repeats cards: {', '.join(dupes)}")
    return cards


def is_flush(suit_counts: Sequence[int]) -> bool:
    """True if all five cards share a suit."""
    return any(count == HAND_SIZE for count in suit_counts)


def is_wheel(rank_counts: Sequence[int]) -> bool:
    """True if the ranks are exactly A-2-3-4-5.

    This is the only place the Ace plays low; Rank ordering is untouched.
    """
    return all(rank_counts[rank] == (1 if rank in WHEEL_RANKS else 0) for rank in Rank)


def is_straight(rank_counts: Sequence[int]) -> bool:
    """True if the ranks are five consecutive values, or the wheel."""
    present = [rank for rank in range(NUM_RANKS) if rank_counts[rank] > 0]
    if len(present) != HAND_SIZE:
        return False
    if present[-1] - present[0] == HAND_SIZE - 1:
        return True
    return is_wheel(rank_counts)


def classify(hand: HandLike) -> RankCategory:
    """Return the category of a five-card hand.

    Args:
        hand: A Hand or any sequence of five distinct Cards, in any order

    Returns:
        The highest category the hand satisfies

    Raises:
        InvalidHandError: If the hand is not five distinct cards
    """
    cards = sort_cards(validate_hand(hand))

    rank_counts = get_rank_counts(cards)
    suit_counts = get_suit_counts(cards)

    flush = is_flush(suit_counts)
    straight = is_straight(rank_counts)

    fours = rank_counts.count(4)
    threes = rank_counts.count(3)
    pairs = rank_counts.count(2)

    # First match wins
    if straight and flush:
        return RankCategory.STRAIGHT_FLUSH
    if fours == 1:
        return RankCategory.FOUR_OF_KIND
    if threes == 1 and pairs == 1:
        return RankCategory.FULL_HOUSE
    if flush:
        return RankCategory.FLUSH
    if straight:
        return RankCategory.STRAIGHT
    if threes == 1:
        return RankCategory.THREE_OF_KIND
    if pairs == 2:
        return RankCategory.TWO_PAIRS
    if pairs == 1:
        return RankCategory.ONE_PAIR
    return RankCategory.HIGH_CARD


def classify_tokens(tokens: Sequence[str]) -> RankCategory:
    """Parse and classify card tokens in one step."""
    return classify(parse_hand(tokens))


def describe_categories() -> dict:
    """Get a description of each hand category.

    Returns:
        Dict mapping RankCategory to description string
    """
    return {
        RankCategory.HIGH_CARD: "No other category applies",
        RankCategory.ONE_PAIR: "Two cards of the same rank",
        RankCategory.TWO_PAIRS: "Two pairs of different ranks",
        RankCategory.THREE_OF_KIND: "Three cards of the same rank",
        RankCategory.STRAIGHT: "Five consecutive ranks, Ace high or low",
        RankCategory.FLUSH: "Five cards of the same suit",
        RankCategory.FULL_HOUSE: "Three of a kind plus a pair",
        RankCategory.FOUR_OF_KIND: "Four cards of the same rank",
        RankCategory.STRAIGHT_FLUSH: "A straight with all cards in one suit",
    }


# Helper functions for creating hands for testing


def make_cards_from_string(s: str) -> List[Card]:
    """Parse cards from a string like "4♥ 5♥ 6♥ 7♥ 8♥".

    Args:
        s: Space-separated card tokens

    Returns:
        List of Card objects
    """
    return [Card.from_string(cs) for cs in s.split()]
