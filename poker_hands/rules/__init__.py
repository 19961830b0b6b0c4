"""Poker rules implementations.

This module provides:
- Card, rank and suit definitions (ranks.py)
- Hand parsing and category classification (hands.py)
"""

from .ranks import (
    Rank,
    Suit,
    Card,
    MalformedCardError,
    RANK_SYMBOLS,
    SUIT_SYMBOLS,
    NUM_RANKS,
    NUM_SUITS,
    NUM_CARDS,
    card_to_idx,
    idx_to_card,
    get_rank_counts,
    get_suit_counts,
    create_standard_deck,
    sort_cards,
)

from .hands import (
    HAND_SIZE,
    RankCategory,
    Hand,
    InvalidHandError,
    parse_hand,
    validate_hand,
    is_flush,
    is_wheel,
    is_straight,
    classify,
    classify_tokens,
    describe_categories,
    make_cards_from_string,
)

__all__ = [
    # Ranks
    "Rank",
    "Suit",
    "Card",
    "MalformedCardError",
    "RANK_SYMBOLS",
    "SUIT_SYMBOLS",
    "NUM_RANKS",
    "NUM_SUITS",
    "NUM_CARDS",
    "card_to_idx",
    "idx_to_card",
    "get_rank_counts",
    "get_suit_counts",
    "create_standard_deck",
    "sort_cards",
    # Hands
    "HAND_SIZE",
    "RankCategory",
    "Hand",
    "InvalidHandError",
    "parse_hand",
    "validate_hand",
    "is_flush",
    "is_wheel",
    "is_straight",
    "classify",
    "classify_tokens",
    "describe_categories",
    "make_cards_from_string",
]
