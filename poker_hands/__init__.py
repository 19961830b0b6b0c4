"""Poker Hands - five-card poker hand classification.

Parses five card tokens and classifies the hand into one of nine
categories, one hand at a time or in batches with PyTorch.
"""

__version__ = "0.1.0"
__author__ = "Poker Hands Team"

from poker_hands.rules import (
    Card,
    Hand,
    InvalidHandError,
    MalformedCardError,
    RankCategory,
    classify,
    parse_hand,
)
from poker_hands.utils.seeding import set_seed

__all__ = [
    "__version__",
    "set_seed",
    "Card",
    "Hand",
    "InvalidHandError",
    "MalformedCardError",
    "RankCategory",
    "classify",
    "parse_hand",
]
