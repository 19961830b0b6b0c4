"""Batched hand classification.

This module provides:
- Vectorised classification of card index tensors (tensor_classifier.py)
- Full enumeration and random sampling of five-card hands
"""

from .tensor_classifier import (
    NUM_CATEGORIES,
    CATEGORY_FREQUENCIES,
    TOTAL_HANDS,
    STRAIGHT_BITMASKS,
    TensorHandClassifier,
    tally_categories,
    hands_to_tensor,
    enumerate_all_hands,
    sample_hands,
)

__all__ = [
    "NUM_CATEGORIES",
    "CATEGORY_FREQUENCIES",
    "TOTAL_HANDS",
    "STRAIGHT_BITMASKS",
    "TensorHandClassifier",
    "tally_categories",
    "hands_to_tensor",
    "enumerate_all_hands",
    "sample_hands",
]
