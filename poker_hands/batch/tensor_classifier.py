"""Batched hand classification with PyTorch.

This module provides:
- Card index tensors for batches of hands ([B, 5], card_idx = suit * 13 + rank)
- Vectorised category classification on CPU or GPU
- Enumeration of all C(52, 5) hands and uniform random sampling

Key insight: Straight detection needs no sorting. Each hand's set of ranks is
packed into a 13-bit mask and looked up among the ten straight masks (nine
consecutive windows plus the wheel).
"""

from typing import Iterable, Optional

import numpy as np
import torch

from poker_hands.rules.hands import HAND_SIZE, HandLike, InvalidHandError, RankCategory, validate_hand
from poker_hands.rules.ranks import NUM_CARDS, NUM_RANKS, NUM_SUITS, Rank, card_to_idx


NUM_CATEGORIES = len(RankCategory)

# Number of hands in each category among all C(52, 5) = 2,598,960 hands
CATEGORY_FREQUENCIES = {
    RankCategory.STRAIGHT_FLUSH: 40,
    RankCategory.FOUR_OF_KIND: 624,
    RankCategory.FULL_HOUSE: 3744,
    RankCategory.FLUSH: 5108,
    RankCategory.STRAIGHT: 10200,
    RankCategory.THREE_OF_KIND: 54912,
    RankCategory.TWO_PAIRS: 123552,
    RankCategory.ONE_PAIR: 1098240,
    RankCategory.HIGH_CARD: 1302540,
}

TOTAL_HANDS = sum(CATEGORY_FREQUENCIES.values())


def _straight_bitmasks() -> list:
    """Rank bitmasks of every straight, wheel last."""
    window = (1 << HAND_SIZE) - 1
    masks = [window << low for low in range(NUM_RANKS - HAND_SIZE + 1)]
    wheel = 1 << Rank.ACE
    for rank in (Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE):
        wheel |= 1 << rank
    masks.append(wheel)
    return masks


STRAIGHT_BITMASKS = _straight_bitmasks()


class TensorHandClassifier:
    """Vectorised five-card classifier.

    Keeps lookup tensors on the target device to avoid CPU-GPU transfers.
    """

    def __init__(self, device: Optional[torch.device] = None):
        self.device = torch.device(device) if device is not None else torch.device("cpu")
        self._build_tensors()

    def _build_tensors(self):
        """Build pre-computed tensors for classification."""
        # Bit weight of each rank in the packed rank-presence mask
        self.rank_weights = torch.tensor(
            [1 << r for r in range(NUM_RANKS)], device=self.device, dtype=torch.long
        )
        self.straight_masks = torch.tensor(STRAIGHT_BITMASKS, device=self.device, dtype=torch.long)

    def validate(self, card_idx: torch.Tensor) -> torch.Tensor:
        """Check a [B, 5] card index batch and move it to the device.

        Raises:
            InvalidHandError: On a wrong shape, an index outside 0-51, or a
                repeated card within a hand
        """
        if card_idx.dim() != 2 or card_idx.shape[1] != HAND_SIZE:
            raise InvalidHandError(
                f"Expected a [B, {HAND_SIZE}] card index tensor, got shape {tuple(card_idx.shape)}"
            )
        if card_idx.dtype.is_floating_point or card_idx.dtype == torch.bool:
            raise InvalidHandError(f"Card indices must be integers, got {card_idx.dtype}")

        card_idx = card_idx.to(device=self.device, dtype=torch.long)
        if card_idx.numel() == 0:
            return card_idx

        if card_idx.min().item() < 0 or card_idx.max().item() >= NUM_CARDS:
            raise InvalidHandError(f"Card indices must lie in [0, {NUM_CARDS})")

        sorted_idx, _ = card_idx.sort(dim=1)
        repeated = (sorted_idx[:, 1:] == sorted_idx[:, :-1]).any(dim=1)
        if repeated.any():
            row = int(repeated.nonzero()[0].item())
            raise InvalidHandError(f"Hand {row} repeats a card: {card_idx[row].tolist()}")

        return card_idx

    def classify_batched(self, card_idx: torch.Tensor) -> torch.Tensor:
        """Classify a batch of hands.

        Args:
            card_idx: [B, 5] integer tensor of card indices

        Returns:
            [B] long tensor of RankCategory values
        """
        card_idx = self.validate(card_idx)
        batch_size = card_idx.shape[0]

        ranks = card_idx % NUM_RANKS
        suits = card_idx // NUM_RANKS

        rank_counts = torch.zeros((batch_size, NUM_RANKS), dtype=torch.long, device=self.device)
        rank_counts.scatter_add_(1, ranks, torch.ones_like(ranks))
        suit_counts = torch.zeros((batch_size, NUM_SUITS), dtype=torch.long, device=self.device)
        suit_counts.scatter_add_(1, suits, torch.ones_like(suits))

        flush = (suit_counts == HAND_SIZE).any(dim=1)

        rank_bits = ((rank_counts > 0).long() * self.rank_weights).sum(dim=1)
        straight = torch.isin(rank_bits, self.straight_masks)

        fours = (rank_counts == 4).sum(dim=1)
        threes = (rank_counts == 3).sum(dim=1)
        pairs = (rank_counts == 2).sum(dim=1)

        # Lowest precedence first so that higher categories overwrite
        rules = [
            (pairs == 1, RankCategory.ONE_PAIR),
            (pairs == 2, RankCategory.TWO_PAIRS),
            (threes == 1, RankCategory.THREE_OF_KIND),
            (straight, RankCategory.STRAIGHT),
            (flush, RankCategory.FLUSH),
            ((threes == 1) & (pairs == 1), RankCategory.FULL_HOUSE),
            (fours == 1, RankCategory.FOUR_OF_KIND),
            (straight & flush, RankCategory.STRAIGHT_FLUSH),
        ]

        categories = torch.full(
            (batch_size,), int(RankCategory.HIGH_CARD), dtype=torch.long, device=self.device
        )
        for condition, category in rules:
            categories = torch.where(condition, torch.full_like(categories, int(category)), categories)

        return categories

    def count_categories(self, card_idx: torch.Tensor, batch_size: int = 262144) -> np.ndarray:
        """Classify hands in chunks and count each category.

        Returns:
            [9] int64 array of counts indexed by RankCategory value
        """
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")

        counts = np.zeros(NUM_CATEGORIES, dtype=np.int64)
        for start in range(0, card_idx.shape[0], batch_size):
            categories = self.classify_batched(card_idx[start : start + batch_size])
            counts += tally_categories(categories)
        return counts


def tally_categories(categories: torch.Tensor) -> np.ndarray:
    """Count each RankCategory value in a tensor of categories."""
    return np.bincount(categories.cpu().numpy(), minlength=NUM_CATEGORIES).astype(np.int64)


def hands_to_tensor(hands: Iterable[HandLike], device: Optional[torch.device] = None) -> torch.Tensor:
    """Convert Hands (or card lists) to a [B, 5] card index tensor.

    Raises:
        InvalidHandError: If any hand is not five distinct cards
    """
    rows = [[card_to_idx(card) for card in validate_hand(hand)] for hand in hands]
    return torch.tensor(rows, dtype=torch.long, device=device).reshape(-1, HAND_SIZE)


def enumerate_all_hands(device: Optional[torch.device] = None) -> torch.Tensor:
    """Build every five-card hand as a [2598960, 5] tensor.

    Rows are in lexicographic order of ascending card indices.
    """
    combos = torch.arange(NUM_CARDS, device=device, dtype=torch.long).unsqueeze(1)
    for _ in range(HAND_SIZE - 1):
        # Extend each partial hand with every higher card index
        counts = NUM_CARDS - 1 - combos[:, -1]
        combos = combos.repeat_interleave(counts, dim=0)
        starts = torch.cumsum(counts, dim=0) - counts
        offsets = torch.arange(combos.shape[0], device=device) - starts.repeat_interleave(counts)
        next_card = combos[:, -1] + 1 + offsets
        combos = torch.cat([combos, next_card.unsqueeze(1)], dim=1)
    return combos


def sample_hands(
    n: int,
    device: Optional[torch.device] = None,
    generator: Optional[torch.Generator] = None,
) -> torch.Tensor:
    """Draw n hands uniformly at random as a [n, 5] tensor.

    Each hand is dealt from its own shuffled deck. The generator, if given,
    must be a CPU generator.
    """
    if n < 0:
        raise ValueError(f"Number of hands must be non-negative, got {n}")
    keys = torch.rand((n, NUM_CARDS), generator=generator)
    hands = keys.argsort(dim=1)[:, :HAND_SIZE]
    if device is not None:
        hands = hands.to(device)
    return hands
