#!/usr/bin/env python3
"""Tally poker hand categories.

This script classifies either every five-card hand or a random sample
and prints how often each category occurs:
- With --all, counts are checked against the known exact frequencies
- With --hands N, N hands are sampled uniformly (reproducible with --seed)
- With --classify, a single hand is classified and its category printed

Usage:
    python -m poker_hands.scripts.tally --all
    python -m poker_hands.scripts.tally --hands 100000 --seed 42
    python -m poker_hands.scripts.tally --classify "A♠ K♠ Q♠ J♠ 10♠"
"""

import argparse
import sys
import time
from typing import List, Optional

import numpy as np
import torch

from poker_hands.batch import (
    CATEGORY_FREQUENCIES,
    TOTAL_HANDS,
    TensorHandClassifier,
    enumerate_all_hands,
    sample_hands,
)
from poker_hands.rules import RankCategory, classify_tokens, describe_categories
from poker_hands.utils.seeding import set_seed


def format_table(counts: np.ndarray, expected: Optional[dict] = None) -> str:
    """Format category counts as a text table, highest category first."""
    total = int(counts.sum())
    lines = [f"{'Category':<16}{'Count':>10}{'Frequency':>12}"]
    if expected is not None:
        lines[0] += f"{'Expected':>10}"

    for category in sorted(RankCategory, reverse=True):
        count = int(counts[category])
        freq = count / total if total else 0.0
        line = f"{category.name:<16}{count:>10}{freq:>12.6f}"
        if expected is not None:
            line += f"{expected[category]:>10}"
        lines.append(line)

    lines.append(f"{'TOTAL':<16}{total:>10}")
    return "\n".join(lines)


def tally(
    all_hands: bool = False,
    num_hands: int = 100000,
    seed: Optional[int] = None,
    device: str = "cpu",
    batch_size: int = 262144,
) -> np.ndarray:
    """Classify a hand population and count each category.

    Args:
        all_hands: Enumerate every hand instead of sampling
        num_hands: Sample size when not enumerating
        seed: Random seed for sampling
        device: Torch device name
        batch_size: Hands classified per tensor call

    Returns:
        Counts indexed by RankCategory value
    """
    torch_device = torch.device(device)
    classifier = TensorHandClassifier(torch_device)

    if all_hands:
        card_idx = enumerate_all_hands(torch_device)
    else:
        seed = set_seed(seed)
        generator = torch.Generator().manual_seed(seed)
        card_idx = sample_hands(num_hands, torch_device, generator)

    return classifier.count_categories(card_idx, batch_size=batch_size)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the tally script."""
    parser = argparse.ArgumentParser(
        description="Tally five-card poker hand categories",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m poker_hands.scripts.tally --all
  python -m poker_hands.scripts.tally --hands 100000 --seed 42 --device cuda
  python -m poker_hands.scripts.tally --classify "2♥ 4♦ 5♥ A♦ 3♠"
        """,
    )

    parser.add_argument(
        "--all", "-a", action="store_true", help="Classify all 2,598,960 hands"
    )

    parser.add_argument(
        "--hands",
        "-n",
        type=int,
        default=100000,
        help="Number of random hands to sample (default: 100000)",
    )

    parser.add_argument(
        "--seed", "-s", type=int, default=None, help="Random seed for reproducibility"
    )

    parser.add_argument(
        "--device",
        type=str,
        default="cpu",
        help="Torch device to classify on (default: cpu)",
    )

    parser.add_argument(
        "--batch-size",
        type=int,
        default=262144,
        help="Hands per classification batch (default: 262144)",
    )

    parser.add_argument(
        "--classify",
        "-c",
        type=str,
        default=None,
        help='Classify a single space-separated hand, e.g. "A♠ K♠ Q♠ J♠ 10♠"',
    )

    args = parser.parse_args(argv)

    if args.classify is not None:
        try:
            category = classify_tokens(args.classify.split())
        except ValueError as e:
            print(f"Error: {e}")
            return 1
        print(f"{category.name}: {describe_categories()[category]}")
        return 0

    if args.hands < 0:
        print(f"Error: --hands must be non-negative, got {args.hands}")
        return 1
    if args.batch_size <= 0:
        print(f"Error: --batch-size must be positive, got {args.batch_size}")
        return 1

    t0 = time.time()
    try:
        counts = tally(
            all_hands=args.all,
            num_hands=args.hands,
            seed=args.seed,
            device=args.device,
            batch_size=args.batch_size,
        )
    except KeyboardInterrupt:
        print("\nTally interrupted by user.")
        return 0
    except Exception as e:
        print(f"Error during tally: {e}")
        return 1
    t1 = time.time()

    print(format_table(counts, CATEGORY_FREQUENCIES if args.all else None))
    print(f"\nClassified {int(counts.sum())} hands in {(t1 - t0) * 1000:.1f}ms")

    if args.all:
        expected = np.array([CATEGORY_FREQUENCIES[c] for c in RankCategory], dtype=np.int64)
        if int(counts.sum()) != TOTAL_HANDS or not np.array_equal(counts, expected):
            print("Error: category counts do not match the known frequencies")
            return 1
        print("All category counts match the known frequencies.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
