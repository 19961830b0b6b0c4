"""Parity checks between the scalar classifier and the tensor classifier.

These tests verify that batched classification agrees hand-for-hand with
classify(), and that the full enumeration reproduces the known category
frequencies.
"""

from typing import List
import random

import numpy as np
import pytest
import torch

from poker_hands.batch import (
    CATEGORY_FREQUENCIES,
    NUM_CATEGORIES,
    STRAIGHT_BITMASKS,
    TOTAL_HANDS,
    TensorHandClassifier,
    enumerate_all_hands,
    hands_to_tensor,
    sample_hands,
    tally_categories,
)
from poker_hands.rules import (
    Card,
    InvalidHandError,
    RankCategory,
    card_to_idx,
    classify,
    create_standard_deck,
    idx_to_card,
    make_cards_from_string,
    parse_hand,
)


@pytest.fixture(scope="module")
def classifier() -> TensorHandClassifier:
    return TensorHandClassifier(torch.device("cpu"))


def _rows_to_cards(card_idx: torch.Tensor) -> List[List[Card]]:
    return [[idx_to_card(int(i)) for i in row] for row in card_idx.tolist()]


class TestTensorClassifier:
    def test_straight_bitmasks(self):
        assert len(STRAIGHT_BITMASKS) == 10
        assert STRAIGHT_BITMASKS[0] == 0b11111
        assert STRAIGHT_BITMASKS[8] == 0b11111 << 8
        assert STRAIGHT_BITMASKS[-1] == 0b1000000001111

    def test_example_hands(self, classifier):
        hands = [
            ["4♥", "5♥", "6♥", "7♥", "8♥"],
            ["A♠", "4♠", "3♠", "5♠", "2♠"],
            ["4♣", "4♦", "4♥", "4♠", "10♥"],
            ["4♣", "4♦", "5♦", "5♠", "5♥"],
            ["4♣", "5♣", "6♣", "7♣", "Q♣"],
            ["2♠", "3♥", "4♥", "5♥", "6♥"],
            ["2♥", "4♦", "5♥", "A♦", "3♠"],
            ["2♥", "2♠", "2♦", "7♥", "A♥"],
            ["2♥", "4♦", "4♥", "A♦", "A♠"],
            ["3♥", "4♥", "10♥", "3♦", "A♠"],
            ["A♥", "K♥", "Q♥", "2♦", "3♠"],
        ]
        card_idx = hands_to_tensor([parse_hand(h) for h in hands])
        result = classifier.classify_batched(card_idx).tolist()
        assert result == [
            RankCategory.STRAIGHT_FLUSH,
            RankCategory.STRAIGHT_FLUSH,
            RankCategory.FOUR_OF_KIND,
            RankCategory.FULL_HOUSE,
            RankCategory.FLUSH,
            RankCategory.STRAIGHT,
            RankCategory.STRAIGHT,
            RankCategory.THREE_OF_KIND,
            RankCategory.TWO_PAIRS,
            RankCategory.ONE_PAIR,
            RankCategory.HIGH_CARD,
        ]

    def test_sampled_parity(self, classifier):
        generator = torch.Generator().manual_seed(1234)
        card_idx = sample_hands(5000, generator=generator)
        batched = classifier.classify_batched(card_idx).tolist()
        scalar = [int(classify(cards)) for cards in _rows_to_cards(card_idx)]
        assert batched == scalar

    def test_column_order_does_not_matter(self, classifier):
        generator = torch.Generator().manual_seed(99)
        card_idx = sample_hands(1000, generator=generator)
        shuffled = card_idx[:, torch.randperm(5, generator=generator)]
        assert torch.equal(classifier.classify_batched(card_idx), classifier.classify_batched(shuffled))

    def test_rare_categories_parity(self, classifier):
        rng = random.Random(5)
        deck = create_standard_deck()
        hands = []
        # Bias towards paired and suited hands by drawing from small decks
        for _ in range(500):
            ranks = rng.sample(range(13), 3)
            small_deck = [c for c in deck if c.rank in ranks]
            hands.append(rng.sample(small_deck, 5))
            suit = rng.randrange(4)
            suited = [c for c in deck if c.suit == suit]
            hands.append(rng.sample(suited, 5))

        card_idx = hands_to_tensor(hands)
        batched = classifier.classify_batched(card_idx).tolist()
        assert batched == [int(classify(h)) for h in hands]

    def test_accepts_int32(self, classifier):
        cards = make_cards_from_string("10♠ J♠ Q♠ K♠ A♠")
        card_idx = torch.tensor([[card_to_idx(c) for c in cards]], dtype=torch.int32)
        assert classifier.classify_batched(card_idx).tolist() == [RankCategory.STRAIGHT_FLUSH]

    def test_empty_batch(self, classifier):
        result = classifier.classify_batched(torch.zeros((0, 5), dtype=torch.long))
        assert result.shape == (0,)


class TestTensorValidation:
    def test_wrong_shape(self, classifier):
        with pytest.raises(InvalidHandError):
            classifier.classify_batched(torch.arange(5))
        with pytest.raises(InvalidHandError):
            classifier.classify_batched(torch.arange(6).unsqueeze(0))

    def test_float_indices(self, classifier):
        with pytest.raises(InvalidHandError):
            classifier.classify_batched(torch.zeros((1, 5), dtype=torch.float32))

    def test_out_of_range(self, classifier):
        with pytest.raises(InvalidHandError):
            classifier.classify_batched(torch.tensor([[0, 1, 2, 3, 52]]))
        with pytest.raises(InvalidHandError):
            classifier.classify_batched(torch.tensor([[-1, 1, 2, 3, 4]]))

    def test_repeated_card(self, classifier):
        with pytest.raises(InvalidHandError, match="Hand 1"):
            classifier.classify_batched(torch.tensor([[0, 1, 2, 3, 4], [7, 8, 9, 7, 10]]))

    def test_hands_to_tensor_rejects_bad_hand(self):
        with pytest.raises(InvalidHandError):
            hands_to_tensor([make_cards_from_string("A♠ K♠ Q♠ J♠")])

    def test_hands_to_tensor_empty(self):
        assert hands_to_tensor([]).shape == (0, 5)


class TestEnumeration:
    def test_frequency_table(self):
        assert TOTAL_HANDS == 2598960
        assert set(CATEGORY_FREQUENCIES) == set(RankCategory)

    def test_sample_hands_are_legal(self):
        generator = torch.Generator().manual_seed(0)
        card_idx = sample_hands(2000, generator=generator)
        assert card_idx.shape == (2000, 5)
        assert card_idx.min().item() >= 0
        assert card_idx.max().item() < 52
        sorted_idx, _ = card_idx.sort(dim=1)
        assert not (sorted_idx[:, 1:] == sorted_idx[:, :-1]).any()

    def test_sample_hands_reproducible(self):
        a = sample_hands(100, generator=torch.Generator().manual_seed(3))
        b = sample_hands(100, generator=torch.Generator().manual_seed(3))
        assert torch.equal(a, b)

    def test_sample_hands_negative(self):
        with pytest.raises(ValueError):
            sample_hands(-1)

    def test_tally_categories(self):
        counts = tally_categories(torch.tensor([0, 0, 8, 3]))
        assert counts.shape == (NUM_CATEGORIES,)
        assert counts.tolist() == [2, 0, 0, 1, 0, 0, 0, 0, 1]

    def test_count_categories_rejects_bad_batch_size(self, classifier):
        with pytest.raises(ValueError):
            classifier.count_categories(torch.zeros((0, 5), dtype=torch.long), batch_size=0)

    def test_all_hands_match_known_frequencies(self, classifier):
        card_idx = enumerate_all_hands()
        assert card_idx.shape == (TOTAL_HANDS, 5)
        assert card_idx[0].tolist() == [0, 1, 2, 3, 4]
        assert card_idx[-1].tolist() == [47, 48, 49, 50, 51]
        assert bool((card_idx[:, 1:] > card_idx[:, :-1]).all())

        counts = classifier.count_categories(card_idx)
        expected = np.array([CATEGORY_FREQUENCIES[c] for c in RankCategory], dtype=np.int64)
        np.testing.assert_array_equal(counts, expected)
