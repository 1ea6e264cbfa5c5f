"""Tests for hand evaluation."""

import pytest

from jacks.errors import InvalidInputError
from jacks.game.evaluator import (
    HAND_CATEGORIES, PAYING_CATEGORIES, HandCategory, HandEvaluator, treys_score
)


class TestCategories:
    @pytest.mark.parametrize("cards,category", [
        ("A♥ K♥ Q♥ J♥ 10♥", HandCategory.ROYAL_FLUSH),
        ("9♠ K♠ 10♠ Q♠ J♠", HandCategory.STRAIGHT_FLUSH),
        ("A♣ 2♣ 3♣ 4♣ 5♣", HandCategory.STRAIGHT_FLUSH),
        ("7♠ 7♥ 7♦ 7♣ 2♠", HandCategory.FOUR_OF_A_KIND),
        ("K♠ K♥ K♦ 4♣ 4♠", HandCategory.FULL_HOUSE),
        ("2♦ 9♦ J♦ 4♦ 6♦", HandCategory.FLUSH),
        ("5♠ 6♥ 7♦ 8♣ 9♠", HandCategory.STRAIGHT),
        ("A♠ 2♥ 3♦ 4♣ 5♠", HandCategory.STRAIGHT),
        ("10♠ J♥ Q♦ K♣ A♠", HandCategory.STRAIGHT),
        ("8♠ 8♥ 8♦ K♣ 2♠", HandCategory.THREE_OF_A_KIND),
        ("3♠ 3♥ 9♦ 9♣ K♠", HandCategory.TWO_PAIR),
        ("J♥ J♠ 3♦ 7♣ 9♠", HandCategory.JACKS_OR_BETTER),
        ("A♥ A♠ 3♦ 7♣ 9♠", HandCategory.JACKS_OR_BETTER),
        ("10♥ 10♠ 3♦ 7♣ 9♠", HandCategory.LOW_PAIR),
        ("2♥ 2♠ 3♦ 7♣ 9♠", HandCategory.LOW_PAIR),
        ("2♥ 4♠ 6♦ 8♣ 9♠", HandCategory.HIGH_CARD),
        ("Q♠ K♥ A♦ 2♣ 3♠", HandCategory.HIGH_CARD),
    ])
    def test_category(self, evaluator, hand, cards, category):
        result = evaluator.evaluate(hand(cards))
        assert result.category is category
        assert result.rank == category.strength

    def test_pair_description(self, evaluator, hand):
        assert evaluator.evaluate(hand("J♥ J♠ 3♦ 7♣ 9♠")).description == "Pair of Jacks"
        assert evaluator.evaluate(hand("A♥ A♠ 3♦ 7♣ 9♠")).description == "Pair of Aces"
        assert evaluator.evaluate(hand("Q♥ Q♠ 3♦ 7♣ 9♠")).description == "Pair of Queens"
        assert evaluator.evaluate(hand("K♥ K♠ 3♦ 7♣ 9♠")).description == "Pair of Kings"

    def test_description_defaults_to_name(self, evaluator, hand):
        assert evaluator.evaluate(hand("3♠ 3♥ 9♦ 9♣ K♠")).description == "Two Pair"

    def test_order_independent(self, evaluator, hand):
        a = evaluator.evaluate(hand("A♥ K♥ Q♥ J♥ 10♥"))
        b = evaluator.evaluate(hand("10♥ Q♥ A♥ J♥ K♥"))
        assert a == b

    def test_ace_high_flush_not_straight(self, evaluator, hand):
        # Q-K-A-2-3 does not wrap around
        assert evaluator.evaluate(hand("Q♠ K♠ A♠ 2♠ 3♠")).category is HandCategory.FLUSH

    @pytest.mark.parametrize("size", [0, 4, 6])
    def test_wrong_size(self, evaluator, hand, size):
        cards = hand("2♥ 4♠ 6♦ 8♣ 9♠ J♥")[:size]
        with pytest.raises(InvalidInputError):
            evaluator.evaluate(cards)

    def test_none(self, evaluator):
        with pytest.raises(InvalidInputError):
            evaluator.evaluate(None)


class TestCompare:
    def test_compare(self, evaluator, hand):
        flush = hand("2♦ 9♦ J♦ 4♦ 6♦")
        straight = hand("5♠ 6♥ 7♦ 8♣ 9♠")
        assert evaluator.compare_hands(flush, straight) == 1
        assert evaluator.compare_hands(straight, flush) == -1

    def test_same_category_ties(self, evaluator, hand):
        # Kickers are ignored
        aces = hand("A♥ A♠ 3♦ 7♣ 9♠")
        jacks = hand("J♥ J♠ 3♦ 7♣ 9♠")
        assert evaluator.compare_hands(aces, jacks) == 0

    def test_category_lists(self):
        categories = HandEvaluator.get_hand_categories()
        assert len(categories) == 11
        assert categories[0] is HandCategory.HIGH_CARD
        assert categories[-1] is HandCategory.ROYAL_FLUSH
        assert [c.strength for c in categories] == list(range(11))

        paying = HandEvaluator.get_paying_categories()
        assert len(paying) == 9
        assert HandCategory.LOW_PAIR not in paying
        assert HandCategory.HIGH_CARD not in paying
        assert tuple(paying) == PAYING_CATEGORIES

    def test_category_names(self):
        assert str(HandCategory.JACKS_OR_BETTER) == "Jacks or Better"
        assert HandCategory("Two Pair") is HandCategory.TWO_PAIR
        assert [c.value for c in HAND_CATEGORIES][-1] == "Royal Flush"


class TestTreysAgreement:
    """Category ordering agrees with treys' absolute ranking."""

    HANDS = [
        "2♥ 4♠ 6♦ 8♣ 9♠",
        "2♥ 2♠ 3♦ 7♣ 9♠",
        "J♥ J♠ 3♦ 7♣ 9♠",
        "3♠ 3♥ 9♦ 9♣ K♠",
        "8♠ 8♥ 8♦ K♣ 2♠",
        "A♠ 2♥ 3♦ 4♣ 5♠",
        "2♦ 9♦ J♦ 4♦ 6♦",
        "K♠ K♥ K♦ 4♣ 4♠",
        "7♠ 7♥ 7♦ 7♣ 2♠",
        "9♠ K♠ 10♠ Q♠ J♠",
        "A♥ K♥ Q♥ J♥ 10♥",
    ]

    def test_strictly_ordered(self, evaluator, hand):
        hands = [hand(s) for s in self.HANDS]
        ranks = [evaluator.evaluate(h).rank for h in hands]
        scores = [treys_score(h) for h in hands]

        assert ranks == list(range(11))
        # treys: lower is stronger
        assert scores == sorted(scores, reverse=True)

    def test_royal_is_best(self, hand):
        assert treys_score(hand("A♥ K♥ Q♥ J♥ 10♥")) == 1

    def test_wrong_size(self, hand):
        with pytest.raises(InvalidInputError):
            treys_score(hand("A♥ K♥ Q♥ J♥"))
