"""Five-card hand classification for Jacks or Better."""

from collections import Counter
from dataclasses import dataclass
from enum import Enum

from treys import Evaluator

from jacks.errors import InvalidInputError
from .cards import Card, hand_to_treys


class HandCategory(str, Enum):
    """
    The 11 mutually exclusive hand categories.

    Values are the display names, which double as paytable keys.
    """
    HIGH_CARD = "High Card"
    LOW_PAIR = "Low Pair"
    JACKS_OR_BETTER = "Jacks or Better"
    TWO_PAIR = "Two Pair"
    THREE_OF_A_KIND = "Three of a Kind"
    STRAIGHT = "Straight"
    FLUSH = "Flush"
    FULL_HOUSE = "Full House"
    FOUR_OF_A_KIND = "Four of a Kind"
    STRAIGHT_FLUSH = "Straight Flush"
    ROYAL_FLUSH = "Royal Flush"

    @property
    def strength(self) -> int:
        """Strength rank 0 (High Card) to 10 (Royal Flush)."""
        return HAND_CATEGORIES.index(self)

    def __str__(self) -> str:
        return self.value


# Weakest to strongest
HAND_CATEGORIES = tuple(HandCategory)

PAYING_CATEGORIES = HAND_CATEGORIES[2:]

ROYAL_VALUES = frozenset({1, 10, 11, 12, 13})
WHEEL_VALUES = frozenset({1, 2, 3, 4, 5})

RANK_NAMES = {1: "Aces", 11: "Jacks", 12: "Queens", 13: "Kings"}


@dataclass(frozen=True)
class HandResult:
    """Classification of a 5-card hand."""
    category: HandCategory
    description: str
    rank: int  # 0-10, matches category.strength

    @classmethod
    def of(cls, category: HandCategory, description: str = "") -> "HandResult":
        return cls(category, description or category.value, category.strength)


def is_straight(values: list[int]) -> bool:
    """Five distinct values in sequence, including the wheel and broadway."""
    unique = set(values)
    if len(unique) != 5:
        return False
    return (
        max(unique) - min(unique) == 4
        or unique == WHEEL_VALUES
        or unique == ROYAL_VALUES
    )


def is_royal_straight(values: list[int]) -> bool:
    """10-J-Q-K-A."""
    return set(values) == ROYAL_VALUES


class HandEvaluator:
    """
    Poker hand evaluation engine.

    Pure classification: the result depends only on the cards. Kickers
    are never compared since video poker payouts only depend on the
    category.
    """

    def evaluate(self, hand: list[Card]) -> HandResult:
        """
        Classify a 5-card hand.

        Args:
            hand: Exactly 5 cards

        Returns:
            HandResult with category, description and strength rank
        """
        if hand is None or len(hand) != 5:
            raise InvalidInputError("Hand must contain exactly 5 cards")

        values = [card.value for card in hand]
        rank_counts = Counter(values)
        suit_counts = Counter(card.suit for card in hand)

        counts = sorted(rank_counts.values(), reverse=True)
        flush = max(suit_counts.values()) >= 5
        straight = is_straight(values)
        royal = is_royal_straight(values)

        if royal and flush:
            return HandResult.of(HandCategory.ROYAL_FLUSH)

        if straight and flush:
            return HandResult.of(HandCategory.STRAIGHT_FLUSH)

        if counts[0] == 4:
            return HandResult.of(HandCategory.FOUR_OF_A_KIND)

        if counts[0] == 3 and counts[1] == 2:
            return HandResult.of(HandCategory.FULL_HOUSE)

        if flush:
            return HandResult.of(HandCategory.FLUSH)

        if straight:
            return HandResult.of(HandCategory.STRAIGHT)

        if counts[0] == 3:
            return HandResult.of(HandCategory.THREE_OF_A_KIND)

        if counts[0] == 2 and counts[1] == 2:
            return HandResult.of(HandCategory.TWO_PAIR)

        if counts[0] == 2:
            pair_value = next(v for v, c in rank_counts.items() if c == 2)
            if pair_value == 1 or pair_value >= 11:
                return HandResult.of(
                    HandCategory.JACKS_OR_BETTER,
                    f"Pair of {RANK_NAMES[pair_value]}",
                )
            return HandResult.of(HandCategory.LOW_PAIR)

        return HandResult.of(HandCategory.HIGH_CARD)

    def compare_hands(self, hand1: list[Card], hand2: list[Card]) -> int:
        """Return 1, 0 or -1 by category strength only."""
        r1 = self.evaluate(hand1).rank
        r2 = self.evaluate(hand2).rank
        return (r1 > r2) - (r1 < r2)

    @staticmethod
    def get_hand_categories() -> list[HandCategory]:
        """All categories, weakest first."""
        return list(HAND_CATEGORIES)

    @staticmethod
    def get_paying_categories() -> list[HandCategory]:
        """Categories with an entry in a Jacks or Better paytable."""
        return list(PAYING_CATEGORIES)


def treys_score(hand: list[Card]) -> int:
    """
    Absolute 5-card strength from treys.

    Lower is better (1 is a royal flush, 7462 is 7-5-4-3-2 offsuit).
    Finer grained than HandResult.rank; used for display only.
    """
    if len(hand) != 5:
        raise InvalidInputError("Hand must contain exactly 5 cards")

    cards = hand_to_treys(hand)
    return Evaluator().evaluate(cards[:2], cards[2:])
