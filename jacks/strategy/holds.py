"""
Hold-decision strategies for Jacks or Better.

A strategy looks at the 5 dealt cards and returns the positions (0-4)
to keep before the draw. The heuristic optimal strategy applies a
fixed priority list of rules; the first rule that matches decides.

The straight flush and outside straight checks are simplified
approximations rather than a full draw analysis.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from jacks.errors import InvalidInputError
from jacks.game.cards import Card
from jacks.game.evaluator import ROYAL_VALUES, is_straight

ALL_POSITIONS = frozenset(range(5))

RANDOM_HOLD_PROBABILITY = 0.3


def _check_hand(hand: list[Card]) -> None:
    if hand is None or len(hand) != 5:
        raise InvalidInputError("Hand must contain exactly 5 cards")


def _positions_with_value(hand: list[Card], value: int) -> frozenset[int]:
    return frozenset(i for i, card in enumerate(hand) if card.value == value)


def _ace_positions(hand: list[Card]) -> frozenset[int]:
    return _positions_with_value(hand, 1)


@dataclass
class HandAnalysis:
    """Pattern summary of a dealt hand."""
    rank_counts: Counter
    suit_counts: Counter
    pairs: list[int] = field(default_factory=list)   # Values, ascending
    trips: list[int] = field(default_factory=list)
    quads: list[int] = field(default_factory=list)
    is_flush: bool = False
    is_straight: bool = False
    high_cards: list[int] = field(default_factory=list)  # Positions of A, J, Q, K
    flush_suit: Optional[str] = None  # Suit with 4+ cards

    @classmethod
    def from_hand(cls, hand: list[Card]) -> "HandAnalysis":
        values = [card.value for card in hand]
        rank_counts = Counter(values)
        suit_counts = Counter(card.suit for card in hand)

        def with_count(n: int) -> list[int]:
            return sorted(v for v, c in rank_counts.items() if c == n)

        return cls(
            rank_counts=rank_counts,
            suit_counts=suit_counts,
            pairs=with_count(2),
            trips=with_count(3),
            quads=with_count(4),
            is_flush=any(c >= 5 for c in suit_counts.values()),
            is_straight=is_straight(values),
            high_cards=[i for i, card in enumerate(hand) if card.is_high],
            flush_suit=next(
                (s for s, c in suit_counts.items() if c >= 4), None
            ),
        )


def _largest_suit_group(hand: list[Card], positions: list[int]) -> list[int]:
    """
    Positions of the biggest same-suit subset of ``positions``.

    Ties go to the suit seen first.
    """
    groups: dict[str, list[int]] = {}
    for i in positions:
        groups.setdefault(hand[i].suit, []).append(i)

    best: list[int] = []
    for group in groups.values():
        if len(group) > len(best):
            best = group
    return best


def royal_flush_draw(hand: list[Card]) -> list[int]:
    """Positions of the most same-suit royal cards (A, 10, J, Q, K)."""
    royal = [i for i, card in enumerate(hand) if card.value in ROYAL_VALUES]
    return _largest_suit_group(hand, royal)


def has_sequential_potential(values: list[int]) -> bool:
    """Any 3 consecutive sorted values spanning at most 4."""
    if len(values) < 3:
        return False
    return any(values[i + 2] - values[i] <= 4 for i in range(len(values) - 2))


def straight_flush_draw(hand: list[Card]) -> list[int]:
    """
    Positions of a 3+ card same-suit group with straight potential.

    Returns the whole group, so callers check its size.
    """
    groups: dict[str, list[int]] = {}
    for i, card in enumerate(hand):
        groups.setdefault(card.suit, []).append(i)

    for group in groups.values():
        if len(group) >= 3:
            values = sorted(hand[i].value for i in group)
            if has_sequential_potential(values):
                return group
    return []


def outside_straight_draw(hand: list[Card]) -> list[int]:
    """Positions of 4 distinct values spanning exactly 3 (lowest window first)."""
    unique = sorted({card.value for card in hand})
    for start in range(len(unique) - 3):
        window = unique[start:start + 4]
        if window[3] - window[0] == 3:
            positions = [i for i, card in enumerate(hand) if card.value in window]
            return positions[:4]
    return []


class HoldStrategy:
    """
    Base class for hold strategies.

    Subclasses implement ``get_optimal_holds``; any subclass can be
    passed to the simulation engine as a custom strategy.
    """
    name = "custom"

    def get_optimal_holds(self, hand: list[Card]) -> frozenset[int]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class OptimalStrategy(HoldStrategy):
    """Heuristic optimal strategy for Jacks or Better."""
    name = "optimal"

    def get_optimal_holds(self, hand: list[Card]) -> frozenset[int]:
        """
        Get holds for a dealt hand.

        Args:
            hand: Exactly 5 cards

        Returns:
            Positions to keep
        """
        _check_hand(hand)
        return self.apply_strategy_rules(hand, HandAnalysis.from_hand(hand))

    def analyze_hand(self, hand: list[Card]) -> HandAnalysis:
        _check_hand(hand)
        return HandAnalysis.from_hand(hand)

    def apply_strategy_rules(
        self,
        hand: list[Card],
        analysis: HandAnalysis,
    ) -> frozenset[int]:
        """Apply the rules in priority order; the first match decides."""
        # Made hands
        if analysis.quads:
            return _positions_with_value(hand, analysis.quads[0])

        if analysis.trips and analysis.pairs:
            return ALL_POSITIONS

        if analysis.is_flush or analysis.is_straight:
            return ALL_POSITIONS

        if analysis.trips:
            return _positions_with_value(hand, analysis.trips[0])

        # High pair (Aces sort first)
        high_pairs = [v for v in analysis.pairs if v == 1 or v >= 11]
        if high_pairs:
            return _positions_with_value(hand, high_pairs[0])

        royal_draw = royal_flush_draw(hand)
        if len(royal_draw) == 4:
            return frozenset(royal_draw)

        sf_draw = straight_flush_draw(hand)
        if len(sf_draw) == 4:
            return frozenset(sf_draw)

        if analysis.pairs:
            return _positions_with_value(hand, analysis.pairs[0])

        if analysis.flush_suit is not None:
            suited = [i for i, card in enumerate(hand) if card.suit == analysis.flush_suit]
            if len(suited) == 4:
                return frozenset(suited)

        if len(royal_draw) == 3:
            return frozenset(royal_draw)

        straight_draw = outside_straight_draw(hand)
        if len(straight_draw) == 4:
            return frozenset(straight_draw)

        if analysis.high_cards:
            suited_high = _largest_suit_group(hand, analysis.high_cards)
            if len(suited_high) >= 2:
                return frozenset(suited_high[:3])
            return frozenset(analysis.high_cards[:3])

        if len(sf_draw) == 3:
            return frozenset(sf_draw)

        return frozenset()


class AcesHighStrategy(HoldStrategy):
    """Hold only the Aces when there are any, otherwise play optimal."""
    name = "aces-high"

    def __init__(self, fallback: Optional[HoldStrategy] = None):
        self.fallback = fallback or OptimalStrategy()

    def get_optimal_holds(self, hand: list[Card]) -> frozenset[int]:
        _check_hand(hand)
        aces = _ace_positions(hand)
        if aces:
            return aces
        return self.fallback.get_optimal_holds(hand)


class AcesOptimalStrategy(HoldStrategy):
    """Optimal holds plus every Ace."""
    name = "aces-optimal"

    def __init__(self, base: Optional[HoldStrategy] = None):
        self.base = base or OptimalStrategy()

    def get_optimal_holds(self, hand: list[Card]) -> frozenset[int]:
        _check_hand(hand)
        return self.base.get_optimal_holds(hand) | _ace_positions(hand)


class RandomStrategy(HoldStrategy):
    """
    Hold each position independently with probability 0.3.

    Baseline for comparison only.
    """
    name = "random"

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        hold_probability: float = RANDOM_HOLD_PROBABILITY,
    ):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.hold_probability = hold_probability

    def get_optimal_holds(self, hand: list[Card]) -> frozenset[int]:
        _check_hand(hand)
        draws = self.rng.random(5)
        return frozenset(i for i in range(5) if draws[i] < self.hold_probability)


class NoHoldStrategy(HoldStrategy):
    """Always discard all 5 cards."""
    name = "no-hold"

    def get_optimal_holds(self, hand: list[Card]) -> frozenset[int]:
        _check_hand(hand)
        return frozenset()


STRATEGY_NAMES = ("optimal", "random", "aces-high", "aces-optimal")


def get_strategy(
    name: str,
    rng: Optional[np.random.Generator] = None,
) -> HoldStrategy:
    """
    Build a named strategy.

    Args:
        name: One of STRATEGY_NAMES
        rng: Generator for the random strategy

    Returns:
        Strategy instance
    """
    if name == "optimal":
        return OptimalStrategy()
    if name == "aces-high":
        return AcesHighStrategy()
    if name == "aces-optimal":
        return AcesOptimalStrategy()
    if name == "random":
        return RandomStrategy(rng)
    raise InvalidInputError(
        f"Strategy must be one of {', '.join(STRATEGY_NAMES)}, got {name!r}"
    )
