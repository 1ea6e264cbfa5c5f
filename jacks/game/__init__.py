"""Game representation module."""

from .cards import Card, Deck, RANKS, SUITS, RANK_VALUES, FULL_DECK, parse_cards, hand_to_treys
from .evaluator import (
    HandCategory,
    HandResult,
    HandEvaluator,
    HAND_CATEGORIES,
    PAYING_CATEGORIES,
    treys_score,
)
from .paytable import Paytable, PaytableManager, DEFAULT_PAYTABLES

__all__ = [
    "Card",
    "Deck",
    "RANKS",
    "SUITS",
    "RANK_VALUES",
    "FULL_DECK",
    "parse_cards",
    "hand_to_treys",
    "HandCategory",
    "HandResult",
    "HandEvaluator",
    "HAND_CATEGORIES",
    "PAYING_CATEGORIES",
    "treys_score",
    "Paytable",
    "PaytableManager",
    "DEFAULT_PAYTABLES",
]
