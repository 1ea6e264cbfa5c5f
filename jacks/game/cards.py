"""Card and deck representation utilities."""

from dataclasses import dataclass
from typing import Optional

import numpy as np
from treys import Card as TreysCard

from jacks.errors import EmptyDeckError, InvalidInputError


RANKS = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")
SUITS = ("♠", "♥", "♦", "♣")

RANK_VALUES = {rank: value for value, rank in enumerate(RANKS, start=1)}

RED_SUITS = frozenset({"♥", "♦"})
BLACK_SUITS = frozenset({"♠", "♣"})

# ASCII shorthand accepted by Card.from_string
STR_RANK = {"T": "10"}
STR_SUIT = {"s": "♠", "h": "♥", "d": "♦", "c": "♣"}

# Mapping for treys conversion
TREYS_RANK = {rank: rank for rank in RANKS}
TREYS_RANK["10"] = "T"
TREYS_SUIT = {v: k for k, v in STR_SUIT.items()}


@dataclass(frozen=True)
class Card:
    """A playing card."""
    rank: str  # A, 2-10, J, Q, K
    suit: str  # one of SUITS

    def __post_init__(self):
        if self.rank not in RANK_VALUES:
            raise InvalidInputError(f"Invalid rank: {self.rank}")
        if self.suit not in SUITS:
            raise InvalidInputError(f"Invalid suit: {self.suit}")

    @property
    def value(self) -> int:
        """Numeric value: A=1, 2-10 literal, J=11, Q=12, K=13."""
        return RANK_VALUES[self.rank]

    @property
    def is_red(self) -> bool:
        return self.suit in RED_SUITS

    @property
    def is_black(self) -> bool:
        return self.suit in BLACK_SUITS

    @property
    def is_high(self) -> bool:
        """Ace or face card (J, Q, K)."""
        return self.value == 1 or self.value >= 11

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return str(self)

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """
        Parse card from string like 'A♠', '10♥', or ASCII 'As', 'Th', '10d'.
        """
        s = s.strip()
        if len(s) < 2:
            raise InvalidInputError(f"Invalid card string: {s}")

        rank_str = s[:-1].upper()
        suit_str = s[-1]

        rank = STR_RANK.get(rank_str, rank_str)
        suit = STR_SUIT.get(suit_str.lower(), suit_str)

        return cls(rank=rank, suit=suit)

    def to_treys(self) -> int:
        """Convert to treys library card format."""
        return TreysCard.new(f"{TREYS_RANK[self.rank]}{TREYS_SUIT[self.suit]}")


# Canonical order: all ranks of the first suit, then the next suit
FULL_DECK = tuple(Card(rank, suit) for suit in SUITS for rank in RANKS)


def parse_cards(s: str) -> list[Card]:
    """
    Parse a whitespace or comma separated list of cards.

    Examples:
        "J♥ J♠ 3♦ 7♣ 9♠"
        "Jh,Js,3d,7c,9s"
    """
    parts = s.replace(",", " ").split()
    return [Card.from_string(p) for p in parts]


def hand_to_treys(hand: list[Card]) -> list[int]:
    """Convert a list of cards to treys format."""
    return [c.to_treys() for c in hand]


class Deck:
    """
    A standard 52-card deck.

    Cards are dealt from the end of the list (the "top"). The random
    generator is injected so shuffles are reproducible with a seed.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.cards: list[Card] = []
        self.reset()

    def reset(self) -> "Deck":
        """Reset deck to full 52 cards in suit-major order."""
        self.cards = list(FULL_DECK)
        return self

    def shuffle(self) -> "Deck":
        """Shuffle the deck in place (Fisher-Yates)."""
        cards = self.cards
        draws = self.rng.random(len(cards))
        for i in range(len(cards) - 1, 0, -1):
            j = int(draws[i] * (i + 1))
            cards[i], cards[j] = cards[j], cards[i]
        return self

    def deal(self) -> Card:
        """Deal one card from the top."""
        if not self.cards:
            raise EmptyDeckError("Cannot deal from empty deck")
        return self.cards.pop()

    def deal_hand(self, n: int = 5) -> list[Card]:
        """Deal n cards; position i holds the i-th card dealt."""
        return [self.deal() for _ in range(n)]

    def peek(self) -> Optional[Card]:
        """Top card without dealing it, or None when empty."""
        if not self.cards:
            return None
        return self.cards[-1]

    def size(self) -> int:
        return len(self.cards)

    def is_empty(self) -> bool:
        return not self.cards

    def get_cards(self) -> list[Card]:
        """Copy of the remaining cards (bottom first)."""
        return list(self.cards)

    def __len__(self) -> int:
        return len(self.cards)
