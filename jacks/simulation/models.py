"""Data models passed between the engine, statistics and callers."""

from dataclasses import dataclass
from typing import Any, Optional

from jacks.game.cards import Card
from jacks.game.evaluator import HandResult


@dataclass(frozen=True)
class TrialRecord:
    """One dealt, held, drawn and paid hand."""
    initial_hand: tuple[Card, ...]
    final_hand: tuple[Card, ...]
    holds: frozenset[int]
    result: HandResult
    payout: int
    bet: int
    strategy: str = "optimal"

    @property
    def net(self) -> int:
        return self.payout - self.bet

    def to_dict(self) -> dict[str, Any]:
        return {
            "initial_hand": [str(c) for c in self.initial_hand],
            "final_hand": [str(c) for c in self.final_hand],
            "holds": sorted(self.holds),
            "category": self.result.category.value,
            "description": self.result.description,
            "rank": self.result.rank,
            "payout": self.payout,
            "bet": self.bet,
            "strategy": self.strategy,
        }


@dataclass(frozen=True)
class GraphPoint:
    """Down-sampled point of the running net result."""
    hand: int
    net: int
    rtp: float

    def to_dict(self) -> dict[str, Any]:
        return {"hand": self.hand, "net": self.net, "rtp": self.rtp}


@dataclass(frozen=True)
class SimulationProgress:
    """Progress notification payload."""
    hands_played: int
    total_hands: int
    progress: float  # 0-100
    current_stats: dict[str, Any]
    latest_hand: Optional[TrialRecord] = None
