"""Running statistics for simulation results."""

import json
import math
import time
from datetime import datetime
from typing import Any, Iterable, Optional

import numpy as np

from jacks.game.evaluator import HAND_CATEGORIES, HandCategory
from .models import GraphPoint, TrialRecord


# Final-hand frequencies for Jacks or Better under optimal play
THEORETICAL_FREQUENCIES = {
    HandCategory.ROYAL_FLUSH: 0.000025,
    HandCategory.STRAIGHT_FLUSH: 0.000014,
    HandCategory.FOUR_OF_A_KIND: 0.000236,
    HandCategory.FULL_HOUSE: 0.001151,
    HandCategory.FLUSH: 0.001101,
    HandCategory.STRAIGHT: 0.003925,
    HandCategory.THREE_OF_A_KIND: 0.074449,
    HandCategory.TWO_PAIR: 0.129279,
    HandCategory.JACKS_OR_BETTER: 0.214585,
    HandCategory.LOW_PAIR: 0.258446,
    HandCategory.HIGH_CARD: 0.317789,
}

# Target number of plotted points per run
GRAPH_POINTS = 500

Z_95 = 1.96


class SimulationStats:
    """
    Incremental aggregate of simulated hands.

    Totals and counters are updated once per hand by ``add_hand``.
    Rates, frequencies, volatility and confidence intervals are
    derived on demand. All percentages are stored as values 0-100.
    """

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        """Reset all statistics."""
        self.hands_played = 0
        self.total_hands = 0
        self.total_wagered = 0
        self.total_won = 0
        self.winning_hands = 0

        self.hand_counts: dict[HandCategory, int] = {
            category: 0 for category in reversed(HAND_CATEGORIES)
        }

        # Running net after each hand, starting from 0
        self.net_history: list[int] = [0]
        self.graph_data: list[GraphPoint] = []

        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None

    def set_total_hands(self, total: int) -> None:
        """Set the configured run length (drives graph sampling)."""
        self.total_hands = total

    @property
    def sample_rate(self) -> int:
        return max(1, self.total_hands // GRAPH_POINTS)

    def add_hand(self, trial: TrialRecord) -> None:
        """Record one completed hand."""
        self.hands_played += 1
        self.total_wagered += trial.bet
        self.total_won += trial.payout

        if trial.payout > 0:
            self.winning_hands += 1

        # Unrecognized categories count as High Card
        try:
            category = HandCategory(trial.result.category)
        except ValueError:
            category = HandCategory.HIGH_CARD
        self.hand_counts[category] += 1

        net = self.total_won - self.total_wagered
        self.net_history.append(net)

        if (
            self.hands_played % self.sample_rate == 0
            or self.hands_played == self.total_hands
        ):
            self.graph_data.append(GraphPoint(self.hands_played, net, self.get_rtp()))

    @classmethod
    def from_trials(
        cls,
        trials: Iterable[TrialRecord],
        total_hands: int = 0,
    ) -> "SimulationStats":
        """Build statistics by replaying recorded trials."""
        stats = cls()
        stats.set_total_hands(total_hands)
        for trial in trials:
            stats.add_hand(trial)
        return stats

    # Timing

    def start_timing(self) -> None:
        self.start_time = time.perf_counter()
        self.end_time = None

    def stop_timing(self) -> None:
        self.end_time = time.perf_counter()

    @property
    def duration(self) -> float:
        """Elapsed seconds between start and stop (or now)."""
        if self.start_time is None:
            return 0.0
        end = self.end_time if self.end_time is not None else time.perf_counter()
        return end - self.start_time

    def get_hands_per_second(self) -> float:
        duration = self.duration
        return self.hands_played / duration if duration > 0 else 0.0

    # Derived metrics

    @property
    def net(self) -> int:
        return self.total_won - self.total_wagered

    def get_rtp(self) -> float:
        """Return to player %."""
        if self.total_wagered == 0:
            return 0.0
        return self.total_won / self.total_wagered * 100

    def get_win_rate(self) -> float:
        """Percentage of hands with a payout."""
        if self.hands_played == 0:
            return 0.0
        return self.winning_hands / self.hands_played * 100

    def get_progress(self) -> float:
        if self.total_hands == 0:
            return 0.0
        return self.hands_played / self.total_hands * 100

    def get_hand_frequencies(self) -> dict[str, dict[str, float]]:
        """Count and percentage of hands per category."""
        return {
            category.value: {
                "count": count,
                "frequency": count / self.hands_played * 100 if self.hands_played else 0.0,
            }
            for category, count in self.hand_counts.items()
        }

    def get_theoretical_comparison(self) -> dict[str, dict[str, float]]:
        """Actual vs optimal-play final hand frequencies, in %."""
        frequencies = self.get_hand_frequencies()
        comparison = {}

        for category, theoretical in THEORETICAL_FREQUENCIES.items():
            actual = frequencies[category.value]["frequency"] / 100
            comparison[category.value] = {
                "theoretical": theoretical * 100,
                "actual": actual * 100,
                "difference": (actual - theoretical) * 100,
                "ratio": actual / theoretical if theoretical > 0 else 0.0,
            }

        return comparison

    def get_volatility_metrics(self) -> dict[str, float]:
        """
        Spread of the running net series.

        Population variance over ``net_history`` (including the
        starting 0).
        """
        if len(self.net_history) < 2:
            return {"standard_deviation": 0.0, "variance": 0.0, "mean": 0.0}

        history = np.asarray(self.net_history, dtype=np.float64)
        variance = float(history.var())
        return {
            "standard_deviation": math.sqrt(variance),
            "variance": variance,
            "mean": float(history.mean()),
        }

    def get_confidence_intervals(self) -> Optional[dict[str, dict[str, float]]]:
        """
        95% normal-approximation interval on RTP.

        Returns:
            {"rtp": {"lower", "upper", "margin"}} or None under 100 hands
        """
        if self.hands_played < 100:
            return None

        rtp = self.get_rtp()
        standard_error = math.sqrt(max(0.0, rtp * (100 - rtp)) / self.hands_played)
        margin = Z_95 * standard_error

        return {
            "rtp": {
                "lower": max(0.0, rtp - margin),
                "upper": rtp + margin,
                "margin": margin,
            }
        }

    # Snapshots

    def get_current_stats(self) -> dict[str, Any]:
        return {
            "hands_played": self.hands_played,
            "total_wagered": self.total_wagered,
            "total_won": self.total_won,
            "net": self.net,
            "rtp": self.get_rtp(),
            "win_rate": self.get_win_rate(),
            "winning_hands": self.winning_hands,
            "hand_frequencies": self.get_hand_frequencies(),
            "progress": self.get_progress(),
        }

    def get_final_results(self) -> dict[str, Any]:
        results = self.get_current_stats()
        results.update({
            "graph_data": [p.to_dict() for p in self.graph_data],
            "net_history": list(self.net_history),
            "duration": self.duration,
            "hands_per_second": self.get_hands_per_second(),
        })
        return results

    def export_stats(self) -> str:
        """Statistics as JSON text."""
        return json.dumps({
            "summary": self.get_current_stats(),
            "theoretical_comparison": self.get_theoretical_comparison(),
            "volatility": self.get_volatility_metrics(),
            "confidence_intervals": self.get_confidence_intervals(),
            "graph_data": [p.to_dict() for p in self.graph_data],
            "timestamp": datetime.now().isoformat(),
        }, indent=2)

    def get_summary(self) -> dict[str, str]:
        """Formatted values for display."""
        net = self.net
        return {
            "hands_played": f"{self.hands_played:,}",
            "total_wagered": f"{self.total_wagered:,}",
            "total_won": f"{self.total_won:,}",
            "net": f"{'+' if net >= 0 else ''}{net:,}",
            "rtp": f"{self.get_rtp():.2f}%",
            "win_rate": f"{self.get_win_rate():.1f}%",
        }

    def __repr__(self) -> str:
        return (
            f"SimulationStats(hands={self.hands_played}, "
            f"RTP={self.get_rtp():.2f}, win_rate={self.get_win_rate():.1f})"
        )
