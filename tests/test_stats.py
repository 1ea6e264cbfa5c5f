"""Tests for simulation statistics."""

import json
from dataclasses import replace

import pytest

from jacks.game.cards import parse_cards
from jacks.game.evaluator import HandCategory, HandResult
from jacks.simulation import SimulationStats, TrialRecord
from jacks.simulation.stats import THEORETICAL_FREQUENCIES


CARDS = tuple(parse_cards("2♥ 4♠ 6♦ 8♣ 9♠"))


def trial(category=HandCategory.HIGH_CARD, payout=0, bet=5):
    return TrialRecord(
        initial_hand=CARDS,
        final_hand=CARDS,
        holds=frozenset(),
        result=HandResult.of(category),
        payout=payout,
        bet=bet,
    )


@pytest.fixture
def stats():
    s = SimulationStats()
    s.set_total_hands(1000)
    return s


class TestAddHand:
    def test_empty(self):
        stats = SimulationStats()
        assert stats.hands_played == 0
        assert stats.get_rtp() == 0.0
        assert stats.get_win_rate() == 0.0
        assert stats.get_progress() == 0.0
        assert stats.net_history == [0]
        assert list(stats.hand_counts)[0] is HandCategory.ROYAL_FLUSH
        assert sum(stats.hand_counts.values()) == 0

    def test_totals(self, stats):
        stats.add_hand(trial(HandCategory.JACKS_OR_BETTER, payout=5))
        stats.add_hand(trial(HandCategory.HIGH_CARD))
        stats.add_hand(trial(HandCategory.TWO_PAIR, payout=10))

        assert stats.hands_played == 3
        assert stats.total_wagered == 15
        assert stats.total_won == 15
        assert stats.winning_hands == 2
        assert stats.net == 0
        assert stats.net_history == [0, 0, -5, 0]
        assert stats.get_rtp() == pytest.approx(100.0)
        assert stats.get_win_rate() == pytest.approx(200 / 3)
        assert stats.hand_counts[HandCategory.TWO_PAIR] == 1
        assert sum(stats.hand_counts.values()) == stats.hands_played

    def test_losing_paying_hand_still_wins(self, stats):
        stats.add_hand(trial(HandCategory.JACKS_OR_BETTER, payout=1, bet=5))
        assert stats.winning_hands == 1
        assert stats.net == -4

    def test_unknown_category(self, stats):
        bogus = replace(trial(), result=HandResult("Five of a Kind", "?", 11))
        stats.add_hand(bogus)
        assert stats.hand_counts[HandCategory.HIGH_CARD] == 1

    def test_string_category(self, stats):
        stats.add_hand(replace(trial(), result=HandResult("Flush", "Flush", 6)))
        assert stats.hand_counts[HandCategory.FLUSH] == 1

    def test_reset(self, stats):
        stats.add_hand(trial(HandCategory.FLUSH, payout=30))
        stats.start_timing()
        stats.reset()
        assert stats.hands_played == 0
        assert stats.total_won == 0
        assert stats.net_history == [0]
        assert stats.graph_data == []
        assert stats.duration == 0.0


class TestGraphSampling:
    def test_sample_rate(self):
        stats = SimulationStats()
        assert stats.sample_rate == 1
        stats.set_total_hands(100)
        assert stats.sample_rate == 1
        stats.set_total_hands(10000)
        assert stats.sample_rate == 20
        stats.set_total_hands(100000)
        assert stats.sample_rate == 200

    def test_points(self):
        stats = SimulationStats()
        stats.set_total_hands(10010)
        for _ in range(10010):
            stats.add_hand(trial())

        hands = [p.hand for p in stats.graph_data]
        assert hands[0] == 20
        assert all(h % 20 == 0 for h in hands[:-1])
        # The final hand is always sampled
        assert hands[-1] == 10010
        assert stats.graph_data[-1].net == -50050

    def test_point_values(self, stats):
        stats.set_total_hands(4)
        for t in [trial(payout=0), trial(HandCategory.FLUSH, payout=30)]:
            stats.add_hand(t)
        assert [p.to_dict() for p in stats.graph_data] == [
            {"hand": 1, "net": -5, "rtp": 0.0},
            {"hand": 2, "net": 20, "rtp": 300.0},
        ]


class TestDerived:
    def test_frequencies(self, stats):
        for _ in range(3):
            stats.add_hand(trial())
        stats.add_hand(trial(HandCategory.FLUSH, payout=30))

        freq = stats.get_hand_frequencies()
        assert len(freq) == 11
        assert freq["High Card"] == {"count": 3, "frequency": 75.0}
        assert freq["Flush"] == {"count": 1, "frequency": 25.0}
        assert freq["Royal Flush"]["frequency"] == 0.0

    def test_theoretical_comparison(self, stats):
        stats.add_hand(trial())
        comparison = stats.get_theoretical_comparison()
        assert set(comparison) == {c.value for c in THEORETICAL_FREQUENCIES}

        high = comparison["High Card"]
        assert high["actual"] == pytest.approx(100.0)
        assert high["theoretical"] == pytest.approx(31.7789)
        assert high["difference"] == pytest.approx(100.0 - 31.7789)

    def test_theoretical_frequencies_sum(self):
        assert sum(THEORETICAL_FREQUENCIES.values()) == pytest.approx(1.0, abs=2e-3)

    def test_volatility(self, stats):
        assert stats.get_volatility_metrics() == {
            "standard_deviation": 0.0, "variance": 0.0, "mean": 0.0,
        }
        stats.add_hand(trial())
        stats.add_hand(trial())
        # net_history is [0, -5, -10]
        metrics = stats.get_volatility_metrics()
        assert metrics["mean"] == pytest.approx(-5.0)
        assert metrics["variance"] == pytest.approx(50 / 3)
        assert metrics["standard_deviation"] == pytest.approx((50 / 3) ** 0.5)

    def test_confidence_interval_needs_100_hands(self, stats):
        for _ in range(99):
            stats.add_hand(trial())
        assert stats.get_confidence_intervals() is None
        stats.add_hand(trial())
        assert stats.get_confidence_intervals() is not None

    def test_confidence_interval(self, stats):
        for i in range(100):
            if i % 2:
                stats.add_hand(trial(HandCategory.TWO_PAIR, payout=10))
            else:
                stats.add_hand(trial())

        interval = stats.get_confidence_intervals()["rtp"]
        # RTP is 100% so rtp * (100 - rtp) is 0
        assert interval["margin"] == 0.0
        assert interval["lower"] == interval["upper"] == pytest.approx(100.0)

    def test_confidence_interval_lower_clamped(self, stats):
        stats.add_hand(trial(HandCategory.JACKS_OR_BETTER, payout=5))
        for _ in range(199):
            stats.add_hand(trial())

        interval = stats.get_confidence_intervals()["rtp"]
        assert interval["lower"] == 0.0
        assert interval["upper"] > stats.get_rtp()

    def test_timing(self, stats):
        stats.start_timing()
        stats.add_hand(trial())
        stats.stop_timing()
        assert stats.duration >= 0
        assert stats.get_hands_per_second() >= 0


class TestSnapshots:
    def test_current_stats(self, stats):
        stats.add_hand(trial(HandCategory.FLUSH, payout=30))
        current = stats.get_current_stats()
        assert current["hands_played"] == 1
        assert current["net"] == 25
        assert current["rtp"] == pytest.approx(600.0)
        assert current["progress"] == pytest.approx(0.1)

    def test_final_results(self, stats):
        stats.add_hand(trial())
        results = stats.get_final_results()
        assert results["net_history"] == [0, -5]
        # Total of 1000 samples every 2nd hand
        assert results["graph_data"] == []
        assert "duration" in results
        assert "hands_per_second" in results

    def test_export(self, stats):
        stats.add_hand(trial(HandCategory.FLUSH, payout=30))
        data = json.loads(stats.export_stats())
        assert data["summary"]["total_won"] == 30
        assert data["confidence_intervals"] is None
        assert "timestamp" in data

    def test_summary(self, stats):
        for _ in range(1000):
            stats.add_hand(trial())
        summary = stats.get_summary()
        assert summary["hands_played"] == "1,000"
        assert summary["net"] == "-5,000"
        assert summary["rtp"] == "0.00%"

    def test_from_trials_matches_incremental(self, stats):
        trials = [
            trial(HandCategory.JACKS_OR_BETTER, payout=5),
            trial(),
            trial(HandCategory.FULL_HOUSE, payout=45),
        ]
        for t in trials:
            stats.add_hand(t)

        replayed = SimulationStats.from_trials(trials, total_hands=1000)
        assert replayed.get_current_stats() == stats.get_current_stats()
        assert replayed.net_history == stats.net_history
        assert replayed.graph_data == stats.graph_data
