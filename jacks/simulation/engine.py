"""
Monte Carlo simulation engine for video poker.

Each trial deals 5 cards from a freshly shuffled deck, picks holds
with a strategy, draws replacements for the other positions, then
evaluates and pays the final hand. Results are accumulated in a
SimulationStats instance owned by the engine.

The run loop is a generator so the host decides when to resume it:
``run_steps`` yields a progress snapshot every ``yield_interval``
hands, and ``start_simulation`` simply drives it to the end.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Iterator, Optional, Union

import numpy as np

from jacks.errors import InvalidInputError, SimulationStateError
from jacks.game.cards import Deck
from jacks.game.evaluator import HandEvaluator
from jacks.game.paytable import PaytableManager
from jacks.strategy.holds import STRATEGY_NAMES, HoldStrategy, get_strategy
from .models import SimulationProgress, TrialRecord
from .stats import SimulationStats

logger = logging.getLogger(__name__)

MIN_HANDS = 100
MAX_HANDS = 100_000
MAX_SPEED = 1000  # ms between hands


class SimulationState(Enum):
    """Engine lifecycle."""
    IDLE = auto()
    RUNNING = auto()
    STOPPED = auto()
    COMPLETED = auto()
    FAILED = auto()


@dataclass
class SimulationConfig:
    """Configuration for a simulation run."""
    total_hands: int = 10000
    speed: int = 0                 # Delay between hands in ms (0 = full speed)
    strategy: Union[str, HoldStrategy] = "optimal"
    bet: int = 5
    progress_interval: int = 10    # Hands between progress callbacks
    yield_interval: int = 100      # Hands between host yield points

    @property
    def strategy_name(self) -> str:
        if isinstance(self.strategy, HoldStrategy):
            return self.strategy.name
        return self.strategy

    def validate(self) -> "SimulationConfig":
        """Check every field; raises InvalidInputError on the first bad one."""
        if not _is_int(self.total_hands) or not MIN_HANDS <= self.total_hands <= MAX_HANDS:
            raise InvalidInputError(
                f"Total hands must be between {MIN_HANDS:,} and {MAX_HANDS:,}"
            )

        if not _is_int(self.speed) or not (self.speed == 0 or 1 <= self.speed <= MAX_SPEED):
            raise InvalidInputError(f"Speed must be 0 or between 1 and {MAX_SPEED} ms")

        if not isinstance(self.strategy, HoldStrategy) and self.strategy not in STRATEGY_NAMES:
            raise InvalidInputError(
                f"Strategy must be one of {', '.join(STRATEGY_NAMES)} or a HoldStrategy"
            )

        if not _is_int(self.bet) or not 1 <= self.bet <= 5:
            raise InvalidInputError("Bet must be between 1 and 5")

        if not _is_int(self.progress_interval) or self.progress_interval < 1:
            raise InvalidInputError("Progress interval must be at least 1")

        if not _is_int(self.yield_interval) or self.yield_interval < 1:
            raise InvalidInputError("Yield interval must be at least 1")

        return self


def _is_int(x: Any) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)


@dataclass
class SimulationCallbacks:
    """Optional notification hooks for a host (UI, CLI, tests)."""
    on_progress: Optional[Callable[[SimulationProgress], None]] = None
    on_hand_complete: Optional[Callable[[TrialRecord], None]] = None
    on_complete: Optional[Callable[[dict[str, Any]], None]] = None
    on_error: Optional[Callable[[str], None]] = None


class SimulationEngine:
    """
    Drives repeated video poker trials.

    One engine runs at most one simulation at a time. The deck and
    statistics belong to the engine; callers read results through
    ``get_current_stats`` and ``get_progress``.
    """

    def __init__(
        self,
        paytables: Optional[PaytableManager] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        callbacks: Optional[SimulationCallbacks] = None,
    ):
        """
        Initialize the engine.

        Args:
            paytables: Paytable source for payouts (default: full pay)
            rng: Random generator for shuffles and the random strategy
            seed: Seed used when no generator is given
            callbacks: Notification hooks
        """
        self.paytables = paytables or PaytableManager()
        self.evaluator = HandEvaluator()
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.callbacks = callbacks or SimulationCallbacks()

        self.state = SimulationState.IDLE
        self.config: Optional[SimulationConfig] = None
        self.last_results: Optional[dict[str, Any]] = None

        self._deck = Deck(self.rng)
        self._stats = SimulationStats()
        self._strategy: Optional[HoldStrategy] = None
        self._stop_requested = False

    @property
    def stats(self) -> SimulationStats:
        """Statistics of the current or last run (read only)."""
        return self._stats

    def _resolve_strategy(self, strategy: Union[str, HoldStrategy]) -> HoldStrategy:
        if isinstance(strategy, HoldStrategy):
            return strategy
        return get_strategy(strategy, self.rng)

    def simulate_hand(
        self,
        bet: int = 5,
        strategy: Union[str, HoldStrategy] = "optimal",
    ) -> TrialRecord:
        """
        Play one hand: deal, hold, draw, evaluate, pay.

        Replacements are dealt in position order from the same deck
        as the initial hand, so no card appears twice in a trial.
        """
        if isinstance(strategy, str):
            strategy = self._resolve_strategy(strategy)

        deck = self._deck.reset().shuffle()
        initial = deck.deal_hand(5)

        holds = frozenset(strategy.get_optimal_holds(initial))

        final = list(initial)
        for i in range(5):
            if i not in holds:
                final[i] = deck.deal()

        result = self.evaluator.evaluate(final)
        payout = self.paytables.calculate_payout(result.category, bet)

        return TrialRecord(
            initial_hand=tuple(initial),
            final_hand=tuple(final),
            holds=holds,
            result=result,
            payout=payout,
            bet=bet,
            strategy=strategy.name,
        )

    def run_steps(
        self,
        config: Optional[SimulationConfig] = None,
    ) -> Iterator[SimulationProgress]:
        """
        Prepare a run and return its step generator.

        The config is validated before this returns; nothing changes if
        validation fails. The engine moves to RUNNING on the first
        ``next()``, so a generator that is never started leaves the
        engine untouched. Iterating plays hands, yielding a progress
        snapshot every ``config.yield_interval`` hands.
        """
        config = config or SimulationConfig()
        strategy = self._check_start(config)
        return self._loop(config, strategy)

    def start_simulation(
        self,
        config: Optional[SimulationConfig] = None,
    ) -> dict[str, Any]:
        """
        Run a simulation to completion or cancellation.

        Returns:
            Final results (stats snapshot, graph data, duration, state)
        """
        for _ in self.run_steps(config):
            pass
        return self.last_results

    def stop_simulation(self) -> None:
        """Request cancellation; honored before the next hand starts."""
        if self.state is not SimulationState.RUNNING:
            return
        logger.info("Stopping simulation after %d hands", self._stats.hands_played)
        self._stop_requested = True

    def _check_start(self, config: SimulationConfig) -> HoldStrategy:
        if self.state is SimulationState.RUNNING:
            raise SimulationStateError("A simulation is already running")

        config.validate()
        return self._resolve_strategy(config.strategy)

    def _begin(self, config: SimulationConfig, strategy: HoldStrategy) -> None:
        if self.state is SimulationState.RUNNING:
            raise SimulationStateError("A simulation is already running")

        self.config = config
        self._strategy = strategy
        self._stop_requested = False
        self.last_results = None

        self._stats.reset()
        self._stats.set_total_hands(config.total_hands)
        self._stats.start_timing()
        self.state = SimulationState.RUNNING

        logger.info(
            "Starting simulation: %d hands, strategy=%s, bet=%d, paytable=%s",
            config.total_hands,
            strategy.name,
            config.bet,
            self.paytables.current,
        )

    def _loop(
        self,
        config: SimulationConfig,
        strategy: HoldStrategy,
    ) -> Iterator[SimulationProgress]:
        self._begin(config, strategy)
        stats = self._stats
        callbacks = self.callbacks
        delay = config.speed / 1000

        try:
            while not self._stop_requested and stats.hands_played < config.total_hands:
                trial = self.simulate_hand(config.bet, self._strategy)
                stats.add_hand(trial)
                played = stats.hands_played

                if callbacks.on_progress and (
                    played % config.progress_interval == 0
                    or played == config.total_hands
                ):
                    callbacks.on_progress(self._snapshot(trial))

                if callbacks.on_hand_complete:
                    callbacks.on_hand_complete(trial)

                if delay:
                    time.sleep(delay)

                if played % config.yield_interval == 0:
                    yield self._snapshot(trial)

        except (GeneratorExit, KeyboardInterrupt):
            # Host abandoned or interrupted the run
            self._stop_requested = True
            self._finish()
            raise
        except Exception as e:
            self.state = SimulationState.FAILED
            stats.stop_timing()
            logger.exception("Simulation failed after %d hands", stats.hands_played)
            if callbacks.on_error:
                callbacks.on_error(str(e))
            raise

        self._finish()

    def _finish(self) -> None:
        stats = self._stats
        stats.stop_timing()
        self.state = (
            SimulationState.STOPPED if self._stop_requested
            else SimulationState.COMPLETED
        )

        results = stats.get_final_results()
        results["state"] = self.state.name.lower()
        results["strategy"] = self._strategy.name if self._strategy else None
        self.last_results = results

        logger.info(
            "Simulation %s: %d hands in %.2fs (RTP %.2f%%)",
            results["state"],
            stats.hands_played,
            stats.duration,
            stats.get_rtp(),
        )

        if self.callbacks.on_complete:
            self.callbacks.on_complete(results)

    def _snapshot(self, latest: Optional[TrialRecord] = None) -> SimulationProgress:
        stats = self._stats
        return SimulationProgress(
            hands_played=stats.hands_played,
            total_hands=stats.total_hands,
            progress=stats.get_progress(),
            current_stats=stats.get_current_stats(),
            latest_hand=latest,
        )

    def get_current_stats(self) -> dict[str, Any]:
        return self._stats.get_current_stats()

    def get_progress(self) -> dict[str, Any]:
        return {
            "hands_played": self._stats.hands_played,
            "total_hands": self._stats.total_hands,
            "progress": self._stats.get_progress(),
            "is_running": self.is_simulation_running(),
            "state": self.state.name.lower(),
        }

    def is_simulation_running(self) -> bool:
        return self.state is SimulationState.RUNNING

    def reset(self) -> None:
        """Clear statistics and return to IDLE."""
        if self.state is SimulationState.RUNNING:
            raise SimulationStateError("Stop the running simulation before resetting")
        self._stats.reset()
        self.config = None
        self.last_results = None
        self.state = SimulationState.IDLE
