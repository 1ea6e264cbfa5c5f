"""Hold strategy module."""

from .holds import (
    HoldStrategy,
    OptimalStrategy,
    RandomStrategy,
    AcesHighStrategy,
    AcesOptimalStrategy,
    NoHoldStrategy,
    HandAnalysis,
    STRATEGY_NAMES,
    get_strategy,
)

__all__ = [
    "HoldStrategy",
    "OptimalStrategy",
    "RandomStrategy",
    "AcesHighStrategy",
    "AcesOptimalStrategy",
    "NoHoldStrategy",
    "HandAnalysis",
    "STRATEGY_NAMES",
    "get_strategy",
]
