"""Simulation engine module."""

from .models import TrialRecord, GraphPoint, SimulationProgress
from .stats import SimulationStats, THEORETICAL_FREQUENCIES
from .engine import (
    SimulationEngine,
    SimulationConfig,
    SimulationCallbacks,
    SimulationState,
)

__all__ = [
    "TrialRecord",
    "GraphPoint",
    "SimulationProgress",
    "SimulationStats",
    "THEORETICAL_FREQUENCIES",
    "SimulationEngine",
    "SimulationConfig",
    "SimulationCallbacks",
    "SimulationState",
]
