"""
JacksSolver: Jacks or Better Video Poker Analyzer

A Python-based video poker engine that classifies 5-card hands,
picks hold decisions with a heuristic optimal strategy, and runs
Monte Carlo simulations to estimate return to player, hand
frequencies and volatility for a given paytable.
"""

__version__ = "0.1.0"
