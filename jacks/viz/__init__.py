"""Visualization module."""

from .report import StatsDisplay, display_stats, format_hand, describe_result

__all__ = [
    "StatsDisplay",
    "display_stats",
    "format_hand",
    "describe_result",
]
