# sports_mcp/comparison/__init__.py
"""
Player comparison engine.

Shared comparator / winner tally / summary in engine.py, per-league
strategies in mlb.py, nba.py and nfl.py, and the league registry.
"""

from .base import ComparisonService, ComparisonStrategy, StatExtraction
from .engine import compare_stats, determine_winner, format_comparison_result, generate_summary
from .mlb import MLBComparison
from .nba import NBAComparison
from .nfl import NFLComparison, NFLSelector
from .registry import ComparisonRegistry, list_metrics

__all__ = [
    "ComparisonService",
    "ComparisonStrategy",
    "StatExtraction",
    "compare_stats",
    "determine_winner",
    "format_comparison_result",
    "generate_summary",
    "MLBComparison",
    "NBAComparison",
    "NFLComparison",
    "NFLSelector",
    "ComparisonRegistry",
    "list_metrics",
]
