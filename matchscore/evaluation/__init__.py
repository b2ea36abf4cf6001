"""Evaluation module for compatibility score analysis."""

from .metrics import (
    compute_score_distribution_stats,
    create_feed_report,
    directional_pairs,
    FeedReport,
    ScoreDistributionStats,
)

__all__ = [
    "compute_score_distribution_stats",
    "create_feed_report",
    "directional_pairs",
    "FeedReport",
    "ScoreDistributionStats",
]
