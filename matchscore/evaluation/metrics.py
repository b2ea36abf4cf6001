"""
Evaluation metrics for compatibility scores.

There is no ground truth for compatibility, so evaluation describes how
the engine behaves on a batch of scored pairs:
1. Total-score distribution
2. Mean of each sub-score (which factors drive the feed)
3. Directionality of the MBTI chart (pairs where order changes the level)
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from ..features.schema import MBTIType
from ..similarity.mbti import COMPATIBILITY_MATRIX, CompatibilityLevel

logger = logging.getLogger(__name__)

SUB_SCORE_COLUMNS = [
    "mbti_score",
    "interests_score",
    "love_language_score",
    "personality_score",
    "location_score",
]


@dataclass
class ScoreDistributionStats:
    """Statistics about score distribution."""
    mean: float
    std: float
    min: float
    max: float
    quantiles: Dict[str, float]  # e.g., {"p10": 0.2, "p50": 0.5, "p90": 0.8}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mean": float(self.mean),
            "std": float(self.std),
            "min": float(self.min),
            "max": float(self.max),
            "quantiles": {k: float(v) for k, v in self.quantiles.items()}
        }


@dataclass
class FeedReport:
    """
    Summary of one ranked feed.

    Attributes:
        n_scored: Number of candidates that received a score
        distribution_stats: Distribution of total scores
        sub_score_means: Mean of each sub-score column
    """
    n_scored: int
    distribution_stats: Optional[ScoreDistributionStats] = None
    sub_score_means: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "n_scored": self.n_scored,
            "sub_score_means": self.sub_score_means
        }
        if self.distribution_stats:
            result["distribution_stats"] = self.distribution_stats.to_dict()
        return result

    def save(self, filepath: str) -> None:
        """Save report to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved feed report to {filepath}")

    def summary(self) -> str:
        """Generate text summary of the report."""
        lines = [
            f"Feed Report ({self.n_scored} scored candidates)",
            "=" * 50,
        ]
        if self.distribution_stats:
            stats = self.distribution_stats
            lines.extend([
                "",
                "Total Score Distribution:",
                f"  Mean: {stats.mean:.4f}",
                f"  Std:  {stats.std:.4f}",
                f"  Min:  {stats.min:.4f}",
                f"  Max:  {stats.max:.4f}",
            ])
            for q_name, q_value in stats.quantiles.items():
                lines.append(f"  {q_name}: {q_value:.4f}")

        if self.sub_score_means:
            lines.extend(["", "Sub-score Means:"])
            for name, value in self.sub_score_means.items():
                lines.append(f"  {name}: {value:.4f}")

        return "\n".join(lines)


def compute_score_distribution_stats(
    scores: Sequence[float],
    quantiles: Sequence[float] = (0.1, 0.25, 0.5, 0.75, 0.9)
) -> ScoreDistributionStats:
    """
    Compute distribution statistics for scores.

    Args:
        scores: Compatibility scores
        quantiles: Quantile values to compute (default: p10, p25, p50, p75, p90)

    Returns:
        ScoreDistributionStats instance

    Raises:
        ValueError: If scores is empty
    """
    scores = np.asarray(scores, dtype=float)
    if scores.size == 0:
        raise ValueError("Cannot compute distribution stats of an empty score list")

    quantile_dict = {
        f"p{int(q * 100)}": float(np.percentile(scores, q * 100))
        for q in quantiles
    }

    return ScoreDistributionStats(
        mean=float(np.mean(scores)),
        std=float(np.std(scores)),
        min=float(np.min(scores)),
        max=float(np.max(scores)),
        quantiles=quantile_dict
    )


def create_feed_report(frame: pd.DataFrame) -> FeedReport:
    """
    Create a report from a ranked feed DataFrame (see feed_to_frame).

    Args:
        frame: Feed DataFrame with total_score and sub-score columns

    Returns:
        FeedReport (without distribution stats when the feed is empty)
    """
    if frame.empty:
        return FeedReport(n_scored=0)

    return FeedReport(
        n_scored=len(frame),
        distribution_stats=compute_score_distribution_stats(frame["total_score"].to_numpy()),
        sub_score_means={c: float(frame[c].mean()) for c in SUB_SCORE_COLUMNS}
    )


def directional_pairs(
    matrix: Mapping[MBTIType, Mapping[MBTIType, CompatibilityLevel]] = COMPATIBILITY_MATRIX
) -> List[Tuple[MBTIType, MBTIType]]:
    """
    List ordered type pairs whose level depends on lookup direction.

    Args:
        matrix: MBTI compatibility chart

    Returns:
        (row, col) pairs with matrix[row][col] != matrix[col][row],
        each unordered pair reported once
    """
    types = list(matrix.keys())
    pairs = []
    for i, row in enumerate(types):
        for col in types[i + 1:]:
            if matrix[row][col] != matrix[col][row]:
                pairs.append((row, col))
    return pairs
