"""
Love-language similarity using Spearman rank correlation.

Each user's five love-language scores are turned into a ranking
(1 = highest score). The two rankings are compared with Spearman's rho,
which lies in [-1, 1], and mapped into [0, 1]:

    rho = 1 - 6 * sum(d^2) / (n * (n^2 - 1))     with n = 5, denominator 120
    similarity = (rho + 1) / 2

Tied scores keep their original order: the earlier love language gets
the better rank. This matches a stable descending sort and is why
"ordinal" ranking is used rather than scipy's default average ranks.
"""

import logging
from typing import Optional, Sequence

import numpy as np
from scipy.stats import rankdata

logger = logging.getLogger(__name__)

NUM_LOVE_LANGUAGES = 5
NEUTRAL_SCORE = 0.5


def rank_scores(scores: Sequence[float]) -> np.ndarray:
    """
    Rank scores in descending order.

    Args:
        scores: Numeric scores

    Returns:
        Integer ranks (1 = largest); ties ranked by original position
    """
    values = np.asarray(scores, dtype=float)
    return rankdata(-values, method="ordinal").astype(int)


def spearman_rho(ranks1: np.ndarray, ranks2: np.ndarray) -> float:
    """Spearman's rho for two untied rankings of equal length."""
    n = len(ranks1)
    sum_squared_diff = float(np.sum((ranks1 - ranks2) ** 2))
    return 1 - (6 * sum_squared_diff) / (n * (n ** 2 - 1))


def _is_complete(values: Optional[Sequence[float]]) -> bool:
    """True for a length-5 vector with no missing or non-finite entry."""
    if values is None or len(values) != NUM_LOVE_LANGUAGES:
        return False
    if any(v is None for v in values):
        return False
    return bool(np.all(np.isfinite(np.asarray(values, dtype=float))))


def love_language_similarity(
    love_lang1: Optional[Sequence[float]],
    love_lang2: Optional[Sequence[float]],
    neutral_score: float = NEUTRAL_SCORE
) -> float:
    """
    Calculate love-language similarity.

    Args:
        love_lang1: First user's five love-language scores
        love_lang2: Second user's five love-language scores
        neutral_score: Score returned for missing or malformed vectors

    Returns:
        Similarity score between 0 and 1
    """
    if not (_is_complete(love_lang1) and _is_complete(love_lang2)):
        logger.debug("Love-language vector missing, incomplete or not of length 5; using neutral score")
        return neutral_score

    rho = spearman_rho(rank_scores(love_lang1), rank_scores(love_lang2))
    return (rho + 1) / 2
