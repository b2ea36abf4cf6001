"""
Personality similarity using Euclidean distance.

Big Five scores are Likert-derived values in [1, 5]. Each component is
normalized with (value - 1) / 4 into the unit interval, so two profiles
are points in the unit 5-cube whose largest possible distance is sqrt(5):

    similarity = 1 - distance / sqrt(5)

Out-of-range inputs are normalized as-is unless clamping is requested;
the returned similarity is always clipped into [0, 1].
"""

import logging
import math
from typing import Optional, Sequence

import numpy as np
from scipy.spatial.distance import euclidean

logger = logging.getLogger(__name__)

NUM_TRAITS = 5
NEUTRAL_SCORE = 0.5
SCALE_MIN = 1.0
SCALE_MAX = 5.0
MAX_DISTANCE = math.sqrt(NUM_TRAITS)


def normalize_traits(scores: Sequence[float], clamp: bool = False) -> np.ndarray:
    """
    Map Likert scores from [1, 5] to [0, 1].

    Args:
        scores: Raw trait scores
        clamp: Clamp raw scores into [1, 5] before normalizing

    Returns:
        Normalized trait vector
    """
    values = np.asarray(scores, dtype=float)
    if clamp:
        values = np.clip(values, SCALE_MIN, SCALE_MAX)
    elif np.any((values < SCALE_MIN) | (values > SCALE_MAX)):
        logger.debug(f"Personality scores outside [{SCALE_MIN}, {SCALE_MAX}]: {values.tolist()}")
    return (values - SCALE_MIN) / (SCALE_MAX - SCALE_MIN)


def _is_complete(values: Optional[Sequence[float]]) -> bool:
    """True for a length-5 vector with no missing or non-finite entry."""
    if values is None or len(values) != NUM_TRAITS:
        return False
    if any(v is None for v in values):
        return False
    return bool(np.all(np.isfinite(np.asarray(values, dtype=float))))


def personality_similarity(
    personality1: Optional[Sequence[float]],
    personality2: Optional[Sequence[float]],
    neutral_score: float = NEUTRAL_SCORE,
    clamp_inputs: bool = False
) -> float:
    """
    Calculate personality similarity.

    Args:
        personality1: First user's Big Five scores
        personality2: Second user's Big Five scores
        neutral_score: Score returned for missing or malformed vectors
        clamp_inputs: Clamp raw scores into [1, 5] before normalizing

    Returns:
        Similarity score between 0 and 1
    """
    if not (_is_complete(personality1) and _is_complete(personality2)):
        logger.debug("Personality vector missing, incomplete or not of length 5; using neutral score")
        return neutral_score

    distance = euclidean(
        normalize_traits(personality1, clamp=clamp_inputs),
        normalize_traits(personality2, clamp=clamp_inputs)
    )
    similarity = 1 - distance / MAX_DISTANCE
    return float(np.clip(similarity, 0.0, 1.0))
