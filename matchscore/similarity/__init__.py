"""Similarity functions for each compatibility factor."""

from .mbti import (
    COMPATIBILITY_MATRIX,
    LEVEL_SCORE,
    CompatibilityLevel,
    compatibility_level,
    letter_overlap_similarity,
    mbti_similarity,
)
from .interests import interests_similarity, normalize_interests
from .love_language import love_language_similarity, rank_scores
from .personality import personality_similarity
from .location import location_similarity

__all__ = [
    "COMPATIBILITY_MATRIX",
    "LEVEL_SCORE",
    "CompatibilityLevel",
    "compatibility_level",
    "letter_overlap_similarity",
    "mbti_similarity",
    "interests_similarity",
    "normalize_interests",
    "love_language_similarity",
    "rank_scores",
    "personality_similarity",
    "location_similarity",
]
