"""
Compatibility Scoring Engine

This package computes a match score between two dating-app users from
their MBTI type, interests, love-language scores, Big Five personality
traits and coarse location.

Key Design Decisions:
- Pure, deterministic computation (no I/O inside the scoring path)
- Five independent similarity functions combined with fixed weights
- Incomplete profiles degrade to neutral sub-scores instead of failing
- Same binary-gender pairs produce an explicit Excluded result
"""

from .features import Gender, Location, MBTIType, UserFeatures
from .scoring import (
    CompatibilityEngine,
    Excluded,
    ExclusionReason,
    MatchScoreResult,
    ScoringConfig,
    ScoreWeights,
    is_excluded,
    score,
)

__version__ = "1.0.0"

__all__ = [
    "Gender",
    "Location",
    "MBTIType",
    "UserFeatures",
    "CompatibilityEngine",
    "Excluded",
    "ExclusionReason",
    "MatchScoreResult",
    "ScoringConfig",
    "ScoreWeights",
    "is_excluded",
    "score",
]
