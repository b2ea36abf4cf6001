"""Compatibility scoring: engine, configuration and result records."""

from .result import (
    Excluded,
    ExclusionReason,
    MatchOutcome,
    MatchScoreResult,
    is_excluded,
    to_percentage,
)
from .engine import (
    CompatibilityEngine,
    ScoreWeights,
    ScoringConfig,
    create_engine_from_config,
    score,
)

__all__ = [
    "Excluded",
    "ExclusionReason",
    "MatchOutcome",
    "MatchScoreResult",
    "is_excluded",
    "to_percentage",
    "CompatibilityEngine",
    "ScoreWeights",
    "ScoringConfig",
    "create_engine_from_config",
    "score",
]
