"""
Compatibility engine combining the five similarity factors.

Scoring Formula:
    total = 0.15 * mbti
          + 0.25 * interests
          + 0.15 * love_language
          + 0.30 * personality
          + 0.15 * location

Exclusion Rule:
    If both users share a binary gender (MALE/MALE or FEMALE/FEMALE) the
    pair is not scored and Excluded is returned. Any other combination,
    including non-binary, other or unspecified genders, is scored.

Each sub-score is in [0, 1] and the weights are non-negative and sum to
1, so the total is in [0, 1] without clamping.

The engine holds only an immutable configuration and can be shared
freely across threads.
"""

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from ..features.schema import UserFeatures
from ..similarity.interests import interests_similarity
from ..similarity.location import location_similarity
from ..similarity.love_language import love_language_similarity
from ..similarity.mbti import (
    LEVEL_SCORE,
    letter_overlap_similarity,
    level_scores_from_dict,
    mbti_similarity,
)
from ..similarity.personality import personality_similarity
from .result import Excluded, ExclusionReason, MatchOutcome, MatchScoreResult

logger = logging.getLogger(__name__)

WEIGHT_TOLERANCE = 1e-9
MBTI_STRATEGIES = ("matrix", "letter_overlap")


@dataclass(frozen=True)
class ScoreWeights:
    """
    Weight of each sub-score in the total.

    Attributes:
        mbti: Weight of the MBTI chart score
        interests: Weight of the interests overlap score
        love_language: Weight of the love-language rank agreement
        personality: Weight of the Big Five closeness
        location: Weight of the location proximity
    """
    mbti: float = 0.15
    interests: float = 0.25
    love_language: float = 0.15
    personality: float = 0.30
    location: float = 0.15

    def total(self) -> float:
        return self.mbti + self.interests + self.love_language + self.personality + self.location

    def validate(self) -> None:
        """Validate that weights are in [0, 1] and sum to 1."""
        for name, value in asdict(self).items():
            if not 0 <= value <= 1:
                raise ValueError(f"Weight {name} must be in [0, 1], got {value}")
        if abs(self.total() - 1.0) > WEIGHT_TOLERANCE:
            raise ValueError(f"Weights must sum to 1, got {self.total()}")

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class ScoringConfig:
    """
    Configuration for the compatibility engine.

    The defaults reproduce the production scoring rules; a config file
    only needs to list the values it changes.

    Attributes:
        weights: Sub-score weights
        level_scores: Score per MBTI chart level, keyed by lowercase level
            name (stored read-only)
        mbti_strategy: "matrix" (chart lookup) or "letter_overlap"
        neutral_score: Score for missing MBTI, love-language or personality data
        both_empty_interests_score: Interests score when neither user lists any
        one_empty_interests_score: Interests score when only one user lists any
        same_city_score: Location score for the same city
        same_province_score: Location score for the same province
        different_province_score: Location score otherwise
        clamp_personality_inputs: Clamp Big Five inputs into [1, 5]
    """
    weights: ScoreWeights = field(default_factory=ScoreWeights)
    level_scores: Mapping[str, float] = field(
        default_factory=lambda: {level.value: score for level, score in LEVEL_SCORE.items()},
        hash=False
    )
    mbti_strategy: str = "matrix"
    neutral_score: float = 0.5
    both_empty_interests_score: float = 0.5
    one_empty_interests_score: float = 0.1
    same_city_score: float = 1.0
    same_province_score: float = 0.8
    different_province_score: float = 0.5
    clamp_personality_inputs: bool = False

    def __post_init__(self):
        object.__setattr__(self, "level_scores", MappingProxyType({
            str(k).lower(): float(v) for k, v in self.level_scores.items()
        }))

    def validate(self) -> None:
        """Validate configuration values."""
        self.weights.validate()
        if self.mbti_strategy not in MBTI_STRATEGIES:
            raise ValueError(f"Unknown MBTI strategy: {self.mbti_strategy}")
        for level, value in level_scores_from_dict(self.level_scores).items():
            if not 0 < value <= 1:
                raise ValueError(f"Level score for {level.value} must be in (0, 1], got {value}")
        for name in (
            "neutral_score", "both_empty_interests_score", "one_empty_interests_score",
            "same_city_score", "same_province_score", "different_province_score"
        ):
            value = getattr(self, name)
            if not 0 <= value <= 1:
                raise ValueError(f"{name} must be in [0, 1], got {value}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        d = {f.name: getattr(self, f.name) for f in fields(self)}
        d["weights"] = self.weights.as_dict()
        d["level_scores"] = dict(self.level_scores)
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ScoringConfig":
        """Create from dictionary."""
        d = dict(d)
        if isinstance(d.get("weights"), dict):
            d["weights"] = ScoreWeights(**d["weights"])
        if "level_scores" in d:
            defaults = dict(cls().level_scores)
            defaults.update({k.lower(): float(v) for k, v in d["level_scores"].items()})
            d["level_scores"] = defaults
        return cls(**d)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "ScoringConfig":
        """
        Create from main config dictionary.

        Args:
            config: Main config dictionary (see configs/config.yaml)

        Returns:
            ScoringConfig instance
        """
        scoring = config.get("scoring") or {}
        defaults = cls()

        weights = ScoreWeights(**scoring["weights"]) if scoring.get("weights") else defaults.weights

        mbti = scoring.get("mbti") or {}
        level_scores = dict(defaults.level_scores)
        level_scores.update({k.lower(): float(v) for k, v in (mbti.get("level_scores") or {}).items()})

        interests = scoring.get("interests") or {}
        location = scoring.get("location") or {}
        personality = scoring.get("personality") or {}

        return cls(
            weights=weights,
            level_scores=level_scores,
            mbti_strategy=mbti.get("strategy", defaults.mbti_strategy),
            neutral_score=scoring.get("neutral_score", defaults.neutral_score),
            both_empty_interests_score=interests.get("both_empty_score", defaults.both_empty_interests_score),
            one_empty_interests_score=interests.get("one_empty_score", defaults.one_empty_interests_score),
            same_city_score=location.get("same_city_score", defaults.same_city_score),
            same_province_score=location.get("same_province_score", defaults.same_province_score),
            different_province_score=location.get("different_province_score", defaults.different_province_score),
            clamp_personality_inputs=personality.get("clamp_inputs", defaults.clamp_personality_inputs)
        )

    def save(self, filepath: str) -> None:
        """Save configuration to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved scoring config to {filepath}")

    @classmethod
    def load(cls, filepath: str) -> "ScoringConfig":
        """Load configuration from JSON file."""
        with open(filepath, "r") as f:
            d = json.load(f)
        return cls.from_dict(d)


class CompatibilityEngine:
    """
    Compatibility scorer for pairs of users.

    Computes the five similarity sub-scores for a (current, candidate)
    pair and combines them with the configured weights. The MBTI chart
    is directional, so the current user is always the chart row.

    Attributes:
        config: ScoringConfig with scoring parameters
    """

    def __init__(self, config: Optional[ScoringConfig] = None):
        """
        Initialize the engine.

        Args:
            config: ScoringConfig instance (defaults to production rules)
        """
        self.config = config or ScoringConfig()
        self.config.validate()
        self._level_scores = level_scores_from_dict(self.config.level_scores)
        logger.debug(
            f"Initialized CompatibilityEngine with mbti_strategy={self.config.mbti_strategy}, "
            f"weights={self.config.weights.as_dict()}"
        )

    @staticmethod
    def is_excluded_pair(current: UserFeatures, candidate: UserFeatures) -> bool:
        """Return True if both users share the same binary gender."""
        return current.gender == candidate.gender and current.gender.is_binary

    def calculate_match_score(
        self,
        current: UserFeatures,
        candidate: UserFeatures
    ) -> MatchOutcome:
        """
        Calculate the match score between two users.

        Args:
            current: The requesting user's features (MBTI chart row)
            candidate: The candidate user's features (MBTI chart column)

        Returns:
            MatchScoreResult with all sub-scores, or Excluded for
            same binary-gender pairs
        """
        if self.is_excluded_pair(current, candidate):
            return Excluded(ExclusionReason.SAME_BINARY_GENDER)

        cfg = self.config

        if cfg.mbti_strategy == "letter_overlap":
            mbti_score = letter_overlap_similarity(current.mbti, candidate.mbti, cfg.neutral_score)
        else:
            mbti_score = mbti_similarity(
                current.mbti, candidate.mbti, self._level_scores, cfg.neutral_score
            )

        interests_score = interests_similarity(
            current.interests,
            candidate.interests,
            both_empty_score=cfg.both_empty_interests_score,
            one_empty_score=cfg.one_empty_interests_score
        )
        love_language_score = love_language_similarity(
            current.love_language, candidate.love_language, cfg.neutral_score
        )
        personality_score = personality_similarity(
            current.personality,
            candidate.personality,
            neutral_score=cfg.neutral_score,
            clamp_inputs=cfg.clamp_personality_inputs
        )
        location_score = location_similarity(
            current.location,
            candidate.location,
            same_city_score=cfg.same_city_score,
            same_province_score=cfg.same_province_score,
            different_province_score=cfg.different_province_score
        )

        w = cfg.weights
        total_score = (
            w.mbti * mbti_score
            + w.interests * interests_score
            + w.love_language * love_language_score
            + w.personality * personality_score
            + w.location * location_score
        )
        # float rounding can push a perfect pair a hair above 1
        total_score = min(total_score, 1.0)

        return MatchScoreResult(
            mbti_score=float(mbti_score),
            interests_score=float(interests_score),
            love_language_score=float(love_language_score),
            personality_score=float(personality_score),
            location_score=float(location_score),
            total_score=float(total_score)
        )


def create_engine_from_config(config: Dict[str, Any]) -> CompatibilityEngine:
    """
    Factory function to create CompatibilityEngine from config.

    Args:
        config: Main configuration dictionary

    Returns:
        Configured CompatibilityEngine instance
    """
    return CompatibilityEngine(ScoringConfig.from_config(config))


_DEFAULT_ENGINE = CompatibilityEngine()


def score(current: UserFeatures, candidate: UserFeatures) -> MatchOutcome:
    """Score a pair with the default production rules."""
    return _DEFAULT_ENGINE.calculate_match_score(current, candidate)
