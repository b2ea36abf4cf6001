"""
Output records of compatibility scoring.

A scoring call produces either a MatchScoreResult carrying all five
sub-scores and the weighted total, or an Excluded record when the pair
is not eligible. There is no partial result.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Union


class ExclusionReason(Enum):
    """Why a pair was not scored."""
    SAME_BINARY_GENDER = "same_binary_gender"


@dataclass(frozen=True)
class Excluded:
    """Sentinel returned instead of a score for ineligible pairs."""
    reason: ExclusionReason = ExclusionReason.SAME_BINARY_GENDER

    def to_dict(self) -> Dict[str, Any]:
        return {"excluded": True, "reason": self.reason.value}


def to_percentage(score: float) -> int:
    """Convert a [0, 1] score to a whole percentage, rounding halves up."""
    return int(math.floor(score * 100 + 0.5))


@dataclass(frozen=True)
class MatchScoreResult:
    """
    Result of compatibility scoring.

    Attributes:
        mbti_score: MBTI chart score [0, 1]
        interests_score: Interests overlap score [0, 1]
        love_language_score: Love-language rank agreement [0, 1]
        personality_score: Big Five closeness [0, 1]
        location_score: Location proximity [0, 1]
        total_score: Weighted sum of the five sub-scores [0, 1]
    """
    mbti_score: float
    interests_score: float
    love_language_score: float
    personality_score: float
    location_score: float
    total_score: float

    @property
    def compatibility_percentage(self) -> int:
        """Total score as a display percentage (0-100)."""
        return to_percentage(self.total_score)

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary using the API's camelCase keys."""
        return {
            "mbtiScore": self.mbti_score,
            "interestsScore": self.interests_score,
            "loveLanguageScore": self.love_language_score,
            "personalityScore": self.personality_score,
            "locationScore": self.location_score,
            "totalScore": self.total_score
        }


MatchOutcome = Union[MatchScoreResult, Excluded]


def is_excluded(outcome: MatchOutcome) -> bool:
    """Return True if the outcome is the exclusion sentinel."""
    return isinstance(outcome, Excluded)
