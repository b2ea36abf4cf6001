"""
Feed ranking for a requesting user.

Scores every candidate against the current user, drops excluded pairs,
converts the total to a display percentage and applies the optional
feed filters:

- age: exact age match
- gender: candidate gender
- location: candidate city or province

Entries are sorted by compatibility percentage, highest first. Candidates
with equal percentages keep their input order.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

import pandas as pd

from ..features.schema import Gender, UserFeatures
from ..scoring.engine import CompatibilityEngine
from ..scoring.result import MatchScoreResult, is_excluded

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeedCandidate:
    """A candidate user with features and display fields."""
    user_id: int
    features: UserFeatures
    nickname: str = ""
    age: Optional[int] = None
    profile_image_url: Optional[str] = None


@dataclass
class FeedFilter:
    """
    Optional feed filters.

    Attributes:
        age: Keep candidates of exactly this age
        gender: Keep candidates of this gender
        location: Keep candidates whose city or province equals this value
    """
    age: Optional[int] = None
    gender: Optional[Gender] = None
    location: Optional[str] = None

    def __post_init__(self):
        if self.gender is not None:
            self.gender = Gender.parse(self.gender)

    def matches(self, entry: "FeedEntry") -> bool:
        if self.age is not None and entry.age != self.age:
            return False
        if self.gender is not None and entry.gender != self.gender:
            return False
        if (
            self.location
            and entry.city != self.location
            and entry.province != self.location
        ):
            return False
        return True


@dataclass(frozen=True)
class FeedEntry:
    """One ranked feed row."""
    user_id: int
    nickname: str
    age: Optional[int]
    gender: Gender
    province: str
    city: str
    profile_image_url: Optional[str]
    compatibility_score: int
    result: MatchScoreResult = field(repr=False)


def rank_candidates(
    engine: CompatibilityEngine,
    current: UserFeatures,
    candidates: Iterable[FeedCandidate],
    filters: Optional[FeedFilter] = None
) -> List[FeedEntry]:
    """
    Build the ranked feed for the current user.

    Args:
        engine: Compatibility engine used for scoring
        current: The requesting user's features
        candidates: Candidate users
        filters: Optional feed filters

    Returns:
        Feed entries sorted by compatibility percentage, descending
    """
    entries = []
    n_excluded = 0

    for candidate in candidates:
        outcome = engine.calculate_match_score(current, candidate.features)
        if is_excluded(outcome):
            n_excluded += 1
            continue

        features = candidate.features
        entries.append(FeedEntry(
            user_id=candidate.user_id,
            nickname=candidate.nickname or "",
            age=candidate.age,
            gender=features.gender,
            province=features.location.province,
            city=features.location.city,
            profile_image_url=candidate.profile_image_url,
            compatibility_score=outcome.compatibility_percentage,
            result=outcome
        ))

    if filters is not None:
        entries = [e for e in entries if filters.matches(e)]

    logger.info(f"Ranked {len(entries)} candidates ({n_excluded} excluded)")
    return sorted(entries, key=lambda e: e.compatibility_score, reverse=True)


FEED_COLUMNS = [
    "user_id", "nickname", "age", "gender", "province", "city",
    "compatibility_score", "total_score", "mbti_score", "interests_score",
    "love_language_score", "personality_score", "location_score",
]


def feed_to_frame(entries: List[FeedEntry]) -> pd.DataFrame:
    """
    Convert feed entries to a DataFrame with every sub-score.

    Args:
        entries: Ranked feed entries

    Returns:
        DataFrame with one row per entry, in feed order
    """
    rows = []
    for entry in entries:
        r = entry.result
        rows.append({
            "user_id": entry.user_id,
            "nickname": entry.nickname,
            "age": entry.age,
            "gender": entry.gender.value,
            "province": entry.province,
            "city": entry.city,
            "compatibility_score": entry.compatibility_score,
            "total_score": r.total_score,
            "mbti_score": r.mbti_score,
            "interests_score": r.interests_score,
            "love_language_score": r.love_language_score,
            "personality_score": r.personality_score,
            "location_score": r.location_score,
        })
    return pd.DataFrame(rows, columns=FEED_COLUMNS)
