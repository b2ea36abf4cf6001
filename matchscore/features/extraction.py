"""
Feature extraction from stored user records.

Maps a user's stored profile, personality and love-language rows into a
UserFeatures record. Rows are plain mappings keyed by the database column
names (snake_case), so any data-access layer can hand them over directly.

Missing rows are not an error: a user without a personality or
love-language row gets a None vector, which the engine scores as neutral.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from .schema import (
    LOVE_LANGUAGE_FIELDS,
    PERSONALITY_FIELDS,
    Location,
    UserFeatures,
)

logger = logging.getLogger(__name__)


def split_interests(value: Union[str, Sequence[str], None]) -> List[str]:
    """
    Split stored interests into a list of tokens.

    Interests are stored as a single comma-separated string; lists are
    accepted as well and each element is split the same way.

    Args:
        value: Stored interests (string, list of strings, or None)

    Returns:
        List of stripped, non-empty tokens in their original order
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    tokens = []
    for item in value:
        if item is None:
            continue
        tokens.extend(t.strip() for t in str(item).split(","))
    return [t for t in tokens if t]


def age_from_birthday(
    birthday: Union[str, date, datetime, None],
    today: Optional[date] = None
) -> Optional[int]:
    """
    Compute age in whole years.

    Args:
        birthday: Birthday as date, datetime or ISO-8601 string
        today: Reference date (defaults to the current date)

    Returns:
        Age in years, or None if birthday is missing
    """
    if birthday is None or birthday == "":
        return None
    if isinstance(birthday, str):
        birthday = datetime.fromisoformat(birthday.replace("Z", "+00:00"))
    if isinstance(birthday, datetime):
        birthday = birthday.date()

    today = today or date.today()
    age = today.year - birthday.year
    if (today.month, today.day) < (birthday.month, birthday.day):
        age -= 1
    return age


def _vector_from_row(
    row: Optional[Mapping[str, Any]],
    fields: Sequence[str],
    row_name: str
) -> Optional[List[float]]:
    if not row:
        return None
    missing = [f for f in fields if row.get(f) is None]
    if missing:
        logger.debug(f"{row_name} row is missing {missing}; treating as absent")
        return None
    return [float(row[f]) for f in fields]


def features_from_records(
    profile: Mapping[str, Any],
    personality: Optional[Mapping[str, Any]] = None,
    love_language: Optional[Mapping[str, Any]] = None
) -> UserFeatures:
    """
    Build a UserFeatures record from stored rows.

    Args:
        profile: Profile row (mbti, interests, province, city, gender)
        personality: Personality row with the five Big Five columns
        love_language: Love-language row with the five love-language columns

    Returns:
        UserFeatures for the user

    Raises:
        ValueError: If the profile holds an unknown MBTI code or gender
    """
    return UserFeatures(
        mbti=profile.get("mbti"),
        interests=tuple(split_interests(profile.get("interests"))),
        love_language=_vector_from_row(love_language, LOVE_LANGUAGE_FIELDS, "love_language"),
        personality=_vector_from_row(personality, PERSONALITY_FIELDS, "personality"),
        location=Location(
            province=profile.get("province") or "",
            city=profile.get("city") or ""
        ),
        gender=profile.get("gender")
    )


def record_to_features(record: Dict[str, Any]) -> UserFeatures:
    """Build UserFeatures from a nested user record (see data_loading)."""
    return features_from_records(
        record.get("profile") or {},
        record.get("personality"),
        record.get("love_language")
    )
