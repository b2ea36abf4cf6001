"""Feature records and extraction from stored user rows."""

from .schema import (
    Gender,
    Location,
    MBTIType,
    UserFeatures,
    LOVE_LANGUAGE_FIELDS,
    PERSONALITY_FIELDS,
)
from .extraction import (
    age_from_birthday,
    features_from_records,
    record_to_features,
    split_interests,
)

__all__ = [
    "Gender",
    "Location",
    "MBTIType",
    "UserFeatures",
    "LOVE_LANGUAGE_FIELDS",
    "PERSONALITY_FIELDS",
    "age_from_birthday",
    "features_from_records",
    "record_to_features",
    "split_interests",
]
