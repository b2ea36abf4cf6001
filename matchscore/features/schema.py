"""
Input schema for compatibility scoring.

Defines the per-user feature record the engine consumes. Records are
built by the caller from stored profile, personality and love-language
rows (see extraction.py) and are immutable once constructed.

Vector orders:
- Love language: words of affirmation, acts of service, receiving gifts,
  quality time, physical touch (intended range 1-100)
- Personality: openness, conscientiousness, extraversion, agreeableness,
  neuroticism (Likert-derived, intended range 1-5)

Vector lengths are not validated here. A wrong-length vector is scored
as neutral by the similarity functions. A vector with a missing or
non-finite entry is treated as absent (None).
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any, Tuple, Sequence, Union

logger = logging.getLogger(__name__)

LOVE_LANGUAGE_FIELDS = (
    "words_of_affirmation",
    "acts_of_service",
    "receiving_gifts",
    "quality_time",
    "physical_touch",
)

PERSONALITY_FIELDS = (
    "openness",
    "conscientiousness",
    "extraversion",
    "agreeableness",
    "neuroticism",
)


class Gender(Enum):
    """Gender options as stored on user profiles."""
    MALE = "MALE"
    FEMALE = "FEMALE"
    NON_BINARY = "NON_BINARY"
    OTHER = "OTHER"
    UNSPECIFIED = "UNSPECIFIED"

    @property
    def is_binary(self) -> bool:
        return self in (Gender.MALE, Gender.FEMALE)

    @classmethod
    def parse(cls, value: Union["Gender", str, None]) -> "Gender":
        """
        Coerce a stored gender value to a Gender.

        Args:
            value: Gender member, case-insensitive name, or None

        Returns:
            Gender member (UNSPECIFIED for None or empty strings)

        Raises:
            ValueError: If the string is not a known gender
        """
        if isinstance(value, cls):
            return value
        if value is None or not str(value).strip():
            return cls.UNSPECIFIED
        normalized = str(value).strip().upper().replace("-", "_")
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unknown gender: {value!r}") from None


class MBTIType(Enum):
    """The 16 four-letter MBTI personality types."""
    INFP = "INFP"
    ENFP = "ENFP"
    INFJ = "INFJ"
    ENFJ = "ENFJ"
    INTJ = "INTJ"
    ENTJ = "ENTJ"
    INTP = "INTP"
    ENTP = "ENTP"
    ISFP = "ISFP"
    ESFP = "ESFP"
    ISTP = "ISTP"
    ESTP = "ESTP"
    ISFJ = "ISFJ"
    ESFJ = "ESFJ"
    ISTJ = "ISTJ"
    ESTJ = "ESTJ"

    @classmethod
    def parse(cls, value: Union["MBTIType", str, None]) -> Optional["MBTIType"]:
        """
        Coerce an MBTI code to an MBTIType.

        Codes are matched case-insensitively. None and empty strings mean
        "unknown" and return None.

        Raises:
            ValueError: If the code is not one of the 16 canonical types
        """
        if isinstance(value, cls):
            return value
        if value is None or not str(value).strip():
            return None
        code = str(value).strip().upper()
        try:
            return cls(code)
        except ValueError:
            raise ValueError(f"Unknown MBTI type: {value!r}") from None


@dataclass(frozen=True)
class Location:
    """Coarse user location. Empty strings mean the part is unknown."""
    province: str = ""
    city: str = ""

    def __post_init__(self):
        object.__setattr__(self, "province", self.province or "")
        object.__setattr__(self, "city", self.city or "")

    def to_dict(self) -> Dict[str, str]:
        return {"province": self.province, "city": self.city}


def _as_vector(
    values: Optional[Sequence[float]],
    name: str
) -> Optional[Tuple[float, ...]]:
    if values is None:
        return None
    vector = []
    for value in values:
        if value is None:
            logger.debug(f"{name} vector has a missing entry; treating as absent")
            return None
        value = float(value)
        if not math.isfinite(value):
            logger.debug(f"{name} vector has a non-finite entry; treating as absent")
            return None
        vector.append(value)
    return tuple(vector)


@dataclass(frozen=True)
class UserFeatures:
    """
    Feature record for one user, as consumed by the compatibility engine.

    Attributes:
        mbti: MBTI type, or None when unknown
        interests: Free-text interest tokens (may be comma-joined strings)
        love_language: Five love-language scores, or None when missing
        personality: Five Big Five scores, or None when missing
        location: Province and city
        gender: Profile gender
    """
    mbti: Optional[MBTIType] = None
    interests: Tuple[str, ...] = ()
    love_language: Optional[Tuple[float, ...]] = None
    personality: Optional[Tuple[float, ...]] = None
    location: Location = field(default_factory=Location)
    gender: Gender = Gender.UNSPECIFIED

    def __post_init__(self):
        """Coerce loosely typed inputs and validate codes at the boundary."""
        object.__setattr__(self, "mbti", MBTIType.parse(self.mbti))
        object.__setattr__(self, "gender", Gender.parse(self.gender))

        interests = self.interests
        if interests is None:
            interests = ()
        elif isinstance(interests, str):
            interests = (interests,)
        object.__setattr__(self, "interests", tuple(str(i) for i in interests))

        object.__setattr__(self, "love_language", _as_vector(self.love_language, "love_language"))
        object.__setattr__(self, "personality", _as_vector(self.personality, "personality"))

        location = self.location
        if location is None:
            location = Location()
        elif isinstance(location, dict):
            location = Location(
                province=location.get("province") or "",
                city=location.get("city") or ""
            )
        object.__setattr__(self, "location", location)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "mbti": self.mbti.value if self.mbti else None,
            "interests": list(self.interests),
            "love_language": list(self.love_language) if self.love_language is not None else None,
            "personality": list(self.personality) if self.personality is not None else None,
            "location": self.location.to_dict(),
            "gender": self.gender.value
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserFeatures":
        """
        Create from dictionary.

        Accepts both snake_case and the camelCase keys used by the
        HTTP API ("loveLanguage", "loveLang").
        """
        love_language = data.get("love_language")
        if love_language is None:
            love_language = data.get("loveLanguage", data.get("loveLang"))

        return cls(
            mbti=data.get("mbti"),
            interests=data.get("interests") or (),
            love_language=love_language,
            personality=data.get("personality"),
            location=data.get("location"),
            gender=data.get("gender")
        )
