"""
MBTI compatibility lookup.

Scores a pair of MBTI types with a hand-authored 16x16 compatibility chart
(Dan Johnston's simplified chart). Each ordered pair maps to one of five
levels, and each level maps to a fixed score:

    IDEAL      1.00
    GOOD       0.85
    ONE_SIDED  0.70
    WORKABLE   0.55
    CAUTION    0.40

The chart is directional: it is looked up as MATRIX[row][col] with the
current user as the row. It must never be symmetrised.

An alternative letter-overlap score (1 - mismatched letters / 4) is kept
for configurations that select the "letter_overlap" strategy.
"""

import logging
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union

from ..features.schema import MBTIType

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 0.5


class CompatibilityLevel(Enum):
    """Discrete compatibility levels of the MBTI chart."""
    IDEAL = "ideal"
    GOOD = "good"
    ONE_SIDED = "one_sided"
    WORKABLE = "workable"
    CAUTION = "caution"


LEVEL_SCORE: Mapping[CompatibilityLevel, float] = MappingProxyType({
    CompatibilityLevel.IDEAL: 1.00,
    CompatibilityLevel.GOOD: 0.85,
    CompatibilityLevel.ONE_SIDED: 0.70,
    CompatibilityLevel.WORKABLE: 0.55,
    CompatibilityLevel.CAUTION: 0.40,
})

# Column order of the chart below
_CHART_ORDER = (
    "INFP", "ENFP", "INFJ", "ENFJ", "INTJ", "ENTJ", "INTP", "ENTP",
    "ISFP", "ESFP", "ISTP", "ESTP", "ISFJ", "ESFJ", "ISTJ", "ESTJ",
)

# I = IDEAL, G = GOOD, O = ONE_SIDED, W = WORKABLE, C = CAUTION
_CHART = {
    #        INFP ENFP INFJ ENFJ INTJ ENTJ INTP ENTP ISFP ESFP ISTP ESTP ISFJ ESFJ ISTJ ESTJ
    "INFP": "G    G    G    I    G    I    G    G    C    C    C    C    C    C    C    C",
    "ENFP": "G    G    I    G    I    G    G    G    C    C    C    C    C    C    C    C",
    "INFJ": "G    I    G    G    G    G    G    I    C    C    C    C    C    C    C    C",
    "ENFJ": "I    G    G    G    G    G    G    G    I    C    C    C    C    C    C    C",
    "INTJ": "G    I    G    G    G    G    G    I    W    W    W    W    O    O    O    O",
    "ENTJ": "I    G    G    G    G    G    I    G    W    W    W    W    W    W    W    W",
    "INTP": "G    G    G    G    G    I    G    G    W    W    W    W    O    O    O    I",
    "ENTP": "G    G    I    G    I    G    G    G    W    W    W    W    O    O    O    O",
    "ISFP": "C    C    C    I    W    W    W    W    O    O    O    O    W    I    W    I",
    "ESFP": "C    C    C    C    W    W    W    W    O    O    O    O    I    W    I    W",
    "ISTP": "C    C    C    C    W    W    W    W    O    O    O    O    W    I    W    I",
    "ESTP": "C    C    C    C    W    W    W    W    O    O    O    O    I    W    I    W",
    "ISFJ": "C    C    C    C    O    W    O    O    W    I    W    I    G    G    G    G",
    "ESFJ": "C    C    C    C    O    W    O    O    I    W    I    W    G    G    G    G",
    "ISTJ": "C    C    C    C    O    W    O    O    W    I    W    I    G    G    G    G",
    "ESTJ": "C    C    C    C    O    W    I    O    I    W    I    W    G    G    G    G",
}

_LEVEL_CODES = {
    "I": CompatibilityLevel.IDEAL,
    "G": CompatibilityLevel.GOOD,
    "O": CompatibilityLevel.ONE_SIDED,
    "W": CompatibilityLevel.WORKABLE,
    "C": CompatibilityLevel.CAUTION,
}


def _build_matrix() -> Mapping[MBTIType, Mapping[MBTIType, CompatibilityLevel]]:
    """Expand the literal chart into a read-only nested mapping."""
    columns = [MBTIType(code) for code in _CHART_ORDER]
    matrix = {}
    for row_code, cells in _CHART.items():
        levels = cells.split()
        if len(levels) != len(columns):
            raise ValueError(f"Chart row {row_code} has {len(levels)} cells, expected {len(columns)}")
        matrix[MBTIType(row_code)] = MappingProxyType({
            col: _LEVEL_CODES[code] for col, code in zip(columns, levels)
        })
    return MappingProxyType(matrix)


COMPATIBILITY_MATRIX = _build_matrix()


def compatibility_level(
    mbti1: Union[MBTIType, str],
    mbti2: Union[MBTIType, str]
) -> CompatibilityLevel:
    """Look up the chart level for the ordered pair (mbti1 row, mbti2 column)."""
    return COMPATIBILITY_MATRIX[MBTIType.parse(mbti1)][MBTIType.parse(mbti2)]


def mbti_similarity(
    mbti1: Optional[Union[MBTIType, str]],
    mbti2: Optional[Union[MBTIType, str]],
    level_scores: Optional[Mapping[CompatibilityLevel, float]] = None,
    neutral_score: float = NEUTRAL_SCORE
) -> float:
    """
    Calculate MBTI similarity from the compatibility chart.

    Args:
        mbti1: First user's type (chart row)
        mbti2: Second user's type (chart column)
        level_scores: Score per level (defaults to LEVEL_SCORE)
        neutral_score: Score returned when either type is unknown

    Returns:
        Similarity score between 0 and 1
    """
    type1 = MBTIType.parse(mbti1)
    type2 = MBTIType.parse(mbti2)
    if type1 is None or type2 is None:
        return neutral_score

    scores = level_scores if level_scores is not None else LEVEL_SCORE
    return float(scores[COMPATIBILITY_MATRIX[type1][type2]])


def letter_overlap_similarity(
    mbti1: Optional[Union[MBTIType, str]],
    mbti2: Optional[Union[MBTIType, str]],
    neutral_score: float = NEUTRAL_SCORE
) -> float:
    """
    Calculate MBTI similarity from the number of matching letters.

    Returns:
        1 - mismatches / 4, or neutral_score when either type is unknown
    """
    type1 = MBTIType.parse(mbti1)
    type2 = MBTIType.parse(mbti2)
    if type1 is None or type2 is None:
        return neutral_score

    mismatches = sum(1 for a, b in zip(type1.value, type2.value) if a != b)
    return 1 - mismatches / 4


def level_scores_from_dict(d: Dict[str, float]) -> Mapping[CompatibilityLevel, float]:
    """
    Build a level-score table from a config mapping.

    Keys are level names ("ideal", "IDEAL", ...). Levels not present keep
    their default score.
    """
    scores = dict(LEVEL_SCORE)
    for key, value in d.items():
        try:
            level = CompatibilityLevel[key.upper()]
        except KeyError:
            raise ValueError(f"Unknown compatibility level: {key}") from None
        scores[level] = float(value)
    return MappingProxyType(scores)
