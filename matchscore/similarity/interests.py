"""
Interests similarity.

Interests are free text. Each side is joined with commas, re-split on
commas, stripped, lowercased and deduplicated, then scored as
intersection over union.
"""

import logging
from typing import FrozenSet, Iterable, Optional

logger = logging.getLogger(__name__)

BOTH_EMPTY_SCORE = 0.5
ONE_EMPTY_SCORE = 0.1


def normalize_interests(interests: Optional[Iterable[str]]) -> FrozenSet[str]:
    """
    Normalize interests into a set of comparable tokens.

    Args:
        interests: Interest strings, each possibly comma-separated

    Returns:
        Set of lowercase, whitespace-trimmed, non-empty tokens
    """
    if interests is None:
        return frozenset()
    if isinstance(interests, str):
        interests = [interests]
    joined = ",".join(str(item) for item in interests)
    return frozenset(
        token for token in (part.strip().lower() for part in joined.split(","))
        if token
    )


def interests_similarity(
    interests1: Optional[Iterable[str]],
    interests2: Optional[Iterable[str]],
    both_empty_score: float = BOTH_EMPTY_SCORE,
    one_empty_score: float = ONE_EMPTY_SCORE
) -> float:
    """
    Calculate interests similarity as shared tokens over all distinct tokens.

    Both sides are deduplicated before counting, so the score does not
    depend on argument order or on repeated tokens.

    Args:
        interests1: First user's interests
        interests2: Second user's interests
        both_empty_score: Score when neither user lists interests
        one_empty_score: Score when exactly one user lists interests

    Returns:
        Similarity score between 0 and 1
    """
    items1 = normalize_interests(interests1)
    items2 = normalize_interests(interests2)

    if not items1 and not items2:
        return both_empty_score
    if not items1 or not items2:
        return one_empty_score

    return len(items1 & items2) / len(items1 | items2)
