"""Location similarity based on province and city."""

from ..features.schema import Location

SAME_CITY_SCORE = 1.0
SAME_PROVINCE_SCORE = 0.8
DIFFERENT_PROVINCE_SCORE = 0.5


def location_similarity(
    location1: Location,
    location2: Location,
    same_city_score: float = SAME_CITY_SCORE,
    same_province_score: float = SAME_PROVINCE_SCORE,
    different_province_score: float = DIFFERENT_PROVINCE_SCORE
) -> float:
    """
    Calculate location similarity.

    Cities and provinces are compared as stored (case-sensitive). An empty
    string never counts as a match, so two users with unknown locations
    get the neutral floor rather than a same-city score.

    Args:
        location1: First user's location
        location2: Second user's location

    Returns:
        same_city_score, same_province_score or different_province_score
    """
    if location1.city and location1.city == location2.city:
        return same_city_score
    if location1.province and location1.province == location2.province:
        return same_province_score
    return different_province_score
