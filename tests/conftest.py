from pathlib import Path

import pytest

from matchscore.features import Location, UserFeatures
from matchscore.scoring import CompatibilityEngine

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def make_user(**overrides) -> UserFeatures:
    """Build a complete, middle-of-the-road user; override any field."""
    fields = {
        "mbti": "INFP",
        "interests": ("reading", "hiking"),
        "love_language": (5, 4, 3, 2, 1),
        "personality": (3, 3, 3, 3, 3),
        "location": Location(province="Seoul", city="Seoul"),
        "gender": "FEMALE",
    }
    fields.update(overrides)
    return UserFeatures(**fields)


@pytest.fixture
def engine():
    return CompatibilityEngine()


@pytest.fixture
def current_user():
    return make_user()


@pytest.fixture
def candidate_user():
    return make_user(mbti="ENFJ", interests=("hiking", "cooking"), gender="MALE")


@pytest.fixture
def sample_users_path():
    return PROJECT_ROOT / "data" / "sample_users.json"


@pytest.fixture
def config_path():
    return PROJECT_ROOT / "configs" / "config.yaml"
