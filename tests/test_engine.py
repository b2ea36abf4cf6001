import numpy as np
import pytest

from matchscore.features import MBTIType
from matchscore.scoring import (
    CompatibilityEngine,
    Excluded,
    ExclusionReason,
    MatchScoreResult,
    ScoreWeights,
    ScoringConfig,
    is_excluded,
    score,
)
from matchscore.scoring import engine as engine_module

from tests.conftest import make_user


def test_default_weights_sum_to_one():
    weights = ScoreWeights()
    assert weights.total() == pytest.approx(1.0)
    assert weights.as_dict() == {
        "mbti": 0.15,
        "interests": 0.25,
        "love_language": 0.15,
        "personality": 0.30,
        "location": 0.15,
    }


def test_end_to_end_scenario(engine, current_user, candidate_user):
    result = engine.calculate_match_score(current_user, candidate_user)

    assert isinstance(result, MatchScoreResult)
    assert result.mbti_score == 1.0
    assert result.interests_score == pytest.approx(1 / 3)
    assert result.love_language_score == 1.0
    assert result.personality_score == 1.0
    assert result.location_score == 1.0
    assert result.total_score == pytest.approx(0.8333, abs=1e-4)
    assert result.compatibility_percentage == 83


@pytest.mark.parametrize("gender", ["MALE", "FEMALE"])
def test_same_binary_gender_is_excluded(engine, gender):
    a = make_user(gender=gender)
    b = make_user(gender=gender, mbti="ENFJ")
    outcome = engine.calculate_match_score(a, b)
    assert outcome == Excluded(ExclusionReason.SAME_BINARY_GENDER)
    assert is_excluded(outcome)


def test_exclusion_ignores_other_fields(engine):
    a = make_user(gender="MALE", mbti=None, interests=(), personality=None, love_language=None)
    b = make_user(gender="MALE", location=None)
    assert is_excluded(engine.calculate_match_score(a, b))


@pytest.mark.parametrize("gender_a, gender_b", [
    ("MALE", "FEMALE"),
    ("FEMALE", "MALE"),
    ("NON_BINARY", "NON_BINARY"),
    ("OTHER", "OTHER"),
    (None, None),
    ("MALE", "NON_BINARY"),
    ("FEMALE", "OTHER"),
])
def test_other_gender_combinations_are_scored(engine, gender_a, gender_b):
    outcome = engine.calculate_match_score(make_user(gender=gender_a), make_user(gender=gender_b))
    assert isinstance(outcome, MatchScoreResult)
    assert not is_excluded(outcome)


def test_current_user_is_chart_row(monkeypatch, current_user, candidate_user):
    calls = []

    def fake_mbti_similarity(mbti1, mbti2, level_scores=None, neutral_score=0.5):
        calls.append((mbti1, mbti2))
        return 0.5

    monkeypatch.setattr(engine_module, "mbti_similarity", fake_mbti_similarity)
    CompatibilityEngine().calculate_match_score(current_user, candidate_user)
    assert calls == [(MBTIType.INFP, MBTIType.ENFJ)]


def test_incomplete_profiles_degrade_to_neutral(engine):
    a = make_user(mbti=None, interests=(), love_language=(1, 2), personality=None,
                  location=None, gender="FEMALE")
    b = make_user(mbti=None, interests=(), love_language=None, personality=(3, 3, 3),
                  location=None, gender="MALE")
    result = engine.calculate_match_score(a, b)
    assert result.mbti_score == 0.5
    assert result.interests_score == 0.5
    assert result.love_language_score == 0.5
    assert result.personality_score == 0.5
    assert result.location_score == 0.5
    assert result.total_score == pytest.approx(0.5)


def test_scores_stay_in_range(engine):
    rng = np.random.RandomState(11)
    types = list(MBTIType)
    interests = ["reading", "hiking", "music", "movies", "travel", "cooking"]
    provinces = ["Seoul", "Busan", "Gyeonggi"]

    for _ in range(200):
        users = []
        for gender in ("FEMALE", "MALE"):
            users.append(make_user(
                mbti=types[rng.randint(len(types))] if rng.rand() > 0.1 else None,
                interests=tuple(rng.choice(interests, size=rng.randint(0, 4), replace=False)),
                love_language=tuple(rng.randint(1, 101, size=5)),
                personality=tuple(rng.randint(1, 6, size=5)),
                location={"province": provinces[rng.randint(3)], "city": provinces[rng.randint(3)]},
                gender=gender
            ))
        result = engine.calculate_match_score(users[0], users[1])
        for value in result.to_dict().values():
            assert 0.0 <= value <= 1.0


def test_perfect_pair_total_is_exactly_bounded(engine):
    a = make_user(mbti="INFP", interests=("a",))
    b = make_user(mbti="ENFJ", interests=("a",), gender="MALE")
    result = engine.calculate_match_score(a, b)
    assert result.total_score == pytest.approx(1.0)
    assert result.total_score <= 1.0


def test_letter_overlap_strategy(current_user, candidate_user):
    engine = CompatibilityEngine(ScoringConfig(mbti_strategy="letter_overlap"))
    result = engine.calculate_match_score(current_user, candidate_user)
    # INFP vs ENFJ: two letters differ
    assert result.mbti_score == 0.5


def test_custom_weights(current_user, candidate_user):
    weights = ScoreWeights(mbti=0.0, interests=1.0, love_language=0.0, personality=0.0, location=0.0)
    engine = CompatibilityEngine(ScoringConfig(weights=weights))
    result = engine.calculate_match_score(current_user, candidate_user)
    assert result.total_score == pytest.approx(1 / 3)


@pytest.mark.parametrize("config", [
    ScoringConfig(weights=ScoreWeights(mbti=0.5)),
    ScoringConfig(weights=ScoreWeights(mbti=-0.05, interests=0.45)),
    ScoringConfig(mbti_strategy="socionics"),
    ScoringConfig(level_scores={"ideal": 1.5}),
    ScoringConfig(neutral_score=2.0),
])
def test_invalid_config_rejected(config):
    with pytest.raises(ValueError):
        CompatibilityEngine(config)


def test_module_level_score(current_user, candidate_user):
    assert score(current_user, candidate_user) == CompatibilityEngine().calculate_match_score(
        current_user, candidate_user
    )


def test_result_to_dict_uses_api_keys(engine, current_user, candidate_user):
    result = engine.calculate_match_score(current_user, candidate_user)
    assert list(result.to_dict()) == [
        "mbtiScore", "interestsScore", "loveLanguageScore",
        "personalityScore", "locationScore", "totalScore",
    ]


def test_excluded_to_dict():
    assert Excluded().to_dict() == {"excluded": True, "reason": "same_binary_gender"}
