import pytest

from matchscore.features import MBTIType
from matchscore.similarity.mbti import (
    COMPATIBILITY_MATRIX,
    LEVEL_SCORE,
    CompatibilityLevel,
    compatibility_level,
    letter_overlap_similarity,
    level_scores_from_dict,
    mbti_similarity,
)


def test_missing_type_is_neutral():
    assert mbti_similarity(None, "INFP") == 0.5
    assert mbti_similarity("INFP", None) == 0.5
    assert mbti_similarity(None, None) == 0.5
    assert mbti_similarity("", "INFP") == 0.5


def test_same_type_uses_chart_level():
    expected = LEVEL_SCORE[COMPATIBILITY_MATRIX[MBTIType.INFP][MBTIType.INFP]]
    assert mbti_similarity("INFP", "INFP") == expected


def test_ideal_pair_scores_one():
    assert compatibility_level("INFP", "ENFJ") is CompatibilityLevel.IDEAL
    assert mbti_similarity("INFP", "ENFJ") == 1.0


def test_level_scores():
    assert LEVEL_SCORE[CompatibilityLevel.IDEAL] == 1.00
    assert LEVEL_SCORE[CompatibilityLevel.GOOD] == 0.85
    assert LEVEL_SCORE[CompatibilityLevel.ONE_SIDED] == 0.70
    assert LEVEL_SCORE[CompatibilityLevel.WORKABLE] == 0.55
    assert LEVEL_SCORE[CompatibilityLevel.CAUTION] == 0.40


def test_chart_covers_every_ordered_pair():
    assert len(COMPATIBILITY_MATRIX) == 16
    for row in MBTIType:
        assert len(COMPATIBILITY_MATRIX[row]) == 16
        for col in MBTIType:
            assert 0 < mbti_similarity(row, col) <= 1


def test_chart_samples():
    assert compatibility_level("ENFP", "INTJ") is CompatibilityLevel.IDEAL
    assert compatibility_level("INFJ", "ENTP") is CompatibilityLevel.IDEAL
    assert compatibility_level("INFP", "ESTJ") is CompatibilityLevel.CAUTION
    assert compatibility_level("ISFJ", "ISTJ") is CompatibilityLevel.GOOD
    assert compatibility_level("INTJ", "ISFP") is CompatibilityLevel.WORKABLE
    assert compatibility_level("INTJ", "ISFJ") is CompatibilityLevel.ONE_SIDED


def test_codes_are_case_insensitive():
    assert mbti_similarity("infp", "enfj") == mbti_similarity("INFP", "ENFJ")


def test_unknown_code_raises():
    with pytest.raises(ValueError):
        mbti_similarity("XXXX", "INFP")


def test_chart_is_read_only():
    with pytest.raises(TypeError):
        COMPATIBILITY_MATRIX[MBTIType.INFP][MBTIType.ENFJ] = CompatibilityLevel.CAUTION
    with pytest.raises(TypeError):
        COMPATIBILITY_MATRIX[MBTIType.INFP] = {}


def test_custom_level_scores():
    scores = level_scores_from_dict({"ideal": 0.9})
    assert mbti_similarity("INFP", "ENFJ", level_scores=scores) == 0.9
    assert mbti_similarity("INFP", "INFP", level_scores=scores) == 0.85


def test_unknown_level_name_rejected():
    with pytest.raises(ValueError):
        level_scores_from_dict({"soulmate": 1.0})


def test_letter_overlap():
    assert letter_overlap_similarity("INFP", "INFP") == 1.0
    assert letter_overlap_similarity("INFP", "ENFP") == 0.75
    assert letter_overlap_similarity("INFP", "ESTJ") == 0.0
    assert letter_overlap_similarity(None, "ESTJ") == 0.5
