import json
from datetime import date

import pytest

from matchscore.data_loading import (
    candidates_from_records,
    find_record,
    load_user_records,
)
from matchscore.features import Gender, MBTIType, record_to_features


def test_load_json(sample_users_path):
    records = load_user_records(str(sample_users_path))
    assert len(records) == 6
    assert find_record(records, 1)["profile"]["mbti"] == "INFP"


def test_load_csv(tmp_path):
    path = tmp_path / "users.csv"
    path.write_text(
        "id,nickname,birthday,gender,mbti,interests,province,city,"
        "openness,conscientiousness,extraversion,agreeableness,neuroticism,"
        "words_of_affirmation,acts_of_service,receiving_gifts,quality_time,physical_touch\n"
        '1,minji,1997-05-14,FEMALE,INFP,"reading, hiking",Seoul,Seoul,3,3,3,3,3,5,4,3,2,1\n'
        "2,junho,1995-11-02,MALE,,,Seoul,,,,,,,,,,,\n"
    )

    records = load_user_records(str(path))

    assert [r["id"] for r in records] == [1, 2]
    first = record_to_features(records[0])
    assert first.mbti is MBTIType.INFP
    assert first.interests == ("reading", "hiking")
    assert first.personality == (3.0, 3.0, 3.0, 3.0, 3.0)
    assert first.love_language == (5.0, 4.0, 3.0, 2.0, 1.0)

    second = record_to_features(records[1])
    assert records[1]["personality"] is None
    assert second.mbti is None
    assert second.interests == ()
    assert second.love_language is None
    assert second.location.city == ""
    assert second.gender is Gender.MALE


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_user_records(str(tmp_path / "nope.json"))


def test_unsupported_format(tmp_path):
    path = tmp_path / "users.txt"
    path.write_text("1")
    with pytest.raises(ValueError):
        load_user_records(str(path))


def test_empty_json(tmp_path):
    path = tmp_path / "users.json"
    path.write_text(json.dumps([]))
    with pytest.raises(ValueError):
        load_user_records(str(path))


def test_find_record_unknown_id(sample_users_path):
    records = load_user_records(str(sample_users_path))
    with pytest.raises(KeyError):
        find_record(records, 99)


def test_candidates_exclude_current_user(sample_users_path):
    records = load_user_records(str(sample_users_path))
    candidates = candidates_from_records(records, exclude_user_id=1, today=date(2024, 6, 1))
    assert [c.user_id for c in candidates] == [2, 3, 4, 5, 6]
    assert candidates[0].nickname == "junho"
    assert candidates[0].age == 28
    assert candidates[2].features.love_language is None
