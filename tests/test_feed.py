from matchscore.feed import FeedCandidate, FeedFilter, feed_to_frame, rank_candidates
from matchscore.features import Gender, Location

from tests.conftest import make_user


def _candidates():
    return [
        FeedCandidate(1, make_user(mbti="ESTP", interests=("gaming",), gender="MALE",
                                   location=Location("Busan", "Haeundae")), nickname="far", age=30),
        FeedCandidate(2, make_user(mbti="ENFJ", gender="MALE"), nickname="close", age=28),
        FeedCandidate(3, make_user(gender="FEMALE"), nickname="excluded", age=27),
        FeedCandidate(4, make_user(mbti=None, gender="NON_BINARY",
                                   location=Location("Seoul", "Mapo")), nickname="nb", age=28),
    ]


def test_rank_orders_by_percentage_and_drops_excluded(engine):
    current = make_user(gender="FEMALE")
    entries = rank_candidates(engine, current, _candidates())

    assert [e.user_id for e in entries] == [2, 4, 1]
    scores = [e.compatibility_score for e in entries]
    assert scores == sorted(scores, reverse=True)
    assert entries[0].compatibility_score == 100
    assert entries[0].result.total_score <= 1.0


def test_filters(engine):
    current = make_user(gender="FEMALE")

    by_age = rank_candidates(engine, current, _candidates(), FeedFilter(age=28))
    assert {e.user_id for e in by_age} == {2, 4}

    by_gender = rank_candidates(engine, current, _candidates(), FeedFilter(gender="non_binary"))
    assert [e.user_id for e in by_gender] == [4]

    by_city = rank_candidates(engine, current, _candidates(), FeedFilter(location="Mapo"))
    assert [e.user_id for e in by_city] == [4]

    by_province = rank_candidates(engine, current, _candidates(), FeedFilter(location="Busan"))
    assert [e.user_id for e in by_province] == [1]


def test_filter_gender_is_parsed():
    assert FeedFilter(gender="male").gender is Gender.MALE


def test_feed_to_frame(engine):
    entries = rank_candidates(engine, make_user(gender="FEMALE"), _candidates())
    frame = feed_to_frame(entries)
    assert list(frame["user_id"]) == [2, 4, 1]
    assert frame.loc[0, "gender"] == "MALE"
    assert {"total_score", "mbti_score", "location_score"} <= set(frame.columns)


def test_feed_to_frame_empty():
    frame = feed_to_frame([])
    assert frame.empty
    assert "compatibility_score" in frame.columns
