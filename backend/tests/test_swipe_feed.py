import pytest
from sqlalchemy.exc import IntegrityError

from conftest import make_talent
from talenthub.models import Swipe
from talenthub.services import swipe_feed
from talenthub.services.swipe_feed import (
    FeedSession,
    FeedState,
    FeedStateError,
    SwipeRecordError,
    get_unseen_candidates,
    record_swipe_action,
)


def test_unseen_excludes_swiped_and_pitchless_talents(db):
    make_talent(db, talent_id="t1")
    make_talent(db, talent_id="t2")
    make_talent(db, talent_id="t3", video=False)
    make_talent(db, talent_id="t4")
    record_swipe_action(db, "emp", "t2", "passed")

    ids = [t.id for t in get_unseen_candidates(db, "emp")]

    assert ids == ["t1", "t4"]


def test_other_viewers_swipes_do_not_hide_candidates(db):
    make_talent(db, talent_id="t1")
    record_swipe_action(db, "someone-else", "t1", "liked")

    assert [t.id for t in get_unseen_candidates(db, "emp")] == ["t1"]


def test_repeated_swipe_overwrites_single_record(db):
    record_swipe_action(db, "emp", "t1", "liked")
    record_swipe_action(db, "emp", "t1", "liked")
    record_swipe_action(db, "emp", "t1", "passed")

    swipes = db.query(Swipe).all()
    assert len(swipes) == 1
    assert swipes[0].id == "emp_t1"
    assert swipes[0].status == "passed"


def test_insert_race_is_retried_as_update(db, session_factory, monkeypatch):
    real_upsert = swipe_feed._upsert_swipe
    calls = []

    def racing_upsert(db, key, employer_id, talent_id, status):
        calls.append(key)
        if len(calls) == 1:
            # Another request stores the same pair first
            other = session_factory()
            other.add(Swipe(id=key, employer_id=employer_id, talent_id=talent_id, status="passed"))
            other.commit()
            other.close()
            raise IntegrityError("INSERT INTO swipes", {}, Exception("UNIQUE constraint failed"))
        return real_upsert(db, key, employer_id, talent_id, status)

    monkeypatch.setattr(swipe_feed, "_upsert_swipe", racing_upsert)

    swipe = record_swipe_action(db, "emp", "t1", "liked")

    assert calls == ["emp_t1", "emp_t1"]
    assert swipe.status == "liked"
    assert db.query(Swipe).count() == 1


def test_second_insert_conflict_raises_record_error(db, monkeypatch):
    def always_conflicting(db, key, employer_id, talent_id, status):
        raise IntegrityError("INSERT INTO swipes", {}, Exception("UNIQUE constraint failed"))

    monkeypatch.setattr(swipe_feed, "_upsert_swipe", always_conflicting)

    with pytest.raises(SwipeRecordError):
        record_swipe_action(db, "emp", "t1", "liked")


def test_invalid_swipe_status_is_rejected(db):
    with pytest.raises(ValueError):
        record_swipe_action(db, "emp", "t1", "superliked")


def test_scenario_pool_of_three_with_two_pitches_gives_feed_of_two(db):
    make_talent(db, talent_id="t1")
    make_talent(db, talent_id="t2", video=False)
    make_talent(db, talent_id="t3")

    session = FeedSession("emp")
    session.load(db)

    assert session.state == FeedState.READY
    assert len(session.candidates) == 2
    assert session.current.id == "t1"


def test_like_advances_and_does_not_reshow_candidate(db):
    make_talent(db, talent_id="t1")
    make_talent(db, talent_id="t2")
    session = FeedSession("emp")
    session.load(db)

    next_candidate = session.like(db)

    assert session.index == 1
    assert next_candidate.id == "t2"
    assert session.current.id == "t2"
    assert session.liked is False
    assert db.get(Swipe, "emp_t1").status == "liked"


def test_swiping_past_last_candidate_fires_exhaustion_once(db):
    make_talent(db, talent_id="t1")
    make_talent(db, talent_id="t2")
    calls = []
    session = FeedSession("emp", on_exhausted=calls.append)
    session.load(db)

    session.pass_(db)
    assert calls == []
    assert session.save(db) is None

    assert session.state == FeedState.EXHAUSTED
    assert calls == ["emp"]
    with pytest.raises(FeedStateError):
        session.like(db)
    assert calls == ["emp"]


def test_empty_feed_is_exhausted_on_load(db):
    make_talent(db, talent_id="t1", video=False)
    calls = []
    session = FeedSession("emp", on_exhausted=calls.append)

    session.load(db)

    assert session.state == FeedState.EXHAUSTED
    assert session.current is None
    assert calls == ["emp"]


def test_failed_record_keeps_same_candidate(db, monkeypatch):
    make_talent(db, talent_id="t1")
    make_talent(db, talent_id="t2")
    session = FeedSession("emp")
    session.load(db)

    def failing_record(*args, **kwargs):
        raise SwipeRecordError("Failed to record swipe")

    monkeypatch.setattr(swipe_feed, "record_swipe_action", failing_record)

    with pytest.raises(SwipeRecordError):
        session.like(db)

    assert session.state == FeedState.READY
    assert session.index == 0
    assert session.current.id == "t1"
    assert session.liked is True


def test_session_does_not_refetch_mid_session(db):
    make_talent(db, talent_id="t1")
    session = FeedSession("emp")
    session.load(db)

    make_talent(db, talent_id="late")
    session.pass_(db)

    assert session.state == FeedState.EXHAUSTED

    session.load(db)
    assert [c.id for c in session.candidates] == ["late"]
