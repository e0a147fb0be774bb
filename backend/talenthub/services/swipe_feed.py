"""
Swipe feed.

Computes the candidates an employer has not swiped on yet and walks them one
at a time. A feed session loads the whole unseen set once and never
re-fetches; candidates that become eligible mid-session show up on the next
load.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from talenthub.models import Swipe, Talent
from talenthub.models.swipe import SWIPE_STATUSES, swipe_key
from talenthub.schemas.profile import TalentProfileOut, talent_to_out

logger = logging.getLogger("swipe_feed")


class SwipeRecordError(Exception):
    """The swipe could not be persisted."""


class FeedStateError(Exception):
    """An operation was attempted in a state that does not allow it."""


class FeedState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ADVANCING = "advancing"
    EXHAUSTED = "exhausted"


# ============== Store Operations ==============


def get_seen_talent_ids(db: Session, viewer_id: str) -> set[str]:
    rows = db.query(Swipe.talent_id).filter(Swipe.employer_id == viewer_id).all()
    return {row[0] for row in rows}


def get_unseen_candidates(db: Session, viewer_id: str) -> list[Talent]:
    """
    Talents the viewer has not swiped on and that have a video pitch.

    Order is store order (insertion); no ranking is applied.
    """
    seen = get_seen_talent_ids(db, viewer_id)
    talents = db.query(Talent).order_by(Talent.seq).all()

    unseen = [t for t in talents if t.id not in seen and t.video_pitch]
    logger.debug(
        f"Feed for {viewer_id}: {len(talents)} talents, {len(seen)} seen, {len(unseen)} unseen"
    )
    return unseen


def _upsert_swipe(db: Session, key: str, employer_id: str, talent_id: str, status: str) -> Swipe:
    swipe = db.get(Swipe, key)
    if swipe is None:
        swipe = Swipe(id=key, employer_id=employer_id, talent_id=talent_id)
        db.add(swipe)
    swipe.status = status
    swipe.timestamp = datetime.utcnow()
    db.commit()
    db.refresh(swipe)
    return swipe


def record_swipe_action(db: Session, employer_id: str, talent_id: str, status: str) -> Swipe:
    """
    Record an employer's decision on a talent.

    Keyed by "<employer_id>_<talent_id>": repeating a swipe on the same pair
    overwrites the status and timestamp instead of adding a row.

    Raises:
        ValueError: status is not one of liked/passed/saved
        SwipeRecordError: the write failed
    """
    if status not in SWIPE_STATUSES:
        raise ValueError(f"Invalid swipe status. Must be one of: {list(SWIPE_STATUSES)}")

    key = swipe_key(employer_id, talent_id)
    try:
        try:
            return _upsert_swipe(db, key, employer_id, talent_id, status)
        except IntegrityError:
            # A concurrent submit for the same pair inserted first
            db.rollback()
            return _upsert_swipe(db, key, employer_id, talent_id, status)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error recording swipe {key}: {str(e)}")
        raise SwipeRecordError("Failed to record swipe") from e


def list_swipes(db: Session, employer_id: str, status: Optional[str] = None) -> list[Swipe]:
    query = db.query(Swipe).filter(Swipe.employer_id == employer_id)
    if status:
        query = query.filter(Swipe.status == status)
    return query.order_by(Swipe.timestamp.desc()).all()


# ============== Feed Session ==============


class FeedSession:
    """
    Advance-only cursor over one viewer's unseen candidates.

    LOADING -> READY(0) -> [ADVANCING(i) -> READY(i+1)]* -> EXHAUSTED

    A failed swipe write leaves the index where it was, so the same
    candidate is presented again.
    """

    def __init__(self, viewer_id: str, on_exhausted: Optional[Callable[[str], None]] = None):
        self.viewer_id = viewer_id
        self.on_exhausted = on_exhausted
        self.candidates: list[TalentProfileOut] = []
        self.index = 0
        self.state = FeedState.LOADING
        self.liked = False
        self._exhaustion_reported = False

    def load(self, db: Session) -> None:
        """Fetch the unseen set. Errors propagate and leave the session LOADING."""
        self.state = FeedState.LOADING
        talents = get_unseen_candidates(db, self.viewer_id)

        # Snapshot so the session outlives the request's db session
        self.candidates = [talent_to_out(t) for t in talents]
        self.index = 0
        self.liked = False
        self._exhaustion_reported = False

        if self.candidates:
            self.state = FeedState.READY
        else:
            self._exhaust()

    @property
    def current(self) -> Optional[TalentProfileOut]:
        if self.state != FeedState.READY:
            return None
        return self.candidates[self.index]

    @property
    def remaining(self) -> int:
        return max(len(self.candidates) - self.index, 0)

    def swipe(self, db: Session, status: str) -> Optional[TalentProfileOut]:
        """Record a decision on the current candidate and advance. Returns the next one."""
        if self.state != FeedState.READY:
            raise FeedStateError(f"Cannot swipe while feed is {self.state.value}")

        candidate = self.candidates[self.index]
        self.state = FeedState.ADVANCING
        try:
            record_swipe_action(db, self.viewer_id, candidate.id, status)
        except (SwipeRecordError, ValueError):
            self.state = FeedState.READY
            raise

        self.index += 1
        self.liked = False
        if self.index >= len(self.candidates):
            self._exhaust()
        else:
            self.state = FeedState.READY
        return self.current

    def like(self, db: Session) -> Optional[TalentProfileOut]:
        self.liked = True
        return self.swipe(db, "liked")

    def pass_(self, db: Session) -> Optional[TalentProfileOut]:
        return self.swipe(db, "passed")

    def save(self, db: Session) -> Optional[TalentProfileOut]:
        return self.swipe(db, "saved")

    def _exhaust(self) -> None:
        self.state = FeedState.EXHAUSTED
        if self._exhaustion_reported:
            return
        self._exhaustion_reported = True
        logger.info(f"Feed exhausted for {self.viewer_id}")
        if self.on_exhausted is not None:
            self.on_exhausted(self.viewer_id)


class FeedSessionRegistry:
    """One in-memory feed session per viewer. Lost on restart."""

    def __init__(self):
        self._sessions: dict[str, FeedSession] = {}

    def start(
        self,
        db: Session,
        viewer_id: str,
        on_exhausted: Optional[Callable[[str], None]] = None,
    ) -> FeedSession:
        session = FeedSession(viewer_id, on_exhausted=on_exhausted)
        session.load(db)
        self._sessions[viewer_id] = session
        return session

    def get(self, viewer_id: str) -> Optional[FeedSession]:
        return self._sessions.get(viewer_id)

    def dispose(self, viewer_id: str) -> bool:
        return self._sessions.pop(viewer_id, None) is not None

    def clear(self) -> None:
        self._sessions.clear()


feed_sessions = FeedSessionRegistry()
