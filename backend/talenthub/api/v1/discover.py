"""
Discovery API endpoints.

The employer swipe feed: a server-held feed session per employer, plus
stateless access to the unseen set and the swipe history (liked / saved
lists).
"""

import logging
from datetime import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from talenthub.api.v1.auth import require_role
from talenthub.db.session import get_db
from talenthub.models.swipe import SWIPE_STATUSES
from talenthub.schemas.profile import TalentProfileOut, talent_to_out
from talenthub.services.profiles import get_talent
from talenthub.services.session_store import AuthSession
from talenthub.services.swipe_feed import (
    FeedSession,
    FeedStateError,
    SwipeRecordError,
    feed_sessions,
    get_unseen_candidates,
    list_swipes,
    record_swipe_action,
)

logger = logging.getLogger("discover")

router = APIRouter()


# ============== Pydantic Schemas ==============


class FeedSessionResponse(BaseModel):
    state: str
    index: int
    total: int
    remaining: int
    liked: bool
    current: Optional[TalentProfileOut] = None


class SwipeRequest(BaseModel):
    action: Literal["like", "pass", "save"]


class SwipeRecordRequest(BaseModel):
    status: Literal["liked", "passed", "saved"]


class SwipeResponse(BaseModel):
    id: str
    employerId: str
    talentId: str
    status: str
    timestamp: datetime


class SwipeWithTalent(SwipeResponse):
    talent: Optional[TalentProfileOut] = None


# ============== Helper Functions ==============


def _session_response(session: FeedSession) -> FeedSessionResponse:
    return FeedSessionResponse(
        state=session.state.value,
        index=session.index,
        total=len(session.candidates),
        remaining=session.remaining,
        liked=session.liked,
        current=session.current,
    )


def _swipe_response(swipe) -> SwipeResponse:
    return SwipeResponse(
        id=swipe.id,
        employerId=swipe.employer_id,
        talentId=swipe.talent_id,
        status=swipe.status,
        timestamp=swipe.timestamp,
    )


def _get_feed_or_404(viewer_id: str) -> FeedSession:
    session = feed_sessions.get(viewer_id)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No active feed session",
        )
    return session


# ============== Feed Session ==============


@router.post("/session", response_model=FeedSessionResponse, status_code=status.HTTP_201_CREATED)
async def start_feed_session(
    auth: AuthSession = Depends(require_role("employer")),
    db: Session = Depends(get_db),
):
    """Start (or restart) the caller's feed session with a fresh unseen set."""
    try:
        session = feed_sessions.start(db, auth.user.uid)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching talents: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load talents. Please try again later.",
        )
    logger.info(f"Feed session for {auth.user.uid}: {len(session.candidates)} candidates")
    return _session_response(session)


@router.get("/session", response_model=FeedSessionResponse)
async def get_feed_session(auth: AuthSession = Depends(require_role("employer"))):
    return _session_response(_get_feed_or_404(auth.user.uid))


@router.post("/session/swipe", response_model=FeedSessionResponse)
async def swipe_current(
    request: SwipeRequest,
    auth: AuthSession = Depends(require_role("employer")),
    db: Session = Depends(get_db),
):
    """
    Record like / pass / save on the current candidate and advance.

    If the record cannot be written the feed stays on the same candidate.
    """
    session = _get_feed_or_404(auth.user.uid)

    try:
        if request.action == "like":
            session.like(db)
        elif request.action == "pass":
            session.pass_(db)
        else:
            session.save(db)
    except FeedStateError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except SwipeRecordError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to record swipe. Please try again.",
        )

    return _session_response(session)


@router.delete("/session")
async def end_feed_session(auth: AuthSession = Depends(require_role("employer"))):
    if not feed_sessions.dispose(auth.user.uid):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No active feed session",
        )
    return {"message": "Feed session ended"}


# ============== Stateless Access ==============


@router.get("/candidates", response_model=list[TalentProfileOut])
async def get_candidates(
    auth: AuthSession = Depends(require_role("employer")),
    db: Session = Depends(get_db),
):
    """Unseen talents with a video pitch, in store order."""
    try:
        talents = get_unseen_candidates(db, auth.user.uid)
    except SQLAlchemyError as e:
        logger.error(f"Error getting unseen talents: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load talents. Please try again later.",
        )
    return [talent_to_out(t) for t in talents]


@router.put("/swipes/{talent_id}", response_model=SwipeResponse)
async def put_swipe(
    talent_id: str,
    request: SwipeRecordRequest,
    auth: AuthSession = Depends(require_role("employer")),
    db: Session = Depends(get_db),
):
    """Idempotent upsert of the caller's decision on a talent."""
    if get_talent(db, talent_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Talent not found",
        )

    try:
        swipe = record_swipe_action(db, auth.user.uid, talent_id, request.status)
    except SwipeRecordError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to record swipe. Please try again.",
        )
    return _swipe_response(swipe)


@router.get("/swipes", response_model=list[SwipeWithTalent])
async def get_swipes(
    status_filter: Optional[str] = None,
    auth: AuthSession = Depends(require_role("employer")),
    db: Session = Depends(get_db),
):
    """
    The caller's swipe history, newest first.

    Optional filters:
    - status_filter: liked, passed or saved
    """
    if status_filter and status_filter not in SWIPE_STATUSES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid status. Must be one of: {list(SWIPE_STATUSES)}",
        )

    result: list[SwipeWithTalent] = []
    for swipe in list_swipes(db, auth.user.uid, status_filter):
        talent = get_talent(db, swipe.talent_id)
        result.append(
            SwipeWithTalent(
                **_swipe_response(swipe).model_dump(),
                talent=talent_to_out(talent) if talent else None,
            )
        )
    return result
