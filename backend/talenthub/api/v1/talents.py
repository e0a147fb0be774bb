"""
Talent profile API endpoints.

Profile editing for talents, video pitch upload, and read access for
employers browsing candidates.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from talenthub.api.v1.auth import get_current_account, get_current_session, require_role
from talenthub.core.config import settings
from talenthub.db.session import get_db
from talenthub.models import UserAccount
from talenthub.schemas.profile import TalentProfileOut, TalentProfileUpdate, talent_to_out
from talenthub.services.blob_storage import (
    LocalBlobStorage,
    UploadError,
    UploadTooLargeError,
    get_blob_storage,
    video_pitch_path,
)
from talenthub.services.profiles import (
    COUNTRIES,
    get_talent,
    list_talents,
    save_talent_profile,
    set_talent_video,
    suggest_skills,
)

logger = logging.getLogger("talents")

router = APIRouter()


class VideoUploadResponse(BaseModel):
    videoPitch: str
    videoPitchPath: str
    size: int
    message: str = "Video uploaded successfully!"


# ============== Form Helpers ==============


@router.get("/countries")
async def get_countries():
    return {"countries": COUNTRIES}


@router.get("/skills/suggest")
async def get_skill_suggestions(
    q: str = "",
    exclude: Optional[list[str]] = Query(default=None),
):
    """Up to five skills containing `q`, excluding the ones already chosen."""
    return {"suggestions": suggest_skills(q, exclude)}


# ============== Own Profile ==============


@router.get("/me", response_model=TalentProfileOut)
async def get_my_profile(
    session=Depends(require_role("talent")),
    account: UserAccount = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    try:
        talent = get_talent(db, account.uid)
    except SQLAlchemyError as e:
        logger.error(f"Error loading talent profile: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load profile",
        )

    if talent is None:
        return TalentProfileOut(id=account.uid, email=account.email, userId=account.uid)
    return talent_to_out(talent)


@router.put("/me", response_model=TalentProfileOut)
async def update_my_profile(
    update: TalentProfileUpdate,
    session=Depends(require_role("talent")),
    account: UserAccount = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    """
    Merge the submitted fields into the talent profile.

    Name, country, at least one skill and at least one language are required.
    """
    try:
        talent = save_talent_profile(db, account, update)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating profile: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update profile. Please try again.",
        )
    return talent_to_out(talent)


@router.post("/me/video", response_model=VideoUploadResponse)
async def upload_video_pitch(
    file: UploadFile = File(...),
    session=Depends(require_role("talent")),
    account: UserAccount = Depends(get_current_account),
    db: Session = Depends(get_db),
    storage: LocalBlobStorage = Depends(get_blob_storage),
):
    """
    Upload a video pitch and attach its URL to the talent profile.

    Accepts: video/* up to MAX_VIDEO_SIZE_MB
    """
    if not (file.content_type or "").startswith("video/"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please upload a valid video file",
        )

    max_bytes = settings.MAX_VIDEO_SIZE_MB * 1024 * 1024
    if file.size is not None and file.size > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Video file size should be less than {settings.MAX_VIDEO_SIZE_MB}MB",
        )

    try:
        path = video_pitch_path(account.uid, file.filename)
    except UploadError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    def report_progress(percent: float) -> None:
        logger.debug(f"Upload {path}: {percent:.0f}%")

    try:
        blob = await storage.upload(
            path,
            file,
            total_bytes=file.size,
            max_bytes=max_bytes,
            on_progress=report_progress,
        )
    except UploadTooLargeError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Video file size should be less than {settings.MAX_VIDEO_SIZE_MB}MB",
        )
    except UploadError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to upload video. Please try again.",
        )

    set_talent_video(db, account.uid, blob.url, blob.path)

    return VideoUploadResponse(videoPitch=blob.url, videoPitchPath=blob.path, size=blob.size)


@router.delete("/me/video", response_model=TalentProfileOut)
async def remove_video_pitch(
    session=Depends(require_role("talent")),
    account: UserAccount = Depends(get_current_account),
    db: Session = Depends(get_db),
    storage: LocalBlobStorage = Depends(get_blob_storage),
):
    """Detach the video pitch. The profile drops out of the discovery feed."""
    talent = get_talent(db, account.uid)
    if talent is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Talent not found",
        )

    if talent.video_pitch_path:
        try:
            storage.delete(talent.video_pitch_path)
        except (UploadError, OSError) as e:
            logger.error(f"Error deleting video {talent.video_pitch_path}: {str(e)}")

    return talent_to_out(set_talent_video(db, account.uid, None, None))


# ============== Browsing ==============


@router.get("", response_model=list[TalentProfileOut])
async def get_all_talents(
    session=Depends(require_role("employer", "admin")),
    db: Session = Depends(get_db),
):
    return [talent_to_out(t) for t in list_talents(db)]


@router.get("/{talent_id}", response_model=TalentProfileOut)
async def get_talent_by_id(
    talent_id: str,
    session=Depends(get_current_session),
    db: Session = Depends(get_db),
):
    talent = get_talent(db, talent_id)
    if not talent:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Talent not found",
        )
    return talent_to_out(talent)
