"""Admin role records."""

import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from talenthub.models import AdminRecord, Employer, Swipe, Talent, UserAccount
from talenthub.models.admin import DEFAULT_ADMIN_PERMISSIONS

logger = logging.getLogger("admins")


class AlreadyAdminError(Exception):
    pass


def get_admin(db: Session, uid: str) -> Optional[AdminRecord]:
    return db.query(AdminRecord).filter(AdminRecord.uid == uid).first()


def is_admin(db: Session, uid: str) -> bool:
    return get_admin(db, uid) is not None


def has_admins(db: Session) -> bool:
    return db.query(AdminRecord).first() is not None


def setup_admin(db: Session, account: UserAccount, name: str) -> AdminRecord:
    """Grant the admin role to an existing account."""
    if is_admin(db, account.uid):
        raise AlreadyAdminError("This user is already an admin")

    admin = AdminRecord(
        uid=account.uid,
        email=account.email,
        name=name,
        permissions=list(DEFAULT_ADMIN_PERMISSIONS),
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)

    logger.info(f"Admin user created: {account.email}")
    return admin


def list_admins(db: Session) -> list[AdminRecord]:
    return db.query(AdminRecord).order_by(AdminRecord.created_at).all()


def remove_admin(db: Session, uid: str) -> bool:
    admin = get_admin(db, uid)
    if admin is None:
        return False
    db.delete(admin)
    db.commit()
    logger.info(f"Admin privileges removed for {uid}")
    return True


def platform_stats(db: Session) -> dict:
    swipe_counts = dict(
        db.query(Swipe.status, func.count(Swipe.id)).group_by(Swipe.status).all()
    )
    # Same rule as the discovery feed: an empty pitch URL is no pitch
    with_video = (
        db.query(Talent)
        .filter(Talent.video_pitch.isnot(None), Talent.video_pitch != "")
        .count()
    )
    return {
        "total_talents": db.query(Talent).count(),
        "talents_with_video": with_video,
        "total_employers": db.query(Employer).count(),
        "total_swipes": sum(swipe_counts.values()),
        "liked": swipe_counts.get("liked", 0),
        "passed": swipe_counts.get("passed", 0),
        "saved": swipe_counts.get("saved", 0),
    }
