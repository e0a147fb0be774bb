"""
Role resolution.

A user's role is not stored on the account; it is inferred from which role
collection (admins, talents, employers) holds a record keyed by the uid.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from talenthub.models import AdminRecord, Employer, Talent
from talenthub.schemas.profile import UserProfile

logger = logging.getLogger("role_resolver")

# Probe order is the tie-break: a uid present in several collections resolves
# to the highest-privilege role.
ROLE_LOOKUPS = (
    ("admin", AdminRecord, AdminRecord.uid),
    ("talent", Talent, Talent.id),
    ("employer", Employer, Employer.id),
)


def _display_name(role: str, record) -> str:
    if role == "employer":
        return record.company_name or ""
    return record.name or ""


def find_role_record(db: Session, uid: str):
    """Return (role, record) for the first collection holding uid, or (None, None)."""
    for role, model, key in ROLE_LOOKUPS:
        record = db.query(model).filter(key == uid).first()
        if record is not None:
            return role, record
    return None, None


def resolve_profile(
    db: Session,
    uid: str,
    fallback_email: Optional[str] = None,
) -> Optional[UserProfile]:
    """
    Resolve the unified profile for a uid.

    Args:
        db: Database session
        uid: Account identifier from the identity provider
        fallback_email: Email used to synthesize a provisional profile when
            no role record exists

    Returns:
        The stored profile tagged with its role; a provisional talent profile
        when only an email is known; None otherwise. Backend errors are
        logged and treated as "no record".
    """
    try:
        role, record = find_role_record(db, uid)
    except SQLAlchemyError as e:
        logger.error(f"Error resolving profile for {uid}: {str(e)}")
        role, record = None, None

    if record is not None:
        return UserProfile(
            uid=uid,
            email=record.email or fallback_email or "",
            role=role,
            name=_display_name(role, record),
        )

    if fallback_email:
        logger.debug(f"No role record for {uid}, synthesizing provisional profile")
        return UserProfile(
            uid=uid,
            email=fallback_email,
            role="talent",
            name=fallback_email.split("@")[0],
            provisional=True,
        )

    return None
