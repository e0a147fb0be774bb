from datetime import datetime

from sqlalchemy import Column, String, DateTime

from talenthub.db.base import Base

SWIPE_STATUSES = ("liked", "passed", "saved")


def swipe_key(employer_id: str, talent_id: str) -> str:
    """Deterministic document key for an (employer, talent) pair."""
    return f"{employer_id}_{talent_id}"


class Swipe(Base):
    """
    Swipe decision an employer made on a talent.

    One row per pair: repeated swipes overwrite status and timestamp.
    """

    __tablename__ = "swipes"

    id = Column(String, primary_key=True)  # "<employer_id>_<talent_id>"
    employer_id = Column(String(36), index=True, nullable=False)
    talent_id = Column(String(36), index=True, nullable=False)
    status = Column(String, nullable=False)  # "liked" | "passed" | "saved"
    timestamp = Column(DateTime, default=datetime.utcnow)
