from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, JSON, Text

from talenthub.db.base import Base


class Talent(Base):
    """Talent profile, keyed by the account uid of its owner."""

    __tablename__ = "talents"

    # Insertion order is the order the discovery feed presents candidates in
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(36), unique=True, index=True, nullable=False)
    user_id = Column(String(36))

    name = Column(String, default="")
    email = Column(String, default="")
    country = Column(String, default="")
    bio = Column(Text, default="")

    # Culture fit shown on the swipe card
    culture_style = Column(String, default="")
    culture_score = Column(Integer, default=0)

    skills = Column(JSON, default=list)
    languages = Column(JSON, default=list)

    profile_image_url = Column(String, nullable=True)
    video_pitch = Column(String, nullable=True)  # Public URL; required for the feed
    video_pitch_path = Column(String, nullable=True)  # Storage path of the upload

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=True)
