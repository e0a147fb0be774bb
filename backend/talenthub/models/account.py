from datetime import datetime

from sqlalchemy import Column, String, DateTime

from talenthub.db.base import Base


class UserAccount(Base):
    """Identity provider account. Holds credentials only, never a role."""

    __tablename__ = "users"

    uid = Column(String(36), primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
