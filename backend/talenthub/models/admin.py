from datetime import datetime

from sqlalchemy import Column, String, DateTime, JSON

from talenthub.db.base import Base

DEFAULT_ADMIN_PERMISSIONS = ["read", "write", "delete"]


class AdminRecord(Base):
    """Admin role record, keyed by the account uid."""

    __tablename__ = "admins"

    uid = Column(String(36), primary_key=True, index=True)
    email = Column(String, nullable=False)
    name = Column(String)
    permissions = Column(JSON, default=lambda: list(DEFAULT_ADMIN_PERMISSIONS))
    created_at = Column(DateTime, default=datetime.utcnow)
