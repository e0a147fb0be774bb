from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Text

from talenthub.db.base import Base


class Employer(Base):
    """Employer (company) profile, owned by the account with the same uid."""

    __tablename__ = "employers"

    id = Column(String(36), primary_key=True, index=True)
    user_id = Column(String(36))

    company_name = Column(String, default="")
    position = Column(String, default="")
    industry = Column(String, default="")
    location = Column(String, default="")
    email = Column(String, default="")

    phone = Column(String, nullable=True)
    company_website = Column(String, nullable=True)
    company_size = Column(String, nullable=True)  # e.g. "11-50 employees"
    founded_year = Column(Integer, nullable=True)
    about = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=True)
