"""
Profile schemas shared by the services and the API routers.

Field names follow the document field names the web client reads and
writes (camelCase), not the snake_case column names.
"""

import re
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from talenthub.models import Employer, Talent

UserRole = Literal["admin", "talent", "employer"]

EMAIL_PATTERN = r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$"

COMPANY_SIZES = [
    "1-10 employees",
    "11-50 employees",
    "51-200 employees",
    "201-500 employees",
    "501-1000 employees",
    "1001-5000 employees",
    "5001+ employees",
]


class UserProfile(BaseModel):
    """Unified profile derived from whichever role collection holds the uid."""

    uid: str
    email: str
    role: UserRole
    name: str = ""
    # True when no record exists and the profile was synthesized from the email
    provisional: bool = False


# ============== Talent ==============


class TalentProfileOut(BaseModel):
    id: str
    name: str = ""
    email: str = ""
    country: str = ""
    bio: str = ""
    cultureStyle: str = ""
    cultureScore: int = 0
    skills: list[str] = []
    languages: list[str] = []
    profileImageUrl: Optional[str] = None
    videoPitch: Optional[str] = None
    videoPitchPath: Optional[str] = None
    userId: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class TalentProfileUpdate(BaseModel):
    """Talent edit form. Name, country, skills and languages are required."""

    name: str
    country: str
    skills: list[str]
    languages: list[str]
    bio: Optional[str] = None
    cultureStyle: Optional[str] = None
    cultureScore: Optional[int] = Field(default=None, ge=0, le=100)
    profileImageUrl: Optional[str] = None
    videoPitch: Optional[str] = None

    @field_validator("name", "country")
    @classmethod
    def validate_required_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Please fill in all required fields")
        return v.strip()

    @field_validator("skills", "languages")
    @classmethod
    def validate_non_empty_list(cls, v: list[str]) -> list[str]:
        # Drop blanks and duplicates, keep first-seen order
        cleaned: list[str] = []
        for item in v:
            item = item.strip()
            if item and item not in cleaned:
                cleaned.append(item)
        if not cleaned:
            raise ValueError("At least one entry is required")
        return cleaned


def talent_to_out(talent: Talent) -> TalentProfileOut:
    return TalentProfileOut(
        id=talent.id,
        name=talent.name or "",
        email=talent.email or "",
        country=talent.country or "",
        bio=talent.bio or "",
        cultureStyle=talent.culture_style or "",
        cultureScore=talent.culture_score or 0,
        skills=list(talent.skills or []),
        languages=list(talent.languages or []),
        profileImageUrl=talent.profile_image_url,
        videoPitch=talent.video_pitch,
        videoPitchPath=talent.video_pitch_path,
        userId=talent.user_id,
        createdAt=talent.created_at,
        updatedAt=talent.updated_at,
    )


# ============== Employer ==============


class EmployerProfileOut(BaseModel):
    id: str
    companyName: str = ""
    position: str = ""
    industry: str = ""
    location: str = ""
    email: str = ""
    phone: Optional[str] = None
    companyWebsite: Optional[str] = None
    companySize: Optional[str] = None
    foundedYear: Optional[int] = None
    about: Optional[str] = None
    userId: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class EmployerProfileUpdate(BaseModel):
    """Employer edit form."""

    companyName: str
    position: str
    industry: str
    location: str
    email: str
    phone: Optional[str] = None
    companyWebsite: Optional[str] = None
    companySize: Optional[str] = None
    foundedYear: Optional[int] = None
    about: Optional[str] = None

    @field_validator("companyName", "position", "industry", "location", "email")
    @classmethod
    def validate_required_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("This field is required")
        return v.strip()

    @field_validator("companySize")
    @classmethod
    def validate_company_size(cls, v: Optional[str]) -> Optional[str]:
        if v and v not in COMPANY_SIZES:
            raise ValueError(f"Company size must be one of: {COMPANY_SIZES}")
        return v or None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        if not re.match(EMAIL_PATTERN, v):
            raise ValueError("Invalid email format")
        return v.lower()

    @field_validator("foundedYear")
    @classmethod
    def validate_founded_year(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and not 1900 <= v <= datetime.utcnow().year:
            raise ValueError("Founded year must be between 1900 and the current year")
        return v


def employer_to_out(employer: Employer) -> EmployerProfileOut:
    return EmployerProfileOut(
        id=employer.id,
        companyName=employer.company_name or "",
        position=employer.position or "",
        industry=employer.industry or "",
        location=employer.location or "",
        email=employer.email or "",
        phone=employer.phone,
        companyWebsite=employer.company_website,
        companySize=employer.company_size,
        foundedYear=employer.founded_year,
        about=employer.about,
        userId=employer.user_id,
        createdAt=employer.created_at,
        updatedAt=employer.updated_at,
    )
