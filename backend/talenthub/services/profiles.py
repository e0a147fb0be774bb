"""
Talent and employer profile persistence.

Saves are read-merge-write: only the fields present in the update are
overwritten, `updated_at` is assigned by the server. No locking; concurrent
edits of the same profile are last-write-wins.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from talenthub.models import Employer, Talent, UserAccount
from talenthub.schemas.profile import EmployerProfileUpdate, TalentProfileUpdate
from talenthub.services.role_resolver import find_role_record

logger = logging.getLogger("profiles")

COUNTRIES = [
    "Indonesia",
    "Malaysia",
    "Singapore",
    "Thailand",
    "Vietnam",
    "Philippines",
    "Japan",
    "South Korea",
    "China",
    "India",
    "United States",
    "United Kingdom",
    "Australia",
    "Germany",
    "France",
    "Other",
]

SKILLS_LIST = [
    "JavaScript", "TypeScript", "React", "Next.js", "Node.js",
    "Python", "Django", "Flask", "Java", "Spring Boot",
    "PHP", "Laravel", "Ruby", "Ruby on Rails", "Go",
    "C#", ".NET", "Swift", "Kotlin", "Flutter",
    "React Native", "Docker", "Kubernetes", "AWS", "GCP",
    "Azure", "MongoDB", "PostgreSQL", "MySQL", "GraphQL",
    "REST API", "UI/UX Design", "Product Management", "Project Management",
    "DevOps", "Machine Learning", "Data Science", "Blockchain", "Cybersecurity",
]

MAX_SKILL_SUGGESTIONS = 5

# Update field -> column
TALENT_FIELDS = {
    "name": "name",
    "country": "country",
    "skills": "skills",
    "languages": "languages",
    "bio": "bio",
    "cultureStyle": "culture_style",
    "cultureScore": "culture_score",
    "profileImageUrl": "profile_image_url",
    "videoPitch": "video_pitch",
}

EMPLOYER_FIELDS = {
    "companyName": "company_name",
    "position": "position",
    "industry": "industry",
    "location": "location",
    "email": "email",
    "phone": "phone",
    "companyWebsite": "company_website",
    "companySize": "company_size",
    "foundedYear": "founded_year",
    "about": "about",
}


class RoleAlreadySelectedError(Exception):
    """The account already has a role record."""


def suggest_skills(query: str, exclude: Optional[list[str]] = None) -> list[str]:
    """Case-insensitive substring matches from the skills list, minus chosen ones."""
    query = (query or "").strip().lower()
    if not query:
        return []
    exclude = set(exclude or [])
    matches = [s for s in SKILLS_LIST if query in s.lower() and s not in exclude]
    return matches[:MAX_SKILL_SUGGESTIONS]


# ============== Talent ==============


def get_talent(db: Session, talent_id: str) -> Optional[Talent]:
    return db.query(Talent).filter(Talent.id == talent_id).first()


def list_talents(db: Session) -> list[Talent]:
    return db.query(Talent).order_by(Talent.seq).all()


def save_talent_profile(db: Session, account: UserAccount, update: TalentProfileUpdate) -> Talent:
    talent = get_talent(db, account.uid)
    if talent is None:
        talent = Talent(id=account.uid)
        db.add(talent)

    for field, value in update.model_dump(exclude_unset=True).items():
        setattr(talent, TALENT_FIELDS[field], value)

    talent.user_id = account.uid
    talent.email = account.email
    talent.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(talent)

    logger.info(f"Saved talent profile {talent.id}")
    return talent


def set_talent_video(db: Session, talent_id: str, url: Optional[str], path: Optional[str]) -> Talent:
    """Write (or clear, with None) the video pitch on an existing talent profile."""
    talent = get_talent(db, talent_id)
    if talent is None:
        raise LookupError(f"Talent {talent_id} not found")

    talent.video_pitch = url
    talent.video_pitch_path = path
    talent.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(talent)
    return talent


# ============== Employer ==============


def get_employer(db: Session, employer_id: str) -> Optional[Employer]:
    return db.query(Employer).filter(Employer.id == employer_id).first()


def list_employers(db: Session) -> list[Employer]:
    return db.query(Employer).order_by(Employer.created_at).all()


def save_employer_profile(db: Session, account: UserAccount, update: EmployerProfileUpdate) -> Employer:
    employer = get_employer(db, account.uid)
    if employer is None:
        employer = Employer(id=account.uid)
        db.add(employer)

    for field, value in update.model_dump(exclude_unset=True).items():
        setattr(employer, EMPLOYER_FIELDS[field], value)

    employer.user_id = account.uid
    employer.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(employer)

    logger.info(f"Saved employer profile {employer.id}")
    return employer


# ============== Role Selection ==============


def select_role(db: Session, account: UserAccount, role: str):
    """
    Create the role record for an account that has none yet.

    Raises:
        RoleAlreadySelectedError: a record already exists in any role collection
        ValueError: role is not talent or employer
    """
    existing_role, _ = find_role_record(db, account.uid)
    if existing_role is not None:
        raise RoleAlreadySelectedError(f"Account already has the {existing_role} role")

    if role == "talent":
        record = Talent(id=account.uid, user_id=account.uid, email=account.email)
    elif role == "employer":
        record = Employer(id=account.uid, user_id=account.uid, email=account.email)
    else:
        raise ValueError("Role must be 'talent' or 'employer'")

    db.add(record)
    db.commit()
    db.refresh(record)

    logger.info(f"Account {account.uid} selected role {role}")
    return record
