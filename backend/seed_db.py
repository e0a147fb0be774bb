"""
TalentHub Database Seeder

Creates test accounts for every role:
- An admin
- An employer (Acme) with a completed company profile
- Three talents, two of them with a video pitch (eligible for the feed)
"""

import uuid

from talenthub.db.session import SessionLocal, engine
from talenthub.db.base import Base
from talenthub.models import AdminRecord, Employer, Talent, UserAccount
from talenthub.core.security import get_password_hash


def _account(email: str, password: str) -> UserAccount:
    return UserAccount(
        uid=uuid.uuid4().hex,
        email=email,
        hashed_password=get_password_hash(password),
    )


def seed_database():
    """Seed the database with test data."""

    # Create all tables
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()

    try:
        # Check if already seeded
        existing_admin = db.query(UserAccount).filter(UserAccount.email == "admin@talenthub.com").first()
        if existing_admin:
            print("Database already seeded. Skipping...")
            return

        print("Seeding database...")

        # 1. Admin
        admin_account = _account("admin@talenthub.com", "admin123")
        db.add(admin_account)
        db.flush()
        db.add(AdminRecord(uid=admin_account.uid, email=admin_account.email, name="Platform Admin"))

        # 2. Employer
        employer_account = _account("hr@acme.com", "employer123")
        db.add(employer_account)
        db.flush()
        db.add(
            Employer(
                id=employer_account.uid,
                user_id=employer_account.uid,
                company_name="Acme",
                position="HR Manager",
                industry="Technology",
                location="Singapore",
                email=employer_account.email,
                company_size="51-200 employees",
                founded_year=2010,
                about="We build developer tools.",
            )
        )

        # 3. Talents
        talents = [
            {
                "email": "jane.doe@example.com",
                "name": "Jane Doe",
                "country": "Indonesia",
                "bio": "Frontend developer building scalable web apps.",
                "culture_style": "Collaborative",
                "culture_score": 85,
                "skills": ["React", "TypeScript", "Node.js"],
                "languages": ["English", "Bahasa Indonesia"],
                "video_pitch": "/media/talents/demo/video-pitch/jane.mp4",
            },
            {
                "email": "john.smith@example.com",
                "name": "John Smith",
                "country": "Malaysia",
                "bio": "Backend engineer focused on cloud-native automation.",
                "culture_style": "Innovative",
                "culture_score": 72,
                "skills": ["Python", "Django", "Docker"],
                "languages": ["English", "Malay"],
                "video_pitch": "/media/talents/demo/video-pitch/john.mp4",
            },
            {
                "email": "mei.lin@example.com",
                "name": "Mei Lin",
                "country": "Singapore",
                "bio": "Data scientist. Video pitch coming soon.",
                "culture_style": "Analytical",
                "culture_score": 90,
                "skills": ["Python", "Machine Learning"],
                "languages": ["English", "Mandarin"],
                "video_pitch": None,
            },
        ]
        for data in talents:
            account = _account(data.pop("email"), "talent123")
            db.add(account)
            db.flush()
            db.add(Talent(id=account.uid, user_id=account.uid, email=account.email, **data))

        # Commit all changes
        db.commit()

        print("Database seeded successfully!")
        print("\nCreated accounts:")
        print("   - admin@talenthub.com (password: admin123) [ADMIN]")
        print("   - hr@acme.com (password: employer123) [EMPLOYER]")
        print("   - jane.doe@example.com, john.smith@example.com, mei.lin@example.com (password: talent123) [TALENT]")

    except Exception as e:
        db.rollback()
        print(f"Error seeding database: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
