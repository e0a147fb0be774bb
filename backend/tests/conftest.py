import os
import tempfile
import uuid

# Settings are read at import time; point them at throwaway locations first.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("MEDIA_ROOT", tempfile.mkdtemp(prefix="talenthub-media-"))
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from talenthub.core.security import get_password_hash
from talenthub.db.base import Base
from talenthub.db.session import get_db
from talenthub.main import app
from talenthub.models import AdminRecord, Employer, Talent, UserAccount
from talenthub.services.blob_storage import LocalBlobStorage, get_blob_storage
from talenthub.services.swipe_feed import feed_sessions

API = "/api/v1"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def storage(tmp_path):
    return LocalBlobStorage(root=str(tmp_path / "media"), base_url="/media", chunk_size=4)


@pytest.fixture
def client(session_factory, storage):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_blob_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    feed_sessions.clear()


# ============== Data Helpers ==============


def make_account(db, email=None, password="secret123") -> UserAccount:
    account = UserAccount(
        uid=uuid.uuid4().hex,
        email=email or f"{uuid.uuid4().hex[:8]}@example.com",
        hashed_password=get_password_hash(password),
    )
    db.add(account)
    db.commit()
    return account


def make_talent(db, talent_id=None, name="Talent", video=True, **fields) -> Talent:
    talent_id = talent_id or uuid.uuid4().hex
    talent = Talent(
        id=talent_id,
        user_id=talent_id,
        name=name,
        email=f"{talent_id}@example.com",
        country="Singapore",
        skills=["Python"],
        languages=["English"],
        video_pitch=f"/media/talents/{talent_id}/video-pitch/pitch.mp4" if video else None,
        **fields,
    )
    db.add(talent)
    db.commit()
    return talent


def make_employer(db, employer_id=None, company_name="Acme") -> Employer:
    employer_id = employer_id or uuid.uuid4().hex
    employer = Employer(
        id=employer_id,
        user_id=employer_id,
        company_name=company_name,
        email=f"{employer_id}@example.com",
    )
    db.add(employer)
    db.commit()
    return employer


def make_admin(db, uid, email="admin@example.com", name="Admin") -> AdminRecord:
    admin = AdminRecord(uid=uid, email=email, name=name)
    db.add(admin)
    db.commit()
    return admin


def login(client, email, password="secret123") -> dict:
    response = client.post(
        f"{API}/auth/login",
        data={"username": email, "password": password},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def employer_user(db, client):
    """A signed-in employer: (account, auth headers)."""
    account = make_account(db)
    make_employer(db, employer_id=account.uid)
    return account, login(client, account.email)


@pytest.fixture
def talent_user(db, client):
    """A signed-in talent: (account, auth headers)."""
    account = make_account(db)
    make_talent(db, talent_id=account.uid, video=False)
    return account, login(client, account.email)


@pytest.fixture
def admin_user(db, client):
    """A signed-in admin: (account, auth headers)."""
    account = make_account(db)
    make_admin(db, uid=account.uid, email=account.email)
    return account, login(client, account.email)
