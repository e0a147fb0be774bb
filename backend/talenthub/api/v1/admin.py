"""
Admin API endpoints.

Admin setup for an existing account, admin management, and read-only
views over talents, employers and swipe activity.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from talenthub.api.v1.auth import optional_oauth2_scheme, require_role
from talenthub.db.session import get_db
from talenthub.schemas.profile import (
    EmployerProfileOut,
    TalentProfileOut,
    employer_to_out,
    talent_to_out,
)
from talenthub.services.admins import (
    AlreadyAdminError,
    has_admins,
    list_admins,
    platform_stats,
    remove_admin,
    setup_admin,
)
from talenthub.services.identity import InvalidCredentialsError, identity_provider
from talenthub.services.profiles import list_employers, list_talents
from talenthub.services.session_store import AuthSession, session_store

router = APIRouter()


class AdminSetupRequest(BaseModel):
    email: str
    password: str
    name: str


class AdminResponse(BaseModel):
    uid: str
    email: str
    role: str = "admin"
    name: Optional[str] = None
    permissions: list[str]
    created_at: Optional[datetime] = None


class PlatformStats(BaseModel):
    total_talents: int
    talents_with_video: int
    total_employers: int
    total_swipes: int
    liked: int
    passed: int
    saved: int


def _admin_response(admin) -> AdminResponse:
    return AdminResponse(
        uid=admin.uid,
        email=admin.email,
        name=admin.name,
        permissions=list(admin.permissions or []),
        created_at=admin.created_at,
    )


async def require_setup_access(
    token: Optional[str] = Depends(optional_oauth2_scheme),
    db: Session = Depends(get_db),
) -> Optional[AuthSession]:
    """
    Setup is open to anyone until the first admin exists. After that the
    caller must be signed in as an admin.
    """
    if not has_admins(db):
        return None

    account = identity_provider.account_from_token(db, token) if token else None
    if account is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    auth = session_store.sync(db, account)
    if not auth.has_role or auth.profile.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only admin accounts can add admins",
        )
    return auth


@router.post("/setup", response_model=AdminResponse, status_code=status.HTTP_201_CREATED)
async def setup(
    request: AdminSetupRequest,
    auth: Optional[AuthSession] = Depends(require_setup_access),
    db: Session = Depends(get_db),
):
    """
    Grant the admin role to an existing account.

    The credentials must belong to a registered account. Without any admin
    this bootstraps the first one; otherwise only admins may call it.
    """
    try:
        account = identity_provider.authenticate(db, request.email, request.password)
    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password. Please use existing user credentials.",
        )

    try:
        admin = setup_admin(db, account, request.name)
    except AlreadyAdminError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return _admin_response(admin)


@router.get("/admins")
def get_admins(
    auth: AuthSession = Depends(require_role("admin")),
    db: Session = Depends(get_db),
):
    result = [_admin_response(a) for a in list_admins(db)]
    return {"total": len(result), "admins": result}


@router.delete("/admins/{uid}")
def delete_admin(
    uid: str,
    auth: AuthSession = Depends(require_role("admin")),
    db: Session = Depends(get_db),
):
    if uid == auth.user.uid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Admins cannot remove their own privileges",
        )
    if not remove_admin(db, uid):
        raise HTTPException(status_code=404, detail="Admin not found")

    return {"message": "Admin privileges removed", "uid": uid}


@router.get("/talents")
def get_talents(
    auth: AuthSession = Depends(require_role("admin")),
    db: Session = Depends(get_db),
):
    result: list[TalentProfileOut] = [talent_to_out(t) for t in list_talents(db)]
    return {"total": len(result), "talents": result}


@router.get("/employers")
def get_employers(
    auth: AuthSession = Depends(require_role("admin")),
    db: Session = Depends(get_db),
):
    result: list[EmployerProfileOut] = [employer_to_out(e) for e in list_employers(db)]
    return {"total": len(result), "employers": result}


@router.get("/stats", response_model=PlatformStats)
def get_stats(
    auth: AuthSession = Depends(require_role("admin")),
    db: Session = Depends(get_db),
):
    return PlatformStats(**platform_stats(db))
