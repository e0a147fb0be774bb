"""
Authentication API endpoints.

Handles registration, login/logout with JWT tokens, the current-user view
and the mandatory role selection step.
"""

import re
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from pydantic import BaseModel, field_validator, model_validator
from sqlalchemy.orm import Session

from talenthub.db.session import get_db
from talenthub.models import UserAccount
from talenthub.schemas.profile import EMAIL_PATTERN, UserProfile
from talenthub.services.identity import (
    IdentityError,
    InvalidCredentialsError,
    identity_provider,
)
from talenthub.services.profiles import RoleAlreadySelectedError, select_role
from talenthub.services.session_store import AuthSession, session_store

router = APIRouter()

# OAuth2 scheme for token authentication
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


# ============== Pydantic Schemas ==============


class UserRegister(BaseModel):
    """Schema for account registration."""

    email: str
    password: str
    confirm_password: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Validate email format."""
        if not re.match(EMAIL_PATTERN, v):
            raise ValueError("Invalid email format")
        return v.lower()

    @model_validator(mode="after")
    def validate_passwords_match(self):
        if self.confirm_password is not None and self.confirm_password != self.password:
            raise ValueError("Passwords do not match")
        return self


class AccountResponse(BaseModel):
    uid: str
    email: str


class MeResponse(BaseModel):
    uid: str
    email: str
    profile: Optional[UserProfile] = None
    role_selection_required: bool


class Token(BaseModel):
    """Schema for JWT token response."""

    access_token: str
    token_type: str = "bearer"


class RoleSelectRequest(BaseModel):
    role: Literal["talent", "employer"]


# ============== Dependencies ==============


async def get_current_account(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> UserAccount:
    """
    Dependency to get the current account from the bearer token.

    Raises HTTPException if the token is invalid, revoked or the account is gone.
    """
    account = identity_provider.account_from_token(db, token)
    if account is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return account


async def get_current_session(
    account: UserAccount = Depends(get_current_account),
    db: Session = Depends(get_db),
) -> AuthSession:
    """Current account with its freshly resolved profile."""
    return session_store.sync(db, account)


def require_role(*roles: str):
    """
    Dependency factory restricting an endpoint to the given roles.

    Accounts without a stored role record (including provisional profiles)
    are rejected until they select a role.
    """

    async def dependency(session: AuthSession = Depends(get_current_session)) -> AuthSession:
        if not session.has_role:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Role selection required",
            )
        if session.profile.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Only {' or '.join(roles)} accounts can access this resource",
            )
        return session

    return dependency


# ============== API Endpoints ==============


@router.post("/register", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserRegister, db: Session = Depends(get_db)):
    """
    Register a new account.

    No role record is created here: the account must go through role
    selection before it can use the talent or employer areas.
    """
    try:
        account = identity_provider.sign_up(db, user_data.email, user_data.password)
    except IdentityError as e:
        # Duplicate email or weak password
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return AccountResponse(uid=account.uid, email=account.email)


@router.post("/login", response_model=Token)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """
    Login and get JWT access token.

    Uses OAuth2 password flow. Send username (email) and password
    as form data.
    """
    try:
        _, access_token = identity_provider.sign_in(db, form_data.username, form_data.password)
    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return Token(access_token=access_token)


@router.post("/logout")
async def logout(
    token: str = Depends(oauth2_scheme),
    account: UserAccount = Depends(get_current_account),
):
    """Revoke the presented token."""
    identity_provider.sign_out(token)
    return {"message": "Signed out"}


@router.get("/me", response_model=MeResponse)
async def get_me(session: AuthSession = Depends(get_current_session)):
    """
    Get the current account and its resolved profile.

    `role_selection_required` is true when no role record exists yet.
    """
    return MeResponse(
        uid=session.user.uid,
        email=session.user.email,
        profile=session.profile,
        role_selection_required=not session.has_role,
    )


@router.post("/select-role", response_model=UserProfile, status_code=status.HTTP_201_CREATED)
async def choose_role(
    request: RoleSelectRequest,
    account: UserAccount = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    """Create the talent or employer record for an account without a role."""
    try:
        select_role(db, account, request.role)
    except RoleAlreadySelectedError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return session_store.sync(db, account).profile
