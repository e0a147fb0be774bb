"""
Navigation API endpoints.

Lets the web client ask, on every path change, whether it must redirect.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from talenthub.api.v1.auth import optional_oauth2_scheme
from talenthub.db.session import get_db
from talenthub.schemas.profile import UserProfile
from talenthub.services.identity import identity_provider
from talenthub.services.route_guard import evaluate_route, normalize_path
from talenthub.services.session_store import session_store

router = APIRouter()


class GuardDecision(BaseModel):
    path: str
    authenticated: bool
    redirect_to: Optional[str] = None
    profile: Optional[UserProfile] = None


@router.get("/guard", response_model=GuardDecision)
async def check_route(
    path: str = "/",
    token: Optional[str] = Depends(optional_oauth2_scheme),
    db: Session = Depends(get_db),
):
    """
    Evaluate the route guard for `path`.

    Works with or without a bearer token; an invalid token counts as
    unauthenticated.
    """
    account = identity_provider.account_from_token(db, token) if token else None

    profile = None
    if account is not None:
        profile = session_store.sync(db, account).profile

    return GuardDecision(
        path=normalize_path(path),
        authenticated=account is not None,
        redirect_to=evaluate_route(path, account is not None, profile),
        profile=profile,
    )
