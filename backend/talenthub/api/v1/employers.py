"""
Employer profile API endpoints.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from talenthub.api.v1.auth import get_current_account, get_current_session, require_role
from talenthub.db.session import get_db
from talenthub.models import UserAccount
from talenthub.schemas.profile import (
    COMPANY_SIZES,
    EmployerProfileOut,
    EmployerProfileUpdate,
    employer_to_out,
)
from talenthub.services.profiles import get_employer, save_employer_profile

logger = logging.getLogger("employers")

router = APIRouter()


@router.get("/company-sizes")
async def get_company_sizes():
    return {"company_sizes": COMPANY_SIZES}


@router.get("/me", response_model=EmployerProfileOut)
async def get_my_profile(
    session=Depends(require_role("employer")),
    account: UserAccount = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    """
    Load the employer edit form.

    A profile that has never been saved comes back empty apart from the
    account email.
    """
    try:
        employer = get_employer(db, account.uid)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching employer profile: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load profile. Please try again.",
        )

    if employer is None:
        return EmployerProfileOut(id=account.uid, email=account.email, userId=account.uid)
    return employer_to_out(employer)


@router.put("/me", response_model=EmployerProfileOut)
async def update_my_profile(
    update: EmployerProfileUpdate,
    session=Depends(require_role("employer")),
    account: UserAccount = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    """Merge the submitted fields into the employer profile."""
    try:
        employer = save_employer_profile(db, account, update)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error saving employer profile: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save profile. Please try again.",
        )
    return employer_to_out(employer)


@router.get("/{employer_id}", response_model=EmployerProfileOut)
async def get_employer_profile(
    employer_id: str,
    session=Depends(get_current_session),
    db: Session = Depends(get_db),
):
    employer = get_employer(db, employer_id)
    if not employer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Employer not found",
        )
    return employer_to_out(employer)
