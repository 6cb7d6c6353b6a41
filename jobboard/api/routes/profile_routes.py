"""
Profile Routes

GET /profile - Get own profile
PUT /profile - Update profile (only provided fields)
GET /profile/applications - Get my applications
GET /profile/saved-jobs - Get my saved jobs
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from jobboard.core.auth import get_token_payload
from jobboard.db.database import get_db_session
from jobboard.models import Application, Job, SavedJob, User
from jobboard.schemas.schemas import (
    ApplicationResponse, ProfileResponse, ProfileUpdate, SavedJobResponse, UserResponse
)

router = APIRouter(prefix="/profile", tags=["Profile"])


def _get_user_or_404(db, user_id: str) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("", response_model=ProfileResponse)
async def get_profile(payload: dict = Depends(get_token_payload)):
    """Get the signed-in user's profile."""
    with get_db_session() as db:
        user = _get_user_or_404(db, payload["sub"])
        return ProfileResponse(profile=UserResponse.model_validate(user))


@router.put("", response_model=ProfileResponse)
async def update_profile(data: ProfileUpdate, payload: dict = Depends(get_token_payload)):
    """Update profile fields. Omitted fields are left unchanged."""
    updates = data.model_dump(exclude_unset=True)
    if "name" in updates and updates["name"] is None:
        raise HTTPException(status_code=400, detail="Name cannot be empty")
    if "skills" in updates and updates["skills"] is None:
        updates["skills"] = []

    with get_db_session() as db:
        user = _get_user_or_404(db, payload["sub"])
        for field, value in updates.items():
            setattr(user, field, value)
        db.flush()
        db.refresh(user)
        return ProfileResponse(profile=UserResponse.model_validate(user))


@router.get("/applications", response_model=List[ApplicationResponse])
async def get_my_applications(payload: dict = Depends(get_token_payload)):
    """All job applications of the signed-in user, newest first."""
    with get_db_session() as db:
        applications = db.scalars(
            select(Application)
            .where(Application.user_id == payload["sub"])
            .options(selectinload(Application.job).selectinload(Job.company))
            .order_by(Application.created_at.desc())
        ).all()
        return [ApplicationResponse.model_validate(a) for a in applications]


@router.get("/saved-jobs", response_model=List[SavedJobResponse])
async def get_saved_jobs(payload: dict = Depends(get_token_payload)):
    """Jobs bookmarked by the signed-in user, most recently saved first."""
    with get_db_session() as db:
        saved = db.scalars(
            select(SavedJob)
            .where(SavedJob.user_id == payload["sub"])
            .options(selectinload(SavedJob.job).selectinload(Job.company))
            .order_by(SavedJob.created_at.desc())
        ).all()
        return [SavedJobResponse.model_validate(s) for s in saved]
