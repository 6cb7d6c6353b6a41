"""
Company Routes

GET /companies/profile - Get own company profile
PUT /companies/profile - Update company profile
GET /companies/jobs - Get company's jobs (any status)
GET /companies/applications - Get applications received
PUT /companies/applications/{id}/status - Review an application
GET /companies/{company_id} - Public company page with open jobs
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from jobboard.core.auth import get_current_company
from jobboard.db.database import get_db_session
from jobboard.models import Application, ApplicationStatus, Company, Job, JobStatus
from jobboard.schemas.schemas import (
    ApplicationStatusUpdate, CompanyApplicationResponse, CompanyDetail, CompanyPageResponse,
    CompanyResponse, CompanyUpdate, JobResponse, MessageResponse
)
from jobboard.services.cache_service import get_response_cache

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.get("/profile", response_model=CompanyResponse)
async def get_profile(company: dict = Depends(get_current_company)):
    """Get current company's profile."""
    with get_db_session() as db:
        return CompanyResponse.model_validate(db.get(Company, company["company_id"]))


@router.put("/profile", response_model=CompanyResponse)
async def update_profile(data: CompanyUpdate, company: dict = Depends(get_current_company)):
    """Update company profile. Only provided fields are updated."""
    updates = data.model_dump(exclude_unset=True)
    if "name" in updates and updates["name"] is None:
        raise HTTPException(status_code=400, detail="Company name cannot be empty")
    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")

    with get_db_session() as db:
        record = db.get(Company, company["company_id"])
        for field, value in updates.items():
            setattr(record, field, value)
        db.flush()
        db.refresh(record)
        response = CompanyResponse.model_validate(record)

    # Listings and details embed company name, logo and location
    get_response_cache().invalidate_prefix("job")
    return response


@router.get("/jobs", response_model=List[JobResponse])
async def get_company_jobs(
    status: Optional[JobStatus] = Query(None),
    company: dict = Depends(get_current_company)
):
    """Get all jobs posted by this company, newest first."""
    with get_db_session() as db:
        query = (
            select(Job)
            .where(Job.company_id == company["company_id"])
            .options(selectinload(Job.company))
            .order_by(Job.created_at.desc())
        )
        if status:
            query = query.where(Job.status == status.value)
        return [JobResponse.model_validate(job) for job in db.scalars(query).all()]


@router.get("/applications", response_model=List[CompanyApplicationResponse])
async def get_applications(
    job_id: Optional[str] = Query(None),
    status: Optional[ApplicationStatus] = Query(None),
    company: dict = Depends(get_current_company)
):
    """Get all applications for company's job postings."""
    with get_db_session() as db:
        query = (
            select(Application)
            .join(Application.job)
            .where(Job.company_id == company["company_id"])
            .options(
                selectinload(Application.user),
                selectinload(Application.job).selectinload(Job.company),
            )
            .order_by(Application.created_at.desc())
        )
        if job_id:
            query = query.where(Application.job_id == job_id)
        if status:
            query = query.where(Application.status == status.value)

        return [CompanyApplicationResponse.model_validate(a) for a in db.scalars(query).all()]


@router.put("/applications/{application_id}/status", response_model=MessageResponse)
async def update_application_status(
    application_id: str,
    update: ApplicationStatusUpdate,
    company: dict = Depends(get_current_company)
):
    """Review an application: move it to PENDING, REVIEWED, ACCEPTED or REJECTED."""
    with get_db_session() as db:
        application = db.scalar(
            select(Application)
            .join(Application.job)
            .where(Application.id == application_id, Job.company_id == company["company_id"])
        )
        if application is None:
            raise HTTPException(status_code=404, detail="Application not found")

        application.status = update.status.value

    logger.info(f"Application {application_id} marked {update.status.value}")
    return MessageResponse(message=f"Status updated to '{update.status.value}'")


@router.get("/{company_id}", response_model=CompanyPageResponse)
async def get_company_page(company_id: str):
    """Public company page: profile plus its open jobs."""
    with get_db_session() as db:
        record = db.get(Company, company_id)
        if record is None:
            raise HTTPException(status_code=404, detail="Company not found")

        jobs = db.scalars(
            select(Job)
            .where(Job.company_id == company_id, Job.status == JobStatus.OPEN.value)
            .options(selectinload(Job.company))
            .order_by(Job.featured.desc(), Job.created_at.desc())
        ).all()

        return CompanyPageResponse(
            company=CompanyDetail.model_validate(record),
            jobs=[JobResponse.model_validate(job) for job in jobs],
        )
