"""
Job Routes

GET /jobs - List open jobs with filters and pagination
GET /jobs/filters - Filter options with display labels
GET /jobs/{job_id} - Get job details (increments view count)
POST /jobs - Create job posting (company only)
PUT /jobs/{job_id} - Update job (owning company only)
DELETE /jobs/{job_id} - Delete job (owning company only)
POST /jobs/{job_id}/save - Bookmark a job
DELETE /jobs/{job_id}/save - Remove bookmark (idempotent)
POST /jobs/{job_id}/apply - Apply to job (job seekers only)
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from jobboard.core.auth import get_current_company, get_current_job_seeker, get_current_user
from jobboard.db.database import get_db_session
from jobboard.models import (
    Application, ExperienceLevel, Job, JobType, LocationType, SavedJob
)
from jobboard.schemas.schemas import (
    ApplicationCreate, ApplicationResponse, ApplyResponse, JobCreate, JobDetailResponse,
    JobFiltersResponse, JobListResponse, JobResponse, JobUpdate, MessageResponse, Pagination
)
from jobboard.services.cache_service import (
    JOB_LIST_PREFIX, get_response_cache, job_detail_key, job_list_key
)
from jobboard.services.job_search import JobSearchParams, page_count, search_jobs
from jobboard.utils.formatting import (
    EXPERIENCE_LEVEL_LABELS, JOB_TYPE_LABELS, LOCATION_TYPE_LABELS, filter_options
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["Jobs"])

# Fields a PUT may explicitly clear with null
NULLABLE_JOB_FIELDS = {"location", "salary_min", "salary_max", "application_url", "application_email"}


@router.get("", response_model=JobListResponse)
async def list_jobs(
    q: str = Query("", description="Search title, description, company name and skills"),
    location: str = Query("", description="Search job and company location"),
    job_type: Optional[JobType] = Query(None, alias="jobType"),
    location_type: List[LocationType] = Query([], alias="locationType"),
    experience_level: List[ExperienceLevel] = Query([], alias="experienceLevel"),
    featured: bool = Query(False),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
):
    """List open job postings, featured first then newest. Cached for a few minutes."""
    params = JobSearchParams(
        q=q,
        location=location,
        job_type=job_type.value if job_type else None,
        location_types=[t.value for t in location_type],
        experience_levels=[e.value for e in experience_level],
        featured=featured,
        page=page,
        limit=limit,
    )

    cache = get_response_cache()
    cache_key = job_list_key(params.to_dict())
    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    with get_db_session() as db:
        jobs, total = search_jobs(db, params)
        result = JobListResponse(
            jobs=[JobResponse.model_validate(job) for job in jobs],
            pagination=Pagination(page=page, limit=limit, total=total, pages=page_count(total, limit)),
        )

    payload = result.model_dump(mode="json", by_alias=True)
    cache.set(cache_key, payload)
    return payload


@router.get("/filters", response_model=JobFiltersResponse)
async def get_filters():
    """Filter options for the job search form."""
    return JobFiltersResponse(
        job_types=filter_options(JOB_TYPE_LABELS),
        location_types=filter_options(LOCATION_TYPE_LABELS),
        experience_levels=filter_options(EXPERIENCE_LEVEL_LABELS),
    )


@router.get("/{job_id}", response_model=JobDetailResponse)
async def get_job(job_id: str):
    """
    Get a job with its company and applicant ids.

    Every request counts as a view, including those served from cache.
    """
    cache = get_response_cache()
    cache_key = job_detail_key(job_id)

    with get_db_session() as db:
        result = db.execute(
            update(Job).where(Job.id == job_id).values(views=Job.views + 1)
        )
        if result.rowcount == 0:
            cache.delete(cache_key)
            raise HTTPException(status_code=404, detail="Job not found")

        cached = cache.get(cache_key)
        if cached is not None:
            return cached

        job = db.scalar(
            select(Job)
            .where(Job.id == job_id)
            .options(selectinload(Job.company), selectinload(Job.applications))
            .execution_options(populate_existing=True)
        )
        payload = JobDetailResponse.model_validate(job).model_dump(mode="json", by_alias=True)

    cache.set(cache_key, payload)
    return payload


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(data: JobCreate, company: dict = Depends(get_current_company)):
    """Create a new job posting. Only companies can create jobs."""
    with get_db_session() as db:
        job = Job(company_id=company["company_id"], **data.model_dump(mode="json"))
        db.add(job)
        db.flush()
        db.refresh(job)
        response = JobResponse.model_validate(job)

    get_response_cache().invalidate_prefix(JOB_LIST_PREFIX)
    logger.info(f"Company {company['company_id']} created job {response.id}")
    return response


def _get_owned_job(db, job_id: str, company_id: str) -> Job:
    job = db.get(Job, job_id)
    if job is None or job.company_id != company_id:
        raise HTTPException(status_code=404, detail="Job not found or access denied")
    return job


@router.put("/{job_id}", response_model=JobResponse)
async def update_job(job_id: str, data: JobUpdate, company: dict = Depends(get_current_company)):
    """Update a job posting. Only the owning company can update; only sent fields change."""
    updates = {
        field: value
        for field, value in data.model_dump(mode="json", exclude_unset=True).items()
        if value is not None or field in NULLABLE_JOB_FIELDS
    }

    with get_db_session() as db:
        job = _get_owned_job(db, job_id, company["company_id"])

        for field, value in updates.items():
            setattr(job, field, value)

        if job.salary_min is not None and job.salary_max is not None and job.salary_max < job.salary_min:
            raise HTTPException(status_code=400, detail="salaryMax must be greater than or equal to salaryMin")

        db.flush()
        db.refresh(job)
        response = JobResponse.model_validate(job)

    get_response_cache().invalidate_job(job_id)
    return response


@router.delete("/{job_id}", response_model=MessageResponse)
async def delete_job(job_id: str, company: dict = Depends(get_current_company)):
    """Delete a job posting. Cascades to applications and saves."""
    with get_db_session() as db:
        job = _get_owned_job(db, job_id, company["company_id"])
        db.delete(job)

    get_response_cache().invalidate_job(job_id)
    logger.info(f"Company {company['company_id']} deleted job {job_id}")
    return MessageResponse(message="Job deleted successfully")


@router.post("/{job_id}/save", response_model=MessageResponse)
async def save_job(job_id: str, user: dict = Depends(get_current_user)):
    """Bookmark a job. A job can be saved once per user."""
    with get_db_session() as db:
        if db.scalar(select(Job.id).where(Job.id == job_id)) is None:
            raise HTTPException(status_code=404, detail="Job not found")

        existing = db.scalar(
            select(SavedJob.id).where(SavedJob.user_id == user["user_id"], SavedJob.job_id == job_id)
        )
        if existing:
            raise HTTPException(status_code=409, detail="Job already saved")

        db.add(SavedJob(user_id=user["user_id"], job_id=job_id))
        try:
            db.flush()
        except IntegrityError:
            # A concurrent save won the race on uq_saved_job_user_job
            raise HTTPException(status_code=409, detail="Job already saved")

    return MessageResponse(message="Job saved successfully")


@router.delete("/{job_id}/save", response_model=MessageResponse)
async def unsave_job(job_id: str, user: dict = Depends(get_current_user)):
    """Remove a bookmark. Succeeds whether or not the job was saved."""
    with get_db_session() as db:
        db.execute(
            delete(SavedJob).where(SavedJob.user_id == user["user_id"], SavedJob.job_id == job_id)
        )

    return MessageResponse(message="Job removed from saved list")


@router.post("/{job_id}/apply", response_model=ApplyResponse)
async def apply_to_job(
    job_id: str,
    application: Optional[ApplicationCreate] = None,
    user: dict = Depends(get_current_job_seeker),
):
    """Apply to a job. Job seekers only. Cannot apply twice to the same job."""
    application = application or ApplicationCreate()

    with get_db_session() as db:
        job = db.get(Job, job_id)
        if job is None:
            raise HTTPException(status_code=404, detail="Job not found")
        if not job.is_open:
            raise HTTPException(status_code=400, detail="This job is no longer accepting applications")

        existing = db.scalar(
            select(Application.id).where(Application.user_id == user["user_id"], Application.job_id == job_id)
        )
        if existing:
            raise HTTPException(status_code=409, detail="You have already applied for this job")

        record = Application(
            user_id=user["user_id"],
            job_id=job_id,
            cover_letter=application.cover_letter,
            answers=application.answers,
        )
        db.add(record)
        try:
            db.flush()
        except IntegrityError:
            raise HTTPException(status_code=409, detail="You have already applied for this job")

        db.refresh(record)
        response = ApplyResponse(
            message="Application submitted successfully",
            application=ApplicationResponse.model_validate(record),
        )

    # Detail payload embeds applicant ids
    get_response_cache().delete(job_detail_key(job_id))
    logger.info(f"User {user['user_id']} applied to job {job_id}")
    return response
