"""
Job Search - turns listing query parameters into a filtered, paginated
SELECT over open jobs.

Filters:
- q: title, description or company name contain the text, or a skill
  equals it
- location: job location or company location contain the text
- job_type: exact match
- location_types / experience_levels: job value is one of the list
- featured: featured jobs only

Results are ordered featured first, then newest first.
"""

import math
from dataclasses import asdict, dataclass, field
from typing import List, Optional, Tuple

from sqlalchemy import String, cast, func, or_, select
from sqlalchemy.orm import Session, selectinload

from jobboard.models import Company, Job, JobStatus


@dataclass
class JobSearchParams:
    q: str = ""
    location: str = ""
    job_type: Optional[str] = None
    location_types: List[str] = field(default_factory=list)
    experience_levels: List[str] = field(default_factory=list)
    featured: bool = False
    page: int = 1
    limit: int = 20

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def to_dict(self) -> dict:
        data = asdict(self)
        data["q"] = data["q"].strip()
        data["location"] = data["location"].strip()
        data["location_types"] = sorted(set(data["location_types"]))
        data["experience_levels"] = sorted(set(data["experience_levels"]))
        return data


def build_conditions(params: JobSearchParams) -> list:
    """WHERE conditions for a search; all of them must hold."""
    conditions = [Job.status == JobStatus.OPEN.value]

    if params.featured:
        conditions.append(Job.featured.is_(True))

    query = params.q.strip()
    if query:
        conditions.append(or_(
            Job.title.icontains(query, autoescape=True),
            Job.description.icontains(query, autoescape=True),
            Company.name.icontains(query, autoescape=True),
            # skills is a JSON array of strings; match one element exactly
            cast(Job.skills, String).icontains(f'"{query}"', autoescape=True),
        ))

    location = params.location.strip()
    if location:
        conditions.append(or_(
            Job.location.icontains(location, autoescape=True),
            Company.location.icontains(location, autoescape=True),
        ))

    if params.job_type:
        conditions.append(Job.job_type == params.job_type)

    if params.location_types:
        conditions.append(Job.location_type.in_(params.location_types))

    if params.experience_levels:
        conditions.append(Job.experience_level.in_(params.experience_levels))

    return conditions


def search_jobs(db: Session, params: JobSearchParams) -> Tuple[List[Job], int]:
    """Return one page of matching jobs (companies loaded) and the total count."""
    conditions = build_conditions(params)

    total = db.scalar(
        select(func.count(Job.id)).join(Job.company).where(*conditions)
    ) or 0

    jobs = db.scalars(
        select(Job)
        .join(Job.company)
        .where(*conditions)
        .options(selectinload(Job.company))
        .order_by(Job.featured.desc(), Job.created_at.desc())
        .offset(params.offset)
        .limit(params.limit)
    ).all()

    return list(jobs), total


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0
