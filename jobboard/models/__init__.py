"""
Models module - SQLAlchemy ORM models.

Importing this package registers every table on Base.metadata.
"""

from jobboard.models.enums import (
    ApplicationStatus,
    ExperienceLevel,
    JobStatus,
    JobType,
    LocationType,
    UserRole,
)
from jobboard.models.user import Session, User
from jobboard.models.company import Company
from jobboard.models.job import Job
from jobboard.models.application import Application, SavedJob

__all__ = [
    "ApplicationStatus",
    "ExperienceLevel",
    "JobStatus",
    "JobType",
    "LocationType",
    "UserRole",
    "User",
    "Session",
    "Company",
    "Job",
    "Application",
    "SavedJob",
]
