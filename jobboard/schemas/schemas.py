"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
JSON keys are camelCase (userId, locationType, salaryMin); Python
attributes stay snake_case.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, computed_field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from jobboard.models.enums import (
    ApplicationStatus, ExperienceLevel, JobStatus, JobType, LocationType, UserRole
)
from jobboard.utils.formatting import (
    format_experience_level, format_job_type, format_location_type, format_salary, time_ago
)


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ============================================================
# AUTH SCHEMAS
# ============================================================

class SignUpRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    name: str = Field(..., min_length=1, max_length=255)
    user_type: Literal["user", "company"] = "user"
    company_name: Optional[str] = Field(None, max_length=255)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()


class SignInRequest(CamelModel):
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()


class UserResponse(CamelModel):
    id: str
    email: str
    name: Optional[str] = None
    role: UserRole
    avatar: Optional[str] = None
    location: Optional[str] = None
    headline: Optional[str] = None
    bio: Optional[str] = None
    skills: List[str] = []
    resume: Optional[str] = None
    portfolio: Optional[str] = None
    verified: bool = False
    created_at: datetime


class AuthResponse(CamelModel):
    user: UserResponse
    message: str


# ============================================================
# PROFILE SCHEMAS
# ============================================================

class ProfileUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    location: Optional[str] = None
    headline: Optional[str] = None
    bio: Optional[str] = None
    skills: Optional[List[str]] = None
    avatar: Optional[str] = None
    resume: Optional[str] = None
    portfolio: Optional[str] = None


class ProfileResponse(CamelModel):
    profile: UserResponse


# ============================================================
# COMPANY SCHEMAS
# ============================================================

class CompanySummary(CamelModel):
    id: str
    name: str
    logo: Optional[str] = None
    location: Optional[str] = None


class CompanyDetail(CompanySummary):
    description: Optional[str] = None
    website: Optional[str] = None
    size: Optional[str] = None


class CompanyResponse(CompanyDetail):
    user_id: str
    email: str
    verified: bool = False
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    created_at: datetime


class CompanyUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    logo: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    size: Optional[str] = None
    contact_name: Optional[str] = None
    contact_email: Optional[EmailStr] = None


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobCreate(CamelModel):
    title: str = Field(..., min_length=3, max_length=255)
    description: str = Field(..., min_length=1)
    responsibilities: List[str] = []
    qualifications: List[str] = []
    location: Optional[str] = None
    location_type: LocationType = LocationType.ONSITE
    job_type: JobType = JobType.FULL_TIME
    experience_level: ExperienceLevel = ExperienceLevel.MID
    salary_min: Optional[float] = Field(None, ge=0)
    salary_max: Optional[float] = Field(None, ge=0)
    currency: str = Field("USD", min_length=3, max_length=3)
    skills: List[str] = []
    application_url: Optional[str] = None
    application_email: Optional[EmailStr] = None
    questions: List[str] = []
    status: JobStatus = JobStatus.OPEN
    featured: bool = False

    @model_validator(mode="after")
    def check_salary_range(self):
        if self.salary_min is not None and self.salary_max is not None and self.salary_max < self.salary_min:
            raise ValueError("salaryMax must be greater than or equal to salaryMin")
        return self


class JobUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=3, max_length=255)
    description: Optional[str] = None
    responsibilities: Optional[List[str]] = None
    qualifications: Optional[List[str]] = None
    location: Optional[str] = None
    location_type: Optional[LocationType] = None
    job_type: Optional[JobType] = None
    experience_level: Optional[ExperienceLevel] = None
    salary_min: Optional[float] = Field(None, ge=0)
    salary_max: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    skills: Optional[List[str]] = None
    application_url: Optional[str] = None
    application_email: Optional[EmailStr] = None
    questions: Optional[List[str]] = None
    status: Optional[JobStatus] = None
    featured: Optional[bool] = None


class JobResponse(CamelModel):
    id: str
    company_id: str
    title: str
    description: str
    responsibilities: List[str] = []
    qualifications: List[str] = []
    location: Optional[str] = None
    location_type: LocationType
    job_type: JobType
    experience_level: ExperienceLevel
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    currency: str
    skills: List[str] = []
    application_url: Optional[str] = None
    application_email: Optional[str] = None
    questions: List[str] = []
    status: JobStatus
    featured: bool
    views: int
    created_at: datetime
    updated_at: datetime
    company: CompanySummary


class ApplicantRef(CamelModel):
    id: str
    user_id: str


class JobDisplay(CamelModel):
    job_type: str
    location_type: str
    experience_level: str
    salary: Optional[str] = None
    posted: str


class JobDetailResponse(JobResponse):
    company: CompanyDetail
    applications: List[ApplicantRef] = []

    @computed_field
    @property
    def display(self) -> JobDisplay:
        return JobDisplay(
            job_type=format_job_type(self.job_type),
            location_type=format_location_type(self.location_type),
            experience_level=format_experience_level(self.experience_level),
            salary=format_salary(self.salary_min, self.salary_max, self.currency),
            posted=time_ago(self.created_at.replace(tzinfo=None)),
        )


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class JobListResponse(CamelModel):
    jobs: List[JobResponse]
    pagination: Pagination


class FilterOption(CamelModel):
    value: str
    label: str


class JobFiltersResponse(CamelModel):
    job_types: List[FilterOption]
    location_types: List[FilterOption]
    experience_levels: List[FilterOption]


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationCreate(CamelModel):
    cover_letter: Optional[str] = None
    answers: Optional[Dict[str, Any]] = None


class ApplicationStatusUpdate(CamelModel):
    status: ApplicationStatus


class CompanyName(CamelModel):
    name: str


class ApplicationJobSummary(CamelModel):
    id: str
    title: str
    company: CompanyName


class ApplicantSummary(CamelModel):
    id: str
    name: Optional[str] = None
    email: str
    headline: Optional[str] = None
    resume: Optional[str] = None


class ApplicationResponse(CamelModel):
    id: str
    user_id: str
    job_id: str
    status: ApplicationStatus
    cover_letter: Optional[str] = None
    answers: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime
    job: Optional[ApplicationJobSummary] = None


class CompanyApplicationResponse(ApplicationResponse):
    user: ApplicantSummary


class ApplyResponse(CamelModel):
    message: str
    application: ApplicationResponse


class SavedJobResponse(CamelModel):
    id: str
    job_id: str
    created_at: datetime
    job: JobResponse


# ============================================================
# PUBLIC COMPANY PAGE
# ============================================================

class CompanyPageResponse(CamelModel):
    company: CompanyDetail
    jobs: List[JobResponse]


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(CamelModel):
    message: str


class ErrorResponse(CamelModel):
    error: str
