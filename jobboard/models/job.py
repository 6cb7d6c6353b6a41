"""
Job Model - a posting owned by a company.
"""

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobboard.db.database import Base
from jobboard.models.enums import ExperienceLevel, JobStatus, JobType, LocationType
from jobboard.utils import generate_uuid, utcnow

if TYPE_CHECKING:
    from jobboard.models.company import Company
    from jobboard.models.application import Application, SavedJob


class Job(Base):
    __tablename__ = "jobs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    company_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    responsibilities: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    qualifications: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    skills: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)
    questions: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)

    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    location_type: Mapped[str] = mapped_column(
        String(20), default=LocationType.ONSITE.value, nullable=False, index=True
    )
    job_type: Mapped[str] = mapped_column(String(20), default=JobType.FULL_TIME.value, nullable=False)
    experience_level: Mapped[str] = mapped_column(
        String(20), default=ExperienceLevel.MID.value, nullable=False, index=True
    )

    # Compensation
    salary_min: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    salary_max: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    currency: Mapped[str] = mapped_column(String(3), default="USD", nullable=False)

    # External application channels
    application_url: Mapped[Optional[str]] = mapped_column(String(2000), nullable=True)
    application_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    status: Mapped[str] = mapped_column(
        String(20), default=JobStatus.OPEN.value, nullable=False, index=True
    )
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)

    company: Mapped["Company"] = relationship("Company", back_populates="jobs")
    applications: Mapped[List["Application"]] = relationship(
        "Application",
        back_populates="job",
        cascade="all, delete-orphan",
        order_by="Application.created_at",
    )
    saved_by: Mapped[List["SavedJob"]] = relationship(
        "SavedJob", back_populates="job", cascade="all, delete-orphan"
    )

    @property
    def is_open(self) -> bool:
        return self.status == JobStatus.OPEN.value

    def __repr__(self) -> str:
        return f"<Job {self.title} ({self.status})>"
