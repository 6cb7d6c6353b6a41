"""
Display formatting for job fields.

Enum values map to the labels shown in job cards and filter menus;
unknown values pass through unchanged.
"""

from datetime import datetime
from typing import Dict, List, Optional

from jobboard.models.enums import ExperienceLevel, JobType, LocationType
from jobboard.utils import utcnow

JOB_TYPE_LABELS: Dict[str, str] = {
    JobType.FULL_TIME.value: "Full-time",
    JobType.PART_TIME.value: "Part-time",
    JobType.CONTRACT.value: "Contract",
    JobType.FREELANCE.value: "Freelance",
}

LOCATION_TYPE_LABELS: Dict[str, str] = {
    LocationType.REMOTE.value: "Remote",
    LocationType.ONSITE.value: "On-site",
    LocationType.HYBRID.value: "Hybrid",
}

EXPERIENCE_LEVEL_LABELS: Dict[str, str] = {
    ExperienceLevel.ENTRY.value: "Entry Level",
    ExperienceLevel.MID.value: "Mid Level",
    ExperienceLevel.SENIOR.value: "Senior Level",
    ExperienceLevel.LEAD.value: "Lead",
    ExperienceLevel.EXECUTIVE.value: "Executive",
}

CURRENCY_SYMBOLS: Dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "INR": "₹",
    "JPY": "¥",
    "CAD": "CA$",
    "AUD": "A$",
}


def _value(item) -> str:
    return getattr(item, "value", item)


def format_job_type(job_type) -> str:
    return JOB_TYPE_LABELS.get(_value(job_type), _value(job_type))


def format_location_type(location_type) -> str:
    return LOCATION_TYPE_LABELS.get(_value(location_type), _value(location_type))


def format_experience_level(level) -> str:
    return EXPERIENCE_LEVEL_LABELS.get(_value(level), _value(level))


def format_amount(amount: float, currency: str = "USD") -> str:
    """Whole-unit amount with thousands separators, e.g. $120,000."""
    symbol = CURRENCY_SYMBOLS.get(currency.upper())
    number = f"{round(amount):,}"
    if symbol:
        return f"{symbol}{number}"
    return f"{currency.upper()} {number}"


def format_salary(salary_min: Optional[float], salary_max: Optional[float], currency: str = "USD") -> Optional[str]:
    """
    Format a compensation range.

    Returns None when neither bound is set, "min - max" when both are,
    otherwise whichever bound is present.
    """
    if not salary_min and not salary_max:
        return None
    if salary_min and salary_max:
        return f"{format_amount(salary_min, currency)} - {format_amount(salary_max, currency)}"
    return format_amount(salary_min or salary_max, currency)


def time_ago(posted: datetime, now: Optional[datetime] = None) -> str:
    """Relative age of a posting: 5h ago, 3d ago, 2w ago, else the date."""
    now = now or utcnow()
    hours = int((now - posted).total_seconds() // 3600)

    if hours < 24:
        return f"{max(hours, 0)}h ago"

    days = hours // 24
    if days < 7:
        return f"{days}d ago"
    if days < 30:
        return f"{days // 7}w ago"

    return posted.date().isoformat()


def filter_options(labels: Dict[str, str]) -> List[Dict[str, str]]:
    return [{"value": value, "label": label} for value, label in labels.items()]
