#!/usr/bin/env python3
"""
Seed Script

Wipes all job board data and inserts demo users, companies and jobs.
Usage: python scripts/seed.py
"""
import sys
sys.path.insert(0, '.')

from sqlalchemy import delete

from jobboard.core.auth import hash_password
from jobboard.db.database import get_db_session, init_db
from jobboard.models import (
    Application, Company, ExperienceLevel, Job, JobStatus, JobType, LocationType,
    SavedJob, Session, User, UserRole
)

DEMO_PASSWORD = "password123"

JOBS = [
    {
        "company": "TechCorp",
        "title": "Senior Full Stack Developer",
        "description": "We are looking for a Senior Full Stack Developer to join our growing team. "
                       "You will be responsible for developing and maintaining web applications "
                       "using modern technologies.",
        "responsibilities": [
            "Develop and maintain web applications using React and Node.js",
            "Collaborate with cross-functional teams to define and implement new features",
            "Write clean, maintainable, and well-tested code",
            "Participate in code reviews and technical discussions",
            "Mentor junior developers",
        ],
        "qualifications": [
            "5+ years of experience in full-stack development",
            "Strong proficiency in React, Node.js, and TypeScript",
            "Experience with PostgreSQL and Redis",
            "Knowledge of cloud platforms (AWS, GCP, or Azure)",
            "Excellent communication and teamwork skills",
        ],
        "location": "San Francisco, CA",
        "location_type": LocationType.HYBRID,
        "job_type": JobType.FULL_TIME,
        "salary_min": 120000,
        "salary_max": 180000,
        "skills": ["React", "Node.js", "TypeScript", "PostgreSQL", "AWS"],
        "experience_level": ExperienceLevel.SENIOR,
        "featured": True,
    },
    {
        "company": "TechCorp",
        "title": "Frontend Developer",
        "description": "Join our team as a Frontend Developer and help us build beautiful, "
                       "responsive user interfaces that delight our customers.",
        "responsibilities": [
            "Build responsive web applications using React and modern CSS",
            "Implement pixel-perfect designs from Figma mockups",
            "Optimize applications for maximum speed and scalability",
            "Collaborate with designers and backend developers",
            "Ensure cross-browser compatibility",
        ],
        "qualifications": [
            "3+ years of experience in frontend development",
            "Strong proficiency in React and JavaScript/TypeScript",
            "Experience with CSS frameworks and preprocessors",
            "Knowledge of responsive design principles",
            "Attention to detail and design sensibility",
        ],
        "location": "Remote",
        "location_type": LocationType.REMOTE,
        "job_type": JobType.FULL_TIME,
        "salary_min": 80000,
        "salary_max": 120000,
        "skills": ["React", "JavaScript", "CSS", "HTML", "Figma"],
        "experience_level": ExperienceLevel.MID,
    },
    {
        "company": "StartupXYZ",
        "title": "DevOps Engineer",
        "description": "We are seeking a DevOps Engineer to help us scale our infrastructure "
                       "and improve our deployment processes.",
        "responsibilities": [
            "Design and maintain CI/CD pipelines",
            "Manage cloud infrastructure on AWS",
            "Implement monitoring and alerting systems",
            "Automate deployment and scaling processes",
            "Ensure security best practices",
        ],
        "qualifications": [
            "4+ years of experience in DevOps or Site Reliability Engineering",
            "Strong knowledge of AWS services",
            "Experience with Docker and Kubernetes",
            "Proficiency in Infrastructure as Code (Terraform, CloudFormation)",
            "Knowledge of monitoring tools (Prometheus, Grafana, DataDog)",
        ],
        "location": "Austin, TX",
        "location_type": LocationType.ONSITE,
        "job_type": JobType.FULL_TIME,
        "salary_min": 100000,
        "salary_max": 150000,
        "skills": ["AWS", "Docker", "Kubernetes", "Terraform", "Python"],
        "experience_level": ExperienceLevel.SENIOR,
    },
    {
        "company": "StartupXYZ",
        "title": "React Developer (Contract)",
        "description": "Short-term contract position to help build a new customer dashboard "
                       "using React and TypeScript.",
        "responsibilities": [
            "Develop new React components for customer dashboard",
            "Integrate with existing APIs",
            "Implement responsive design",
            "Write unit tests for components",
            "Document code and components",
        ],
        "qualifications": [
            "2+ years of experience with React",
            "Strong TypeScript skills",
            "Experience with testing libraries (Jest, React Testing Library)",
            "Ability to work independently",
            "Available for 3-month contract",
        ],
        "location": "Remote",
        "location_type": LocationType.REMOTE,
        "job_type": JobType.CONTRACT,
        "salary_min": 60,
        "salary_max": 80,
        "skills": ["React", "TypeScript", "Jest", "CSS"],
        "experience_level": ExperienceLevel.MID,
    },
    {
        "company": "TechCorp",
        "title": "Junior Software Developer",
        "description": "Great opportunity for a junior developer to join our team and grow "
                       "their skills in a supportive environment.",
        "responsibilities": [
            "Assist in developing web applications",
            "Write and maintain unit tests",
            "Participate in code reviews",
            "Learn new technologies and best practices",
            "Collaborate with senior developers",
        ],
        "qualifications": [
            "0-2 years of professional experience",
            "Basic knowledge of JavaScript and React",
            "Understanding of HTML and CSS",
            "Eagerness to learn and grow",
            "Good communication skills",
        ],
        "location": "San Francisco, CA",
        "location_type": LocationType.HYBRID,
        "job_type": JobType.FULL_TIME,
        "salary_min": 70000,
        "salary_max": 90000,
        "skills": ["JavaScript", "React", "HTML", "CSS"],
        "experience_level": ExperienceLevel.ENTRY,
    },
]


def clear_data(db):
    # Reverse order of dependencies
    for model in (SavedJob, Application, Session, Job, Company, User):
        db.execute(delete(model))


def seed(db):
    password = hash_password(DEMO_PASSWORD)

    db.add_all([
        User(
            email="john.doe@example.com", password=password, name="John Doe",
            role=UserRole.USER.value, location="San Francisco, CA",
            headline="Full Stack Developer",
            bio="Passionate full-stack developer with 5+ years of experience in React, "
                "Node.js, and cloud technologies.",
            skills=["React", "Node.js", "TypeScript", "PostgreSQL", "AWS"], verified=True,
        ),
        User(
            email="jane.smith@example.com", password=password, name="Jane Smith",
            role=UserRole.USER.value, location="New York, NY",
            headline="Senior Frontend Developer",
            bio="Creative frontend developer specializing in React and modern web technologies.",
            skills=["React", "Vue.js", "JavaScript", "CSS", "Figma"], verified=True,
        ),
    ])
    print("✅ Users created successfully")

    techcorp_user = User(email="hr@techcorp.com", password=password, name="TechCorp HR",
                         role=UserRole.COMPANY.value, verified=True)
    startup_user = User(email="hiring@startupxyz.com", password=password, name="StartupXYZ Hiring",
                        role=UserRole.COMPANY.value, verified=True)
    db.add_all([techcorp_user, startup_user])
    db.flush()

    companies = {
        "TechCorp": Company(
            name="TechCorp", email="hr@techcorp.com", website="https://techcorp.com",
            description="Leading technology company building the future of software development.",
            location="San Francisco, CA", size="201-500", verified=True,
            contact_name="Sarah Johnson", contact_email="sarah@techcorp.com",
            user_id=techcorp_user.id,
        ),
        "StartupXYZ": Company(
            name="StartupXYZ", email="hiring@startupxyz.com", website="https://startupxyz.com",
            description="Fast-growing startup revolutionizing the fintech industry.",
            location="Austin, TX", size="11-50", verified=True,
            contact_name="Mike Chen", contact_email="mike@startupxyz.com",
            user_id=startup_user.id,
        ),
    }
    db.add_all(companies.values())
    db.flush()
    print("✅ Companies created successfully")

    print("🚀 Creating jobs...")
    for data in JOBS:
        data = dict(data)
        company = companies[data.pop("company")]
        job = Job(
            company_id=company.id,
            status=JobStatus.OPEN.value,
            location_type=data.pop("location_type").value,
            job_type=data.pop("job_type").value,
            experience_level=data.pop("experience_level").value,
            **data,
        )
        db.add(job)
        print(f"✅ Created job: {job.title}")


def main():
    init_db()
    with get_db_session() as db:
        print("🧹 Clearing existing data...")
        clear_data(db)
        print("🌱 Starting fresh seed...")
        seed(db)

    print("✅ Seed completed successfully!")
    print(f"Demo accounts (password: {DEMO_PASSWORD}):")
    print("- john.doe@example.com")
    print("- jane.smith@example.com")
    print("- hr@techcorp.com (TechCorp)")
    print("- hiring@startupxyz.com (StartupXYZ)")


if __name__ == "__main__":
    main()
