"""
Job Board API
Job seekers search, save and apply to postings; companies post jobs and
review applications.

Architecture:
- Relational database (PostgreSQL via SQLAlchemy): users, companies, jobs,
  applications, saved jobs, sessions
- MongoDB: short-lived response cache for job listings and details
"""

__version__ = "1.0.0"
