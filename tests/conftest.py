"""
Shared fixtures.

The app runs against a throwaway SQLite file with the MongoDB cache
disabled; tables are recreated for every test.
"""

import os
import shutil
import tempfile
from contextlib import contextmanager

_TEST_DIR = tempfile.mkdtemp(prefix="jobboard-tests-")

os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_DIR}/test.db"
os.environ["CACHE_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["JWT_REFRESH_SECRET_KEY"] = "test-refresh-secret"
os.environ["COOKIE_SECURE"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select

from jobboard.db.database import Base, engine, get_db_session
from jobboard.main import app

PASSWORD = "password123"


def pytest_sessionfinish(session, exitstatus):
    engine.dispose()
    shutil.rmtree(_TEST_DIR, ignore_errors=True)


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


def count_rows(model, **filters) -> int:
    """Row count for a model, read in its own short session."""
    with get_db_session() as session:
        conditions = [getattr(model, name) == value for name, value in filters.items()]
        query = select(func.count()).select_from(model).where(*conditions)
        return session.scalar(query)


@contextmanager
def session_hiding(model):
    """
    A real session whose scalar() never finds rows of model, as if another
    request inserted them after the existence check ran.
    """
    with get_db_session() as session:
        real_scalar = session.scalar

        def scalar(statement, *args, **kwargs):
            if statement.column_descriptions[0]["entity"] is model:
                return None
            return real_scalar(statement, *args, **kwargs)

        session.scalar = scalar
        yield session


@pytest.fixture
def make_client():
    """Factory for independent clients, each with its own cookie jar."""
    clients = []

    def _make() -> TestClient:
        client = TestClient(app)
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
def client(make_client):
    return make_client()


def signup(client: TestClient, email: str, name: str = "Test User", company_name: str = None):
    body = {"email": email, "password": PASSWORD, "name": name}
    if company_name:
        body.update({"userType": "company", "companyName": company_name})
    response = client.post("/api/auth/signup", json=body)
    assert response.status_code == 201, response.text
    return response.json()["user"]


@pytest.fixture
def seeker(make_client):
    """A signed-in job seeker: (client, user)."""
    client = make_client()
    user = signup(client, "seeker@example.com", name="Jane Seeker")
    return client, user


@pytest.fixture
def company(make_client):
    """A signed-in company account: (client, user)."""
    client = make_client()
    user = signup(client, "hr@techcorp.com", name="TechCorp HR", company_name="TechCorp")
    return client, user


@pytest.fixture
def other_company(make_client):
    client = make_client()
    user = signup(client, "hiring@startupxyz.com", name="StartupXYZ Hiring", company_name="StartupXYZ")
    return client, user


def job_payload(**overrides) -> dict:
    payload = {
        "title": "Senior Full Stack Developer",
        "description": "Build and maintain web applications.",
        "responsibilities": ["Ship features"],
        "qualifications": ["5+ years experience"],
        "location": "San Francisco, CA",
        "locationType": "HYBRID",
        "jobType": "FULL_TIME",
        "experienceLevel": "SENIOR",
        "salaryMin": 120000,
        "salaryMax": 180000,
        "skills": ["React", "Node.js", "AWS"],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def create_job():
    """Post a job as the given company client and return the JSON body."""
    def _create(company_client: TestClient, **overrides) -> dict:
        response = company_client.post("/api/jobs", json=job_payload(**overrides))
        assert response.status_code == 201, response.text
        return response.json()

    return _create
