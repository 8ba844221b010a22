"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Seeded companies, users, jobs and applications
- Tokens for a regular user and an admin
"""

import os

# Must be set before the application modules read their settings
os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite://")
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobly.core.database import Base, get_db
from jobly.core.security import create_token
from jobly.crud import company as company_crud
from jobly.crud import job as job_crud
from jobly.crud import user as user_crud
from jobly.schemas.company import CompanyCreateRequest
from jobly.schemas.job import JobCreateRequest
import jobly.models  # noqa: F401  (registers tables on Base.metadata)
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def seeded(db_session):
    """
    Seed three companies (c1-c3), three users (u1-u3, u2 is an admin) and
    three jobs (j1-j3, all at c1). u1 applied to j1; u2 to j1 and j2.

    Returns the created job ids in order.
    """
    for n in range(1, 4):
        company_crud.create(db_session, CompanyCreateRequest(
            handle=f"c{n}",
            name=f"C{n}",
            num_employees=n,
            description=f"Desc{n}",
            logo_url=f"http://c{n}.img",
        ))
        user_crud.register(
            db_session,
            username=f"u{n}",
            password=f"password{n}",
            first_name=f"U{n}F",
            last_name=f"U{n}L",
            email=f"user{n}@user.com",
            is_admin=(n % 2 == 0),
        )

    job_ids = []
    for n in range(1, 4):
        job = job_crud.create(db_session, JobCreateRequest(
            title=f"j{n}",
            salary=n,
            equity=n / 10,
            company_handle="c1",
        ))
        job_ids.append(job["id"])

    user_crud.apply_to_job(db_session, "u1", job_ids[0])
    user_crud.apply_to_job(db_session, "u2", job_ids[0])
    user_crud.apply_to_job(db_session, "u2", job_ids[1])

    return job_ids


@pytest.fixture
def u1_headers():
    """Authorization header for u1, a regular user"""
    return {"Authorization": f"Bearer {create_token('u1', is_admin=False)}"}


@pytest.fixture
def admin_headers():
    """Authorization header for u2, an admin"""
    return {"Authorization": f"Bearer {create_token('u2', is_admin=True)}"}
