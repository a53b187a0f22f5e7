"""
Pytest configuration and shared fixtures.
"""
import os

os.environ["JOBLY_ENV"] = "test"
os.environ.setdefault("SECRET_KEY", "secret-test")

import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from app.companies import CompanyRepository, get_company_repo
from app.db import Database
from app.jobs import JobRepository, get_job_repo
from app.users import UserRepository, get_user_repo
from security.auth import create_token


@pytest.fixture
def mock_db():
    """Query interface double; set execute.return_value / side_effect per test."""
    db = MagicMock(spec=Database)
    db.execute.return_value = []
    return db


@pytest.fixture
def u1_token() -> str:
    return create_token({"username": "u1", "isAdmin": False})


@pytest.fixture
def admin_token() -> str:
    return create_token({"username": "u3", "isAdmin": True})


@pytest.fixture
def u1_headers(u1_token) -> dict:
    return {"authorization": f"Bearer {u1_token}"}


@pytest.fixture
def admin_headers(admin_token) -> dict:
    return {"authorization": f"Bearer {admin_token}"}


@pytest.fixture
def job_repo():
    return MagicMock(spec=JobRepository)


@pytest.fixture
def company_repo():
    return MagicMock(spec=CompanyRepository)


@pytest.fixture
def user_repo():
    return MagicMock(spec=UserRepository)


@pytest.fixture
def client(job_repo, company_repo, user_repo):
    """TestClient with every repository replaced by a mock."""
    from main import app

    app.dependency_overrides[get_job_repo] = lambda: job_repo
    app.dependency_overrides[get_company_repo] = lambda: company_repo
    app.dependency_overrides[get_user_repo] = lambda: user_repo
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_jobs() -> list[dict]:
    """The three fixture jobs, newest first."""
    return [
        {"id": 3, "title": "arborist", "salary": 55000, "equity": "0", "companyHandle": "c3"},
        {"id": 2, "title": "software engineer", "salary": 150000, "equity": "0.356", "companyHandle": "c1"},
        {"id": 1, "title": "librarian", "salary": 75000, "equity": "0", "companyHandle": "c1"},
    ]
