"""
Shared fixtures: every repository test runs against both storage backends.
"""
import os

# Importing the app must not create a database file in the home directory
os.environ.setdefault("REFERRAL_TRACKER_STORAGE", "memory")

import pytest

from referral_tracker.database import Database
from referral_tracker.pydantic_models import CandidateCreate, PositionCreate, ReferralCreate
from referral_tracker.storage.memory import MemStorage
from referral_tracker.storage.sql import SQLStorage


@pytest.fixture(params=["memory", "sql"])
def storage(request):
    """Empty repository, once per backend"""
    if request.param == "memory":
        return MemStorage()

    database = Database("sqlite://")
    database.init_db()
    return SQLStorage(database)


@pytest.fixture
def make_position(storage):
    """Factory creating positions through the repository"""
    def _make(**overrides):
        data = {
            "title": "Backend Engineer",
            "company": "Acme",
            "location": "Tel Aviv",
            "description": "Build and run our APIs",
            "salary_min": 20000,
            "salary_max": 30000,
        }
        data.update(overrides)
        return storage.create_position(PositionCreate(**data))
    return _make


@pytest.fixture
def make_candidate(storage):
    """Factory creating candidates through the repository"""
    def _make(**overrides):
        data = {
            "full_name": "Jane Doe",
            "email": "jane@example.com",
            "phone": "050-0000000",
            "current_role": "Software Engineer",
            "skills": "Python, SQL",
            "experience": 5,
            "availability": "2weeks",
        }
        data.update(overrides)
        return storage.create_candidate(CandidateCreate(**data))
    return _make


@pytest.fixture
def make_referral(storage, make_position, make_candidate):
    """Factory creating a referral, plus its candidate and position when not given"""
    def _make(candidate=None, position=None, **overrides):
        candidate = candidate or make_candidate()
        position = position or make_position()
        data = {"candidate_id": candidate.id, "position_id": position.id}
        data.update(overrides)
        return storage.create_referral(ReferralCreate(**data))
    return _make
